from .errors import ConfigError
from .loader import load_config
from .models import DEFAULT_PUSH_ENDPOINT, AppConfig, ExpoConfig, ServerConfig

__all__ = [
    "DEFAULT_PUSH_ENDPOINT",
    "AppConfig",
    "ConfigError",
    "ExpoConfig",
    "ServerConfig",
    "load_config",
]
