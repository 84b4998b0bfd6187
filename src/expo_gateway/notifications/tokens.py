from __future__ import annotations

import re

_EXPO_PUSH_TOKEN_PATTERN = re.compile(r"ExponentPushToken\[[A-Za-z0-9_-]+\]")


def is_expo_push_token(token: object) -> bool:
    """Return True when ``token`` has the ``ExponentPushToken[...]`` shape.

    The check is purely lexical and runs before any network call so a
    malformed token never costs a request to the push service.
    """
    if not isinstance(token, str):
        return False
    return _EXPO_PUSH_TOKEN_PATTERN.fullmatch(token) is not None
