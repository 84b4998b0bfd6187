from tests.test_utils.strategies.tokens import expo_push_tokens, malformed_tokens

__all__ = ["expo_push_tokens", "malformed_tokens"]
