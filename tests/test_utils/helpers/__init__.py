"""Test helpers."""

from tests.test_utils.helpers.tickets import EXPO_ENDPOINT, PUSH_PATH, error_ticket, ok_ticket, wrap

__all__ = [
    "EXPO_ENDPOINT",
    "PUSH_PATH",
    "error_ticket",
    "ok_ticket",
    "wrap",
]
