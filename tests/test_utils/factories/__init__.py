from tests.test_utils.factories.notifications import NotificationRequestFactory

__all__ = ["NotificationRequestFactory"]
