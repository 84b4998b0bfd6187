from tests.test_utils.fakes.notifications import FakePushSender

__all__ = ["FakePushSender"]
