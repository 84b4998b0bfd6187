"""HTTP gateway that forwards push notifications to the Expo push service."""
