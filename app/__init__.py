"""Watch release notification service."""
