"""
Notification copy package.

Serves push-notification copy from a process-wide TTL cache. Delivery lives
outside this service.
"""

from services.api.notifications.config import (
    DEFAULT_NOTIFICATION_CONFIG,
    NotificationConfig,
    NotificationConfigCache,
    NotificationCopy,
    get_notification_config,
    interpolate_copy,
)

__all__ = [
    "DEFAULT_NOTIFICATION_CONFIG",
    "NotificationConfig",
    "NotificationConfigCache",
    "NotificationCopy",
    "get_notification_config",
    "interpolate_copy",
]
