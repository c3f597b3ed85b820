"""Notification dispatch."""
from .notification_service import NotificationDeliveryError, NotificationService
from .providers import EmailProvider, NotificationProvider, SMSProvider, WebhookProvider

__all__ = [
    "EmailProvider",
    "NotificationDeliveryError",
    "NotificationProvider",
    "NotificationService",
    "SMSProvider",
    "WebhookProvider",
]
