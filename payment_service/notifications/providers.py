"""
Notification providers.

The default providers simulate delivery by logging; each one owns exactly
one channel.
"""
from typing import Protocol, runtime_checkable

from ..models import NotificationChannel, NotificationPayload
from ..monitoring import get_logger

logger = get_logger(__name__)

SMS_MAX_LENGTH = 160


@runtime_checkable
class NotificationProvider(Protocol):
    """Channel-specific sender; returns False when delivery was refused."""

    channel: NotificationChannel

    async def send(self, payload: NotificationPayload) -> bool:
        ...


class EmailProvider:
    channel: NotificationChannel = "email"

    async def send(self, payload: NotificationPayload) -> bool:
        logger.info("email_sent", recipient=payload.recipient, subject=payload.subject)
        return True


class SMSProvider:
    channel: NotificationChannel = "sms"

    async def send(self, payload: NotificationPayload) -> bool:
        logger.info("sms_sent", recipient=payload.recipient, body=payload.body[:SMS_MAX_LENGTH])
        return True


class WebhookProvider:
    channel: NotificationChannel = "webhook"

    async def send(self, payload: NotificationPayload) -> bool:
        logger.info("webhook_posted", url=payload.recipient, payload=payload.model_dump_json())
        return True
