"""
Notification dispatch with retry.

Implements:
- Provider registry keyed by channel
- Fixed-count retry with linear backoff (attempt x retry_delay)
- In-memory queue of payloads whose attempts were exhausted
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict, List

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from ..models import NotificationChannel, NotificationPayload
from ..monitoring import get_logger, metrics
from .providers import EmailProvider, NotificationProvider, SMSProvider, WebhookProvider

logger = get_logger(__name__)


class NotificationDeliveryError(Exception):
    """Raised when a provider reports that it did not deliver a payload."""

    def __init__(self, channel: str, recipient: str):
        super().__init__(f"{channel} provider refused delivery to {recipient}")
        self.channel = channel
        self.recipient = recipient


class NotificationService:
    """
    Sends notifications through registered providers.

    Email, SMS and webhook providers are registered by default; registering
    another provider for a channel replaces the existing one.
    """

    def __init__(
        self,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize notification service.

        Args:
            retry_attempts: Delivery attempts per payload
            retry_delay: Base delay in seconds; attempt N waits N x retry_delay
            sleep: Coroutine used to wait between attempts
        """
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        if retry_delay < 0:
            raise ValueError("retry_delay must not be negative")

        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._providers: Dict[NotificationChannel, NotificationProvider] = {}
        self._queue: List[NotificationPayload] = []

        self.register_provider(EmailProvider())
        self.register_provider(SMSProvider())
        self.register_provider(WebhookProvider())

    def register_provider(self, provider: NotificationProvider) -> None:
        self._providers[provider.channel] = provider

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "notification_attempt_failed",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()),
            retry_in=retry_state.next_action.sleep,
        )

    async def _attempt(self, provider: NotificationProvider, payload: NotificationPayload) -> None:
        try:
            delivered = await provider.send(payload)
        except Exception:
            metrics.notification_attempts_total.labels(channel=payload.channel, status="error").inc()
            raise

        if not delivered:
            metrics.notification_attempts_total.labels(channel=payload.channel, status="failed").inc()
            raise NotificationDeliveryError(payload.channel, payload.recipient)

        metrics.notification_attempts_total.labels(channel=payload.channel, status="success").inc()

    async def _deliver(self, payload: NotificationPayload) -> bool:
        provider = self._providers.get(payload.channel)

        if provider is None:
            logger.error("notification_provider_missing", channel=payload.channel)
            return False

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_incrementing(start=self.retry_delay, increment=self.retry_delay),
            retry=retry_if_exception_type(Exception),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    await self._attempt(provider, payload)
        except Exception as e:
            logger.error(
                "notification_delivery_exhausted",
                channel=payload.channel,
                recipient=payload.recipient,
                attempts=self.retry_attempts,
                error=str(e),
            )
            return False

        return True

    async def send(self, payload: NotificationPayload) -> bool:
        """
        Deliver a payload, queueing it for later if every attempt fails.

        Returns:
            bool: True on the first successful attempt
        """
        if await self._deliver(payload):
            return True

        if payload.channel in self._providers:
            self._queue.append(payload)
            metrics.notification_queue_depth.set(len(self._queue))
        return False

    async def send_batch(self, payloads: List[NotificationPayload]) -> Dict[str, int]:
        sent = 0
        failed = 0

        for payload in payloads:
            if await self.send(payload):
                sent += 1
            else:
                failed += 1

        return {"sent": sent, "failed": failed}

    def get_queued_notifications(self) -> List[NotificationPayload]:
        return list(self._queue)

    async def process_queue(self) -> int:
        """
        Make one more delivery pass over the queued payloads.

        The queue is drained up front; payloads that fail again are dropped.

        Returns:
            int: Number of payloads delivered on this pass
        """
        to_process = self._queue
        self._queue = []
        metrics.notification_queue_depth.set(0)

        processed = 0
        for payload in to_process:
            if await self._deliver(payload):
                processed += 1

        logger.info(
            "notification_queue_processed",
            processed=processed,
            dropped=len(to_process) - processed,
        )
        return processed
