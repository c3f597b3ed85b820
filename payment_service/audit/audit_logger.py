"""
Audit trail for payment operations.

Events are append-only; the logger stores an enriched copy and never touches
the caller's event.
"""
from typing import Any, Dict, List, Protocol, runtime_checkable

from ..config import is_production_environment
from ..models import AuditEvent, AuditOutcome
from ..monitoring import get_logger, metrics

logger = get_logger(__name__)

_MISSING = object()


@runtime_checkable
class AuditStorage(Protocol):
    """Persistence backend for audit events."""

    async def save(self, event: AuditEvent) -> None:
        ...

    async def query(self, filters: Dict[str, Any]) -> List[AuditEvent]:
        ...


class InMemoryAuditStorage:
    """
    List-backed storage; query is a linear exact-match filter.

    Events are copied on the way in and out so callers cannot rewrite the
    stored trail.
    """

    def __init__(self) -> None:
        self._events: List[AuditEvent] = []

    async def save(self, event: AuditEvent) -> None:
        self._events.append(event.model_copy(deep=True))

    async def query(self, filters: Dict[str, Any]) -> List[AuditEvent]:
        """
        Return events whose fields equal every filter value, in insertion order.

        An empty filter matches every event; an unknown field matches none.
        """
        return [
            event.model_copy(deep=True)
            for event in self._events
            if all(getattr(event, key, _MISSING) == value for key, value in filters.items())
        ]

    def get_all(self) -> List[AuditEvent]:
        return [event.model_copy(deep=True) for event in self._events]


class AuditLogger:
    """
    Enriches and stores audit events.

    Args:
        storage: Backend the enriched events are saved to
        service_name: Tag added to every event's details
        environment: Deployment environment tag; events are echoed to the
            structured log outside production
    """

    def __init__(
        self,
        storage: AuditStorage,
        service_name: str = "payment-service",
        environment: str = "development",
    ):
        self.storage = storage
        self.service_name = service_name
        self.environment = environment

    async def log(self, event: AuditEvent) -> None:
        enriched_event = event.model_copy(
            update={
                "details": {
                    **(event.details or {}),
                    "service": self.service_name,
                    "environment": self.environment,
                }
            }
        )

        try:
            await self.storage.save(enriched_event)
        except Exception:
            logger.exception(
                "audit_storage_failed",
                event_type=event.event_type,
                resource=event.resource,
            )
            raise

        metrics.audit_events_total.labels(
            event_type=event.event_type, outcome=event.outcome.value
        ).inc()

        if not is_production_environment(self.environment):
            logger.info(
                "audit_event",
                event_type=event.event_type,
                action=event.action,
                resource=event.resource,
                actor=event.actor,
                outcome=event.outcome.value,
            )

    async def get_events_by_actor(self, actor_id: str) -> List[AuditEvent]:
        return await self.storage.query({"actor": actor_id})

    async def get_events_by_resource(self, resource_id: str) -> List[AuditEvent]:
        return await self.storage.query({"resource": resource_id})

    async def get_failed_events(self) -> List[AuditEvent]:
        return await self.storage.query({"outcome": AuditOutcome.FAILURE})

    async def get_events_by_type(self, event_type: str) -> List[AuditEvent]:
        return await self.storage.query({"event_type": event_type})
