"""Audit logging."""
from .audit_logger import AuditLogger, AuditStorage, InMemoryAuditStorage

__all__ = ["AuditLogger", "AuditStorage", "InMemoryAuditStorage"]
