"""
Audit Sink

Append-only destination for security events. Writing an audit event is
best-effort: callers go through record_safely so that a failing sink can
never fail or block the operation being audited.
"""

import logging
from abc import ABC, abstractmethod

from bizauth.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class IAuditSink(ABC):
    @abstractmethod
    async def record(self, event: AuditEvent) -> None:
        pass


async def record_safely(sink: IAuditSink, event: AuditEvent) -> None:
    try:
        await sink.record(event)
    except Exception:
        logger.error(
            f"Audit write failed: context={event.context} business={event.business_id}",
            exc_info=True,
        )
