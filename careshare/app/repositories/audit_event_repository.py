from abc import ABC, abstractmethod

from careshare.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, event: AuditEvent) -> AuditEvent:
        """Create a new audit event"""
        pass
