"""
Audit log domain model.
Entries are append-only and never mutated once recorded.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from timebill.domain.models.base import new_id, to_primitive, utcnow


class AuditAction(str, Enum):
    """Audited write actions."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class AuditEntityType(str, Enum):
    """Entity kinds that produce audit entries."""
    TIME_ENTRY = "time_entry"
    CLIENT = "client"
    RATE = "rate"
    SERVICE = "service"
    USER = "user"
    INVOICE = "invoice"
    ALLOCATION = "allocation"
    BILLING_RULE = "billing_rule"


@dataclass(frozen=True)
class AuditLogEntry:
    """Record of who changed what and when."""

    user_id: str
    action: AuditAction
    entity_type: AuditEntityType
    entity_id: str
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "action": to_primitive(self.action),
            "entity_type": to_primitive(self.entity_type),
            "entity_id": self.entity_id,
            "old_values": self.old_values,
            "new_values": self.new_values,
            "timestamp": self.timestamp.isoformat(),
        }
