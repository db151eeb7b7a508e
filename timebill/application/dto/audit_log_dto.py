"""
Audit log DTOs.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from timebill.application.dto.base_dto import BaseDTO
from timebill.domain.models.audit_log import AuditAction, AuditEntityType, AuditLogEntry


class AuditLogResponseDTO(BaseDTO):
    id: str
    user_id: str
    action: AuditAction
    entity_type: AuditEntityType
    entity_id: str
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    timestamp: datetime

    @classmethod
    def from_domain(cls, entry: AuditLogEntry) -> "AuditLogResponseDTO":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            action=entry.action,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            old_values=entry.old_values,
            new_values=entry.new_values,
            timestamp=entry.timestamp,
        )


class AuditLogListResponseDTO(BaseDTO):
    entries: List[AuditLogResponseDTO]
    total: int
