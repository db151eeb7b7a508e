"""
Audit log mapper.
"""

from timebill.domain.models.audit_log import AuditAction, AuditEntityType, AuditLogEntry
from timebill.infrastructure.db.models import AuditLogModel


class AuditLogMapper:
    """Maps between AuditLogEntry and AuditLogModel."""

    def domain_to_model(self, entry: AuditLogEntry) -> AuditLogModel:
        return AuditLogModel(
            id=entry.id,
            user_id=entry.user_id,
            action=entry.action.value,
            entity_type=entry.entity_type.value,
            entity_id=entry.entity_id,
            old_values=entry.old_values,
            new_values=entry.new_values,
            timestamp=entry.timestamp,
        )

    def model_to_domain(self, model: AuditLogModel) -> AuditLogEntry:
        return AuditLogEntry(
            id=model.id,
            user_id=model.user_id,
            action=AuditAction(model.action),
            entity_type=AuditEntityType(model.entity_type),
            entity_id=model.entity_id,
            old_values=model.old_values,
            new_values=model.new_values,
            timestamp=model.timestamp,
        )
