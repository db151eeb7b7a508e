"""
Audit log repository implementation using SQLAlchemy. Insert only.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from timebill.domain.models.audit_log import AuditLogEntry
from timebill.domain.repositories.audit_log_repository import AuditLogRepository
from timebill.infrastructure.db.models import AuditLogModel
from timebill.infrastructure.mappers.audit_log_mapper import AuditLogMapper


class SQLAlchemyAuditLogRepository(AuditLogRepository):
    """SQLAlchemy implementation of the append-only audit log."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = AuditLogMapper()

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        self.session.add(self.mapper.domain_to_model(entry))
        self.session.flush()
        return entry

    def list_all(self) -> List[AuditLogEntry]:
        query = select(AuditLogModel).order_by(AuditLogModel.timestamp)
        return [self.mapper.model_to_domain(model) for model in self.session.scalars(query)]
