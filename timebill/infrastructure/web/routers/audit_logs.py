"""
Audit log router.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from timebill.application.dto.audit_log_dto import AuditLogListResponseDTO, AuditLogResponseDTO
from timebill.application.use_cases.audit_log_use_cases import ListAuditLogsUseCase
from timebill.application.use_cases.report_use_cases import check_date_range
from timebill.domain.models.audit_log import AuditAction, AuditEntityType
from timebill.domain.services.audit_service import AuditLogFilters
from timebill.infrastructure.auth.dependencies import AdminUser
from timebill.infrastructure.web.dependencies import RepositoriesDep

router = APIRouter()


@router.get("", response_model=AuditLogListResponseDTO)
def list_audit_logs(
    admin: AdminUser,
    repositories: RepositoriesDep,
    user_id: Optional[str] = Query(None, description="Acting user"),
    action: Optional[AuditAction] = Query(None, description="create, update or delete"),
    entity_type: Optional[AuditEntityType] = Query(None, description="Kind of entity changed"),
    start_date: Optional[date] = Query(None, description="From date (inclusive)"),
    end_date: Optional[date] = Query(None, description="To date (inclusive)")
):
    """Audit entries matching every supplied filter, newest first."""
    check_date_range(start_date, end_date)
    filters = AuditLogFilters(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        start_date=start_date,
        end_date=end_date,
    )
    entries = ListAuditLogsUseCase(repositories).execute(filters)
    return AuditLogListResponseDTO(
        entries=[AuditLogResponseDTO.from_domain(entry) for entry in entries],
        total=len(entries),
    )
