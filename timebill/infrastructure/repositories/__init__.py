"""
Repository implementations: in-memory and SQLAlchemy.
"""

from sqlalchemy.orm import Session

from timebill.domain.repositories import Repositories
from timebill.infrastructure.repositories.audit_log_repository import SQLAlchemyAuditLogRepository
from timebill.infrastructure.repositories.client_repository import (
    SQLAlchemyClientRepository,
    SQLAlchemyServiceRepository,
)
from timebill.infrastructure.repositories.invoice_repository import SQLAlchemyInvoiceRepository
from timebill.infrastructure.repositories.memory import InMemoryStore, create_memory_repositories
from timebill.infrastructure.repositories.rate_repository import (
    SQLAlchemyAllocationRepository,
    SQLAlchemyBillingRuleRepository,
    SQLAlchemyRateRepository,
)
from timebill.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository
from timebill.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def create_sqlalchemy_repositories(session: Session) -> Repositories:
    """Bundle every SQLAlchemy repository over one session."""
    return Repositories(
        users=SQLAlchemyUserRepository(session),
        clients=SQLAlchemyClientRepository(session),
        services=SQLAlchemyServiceRepository(session),
        rates=SQLAlchemyRateRepository(session),
        time_entries=SQLAlchemyTimeEntryRepository(session),
        allocations=SQLAlchemyAllocationRepository(session),
        invoices=SQLAlchemyInvoiceRepository(session),
        billing_rules=SQLAlchemyBillingRuleRepository(session),
        audit_logs=SQLAlchemyAuditLogRepository(session),
    )


__all__ = [
    "InMemoryStore",
    "create_memory_repositories",
    "create_sqlalchemy_repositories",
]
