"""
Repository interfaces and the per-request bundle that use cases receive.
"""

from dataclasses import dataclass

from timebill.domain.repositories.user_repository import UserRepository
from timebill.domain.repositories.client_repository import ClientRepository
from timebill.domain.repositories.service_repository import ServiceRepository
from timebill.domain.repositories.rate_repository import RateRepository
from timebill.domain.repositories.time_entry_repository import TimeEntryRepository
from timebill.domain.repositories.allocation_repository import AllocationRepository
from timebill.domain.repositories.invoice_repository import InvoiceRepository
from timebill.domain.repositories.billing_rule_repository import BillingRuleRepository
from timebill.domain.repositories.audit_log_repository import AuditLogRepository


@dataclass
class Repositories:
    """All repositories sharing one persistence session."""

    users: UserRepository
    clients: ClientRepository
    services: ServiceRepository
    rates: RateRepository
    time_entries: TimeEntryRepository
    allocations: AllocationRepository
    invoices: InvoiceRepository
    billing_rules: BillingRuleRepository
    audit_logs: AuditLogRepository


__all__ = [
    "Repositories",
    "UserRepository",
    "ClientRepository",
    "ServiceRepository",
    "RateRepository",
    "TimeEntryRepository",
    "AllocationRepository",
    "InvoiceRepository",
    "BillingRuleRepository",
    "AuditLogRepository",
]
