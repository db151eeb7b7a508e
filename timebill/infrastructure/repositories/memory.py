"""
In-process repository implementations.

An InMemoryStore owns the data; the application (or a test) creates one and
hands it to the repositories. Entities are copied on the way in and out so
callers never share state with the store.
"""

import copy
import threading
from typing import Dict, Generic, List, Optional, Set, TypeVar

from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.audit_log import AuditLogEntry
from timebill.domain.models.base import DuplicateEntityError
from timebill.domain.models.billing_rule import BillingRule
from timebill.domain.models.client import Client
from timebill.domain.models.invoice import Invoice
from timebill.domain.models.rate import Rate
from timebill.domain.models.service import Service
from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.models.user import User, UserRole
from timebill.domain.repositories import (
    AllocationRepository,
    AuditLogRepository,
    BillingRuleRepository,
    ClientRepository,
    InvoiceRepository,
    RateRepository,
    Repositories,
    ServiceRepository,
    TimeEntryRepository,
    UserRepository,
)
from timebill.domain.services.filtering_service import TimeEntryFilters, filter_entries_for_admin

T = TypeVar("T")


class InMemoryStore:
    """Dict-backed tables keyed by entity id."""

    def __init__(self):
        self.lock = threading.RLock()
        self.users: Dict[str, User] = {}
        self.clients: Dict[str, Client] = {}
        self.services: Dict[str, Service] = {}
        self.rates: Dict[str, Rate] = {}
        self.time_entries: Dict[str, TimeEntry] = {}
        self.allocations: Dict[str, EmployeeAllocation] = {}
        self.invoices: Dict[str, Invoice] = {}
        self.billing_rules: Dict[str, BillingRule] = {}
        self.audit_logs: List[AuditLogEntry] = []

    def clear(self) -> None:
        with self.lock:
            for table in (
                self.users, self.clients, self.services, self.rates, self.time_entries,
                self.allocations, self.invoices, self.billing_rules,
            ):
                table.clear()
            self.audit_logs.clear()


class _InMemoryTable(Generic[T]):
    """Shared save/get/list behaviour over one store table."""

    table_name: str = ""

    def __init__(self, store: InMemoryStore):
        self.store = store

    @property
    def _table(self) -> Dict[str, T]:
        return getattr(self.store, self.table_name)

    def save(self, entity: T) -> T:
        with self.store.lock:
            self._table[entity.id] = copy.deepcopy(entity)
            return copy.deepcopy(self._table[entity.id])

    def get_by_id(self, entity_id: str) -> Optional[T]:
        with self.store.lock:
            entity = self._table.get(entity_id)
            return copy.deepcopy(entity) if entity is not None else None

    def _all(self) -> List[T]:
        with self.store.lock:
            return [copy.deepcopy(entity) for entity in self._table.values()]


class InMemoryUserRepository(_InMemoryTable[User], UserRepository):
    table_name = "users"

    def save(self, user: User) -> User:
        with self.store.lock:
            existing = self.get_by_email(user.email)
            if existing is not None and existing.id != user.id:
                raise DuplicateEntityError("User", "email", user.email)
            return super().save(user)

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        for user in self._all():
            if user.email == email:
                return user
        return None

    def list_all(self, role: Optional[UserRole] = None) -> List[User]:
        users = self._all()
        if role is not None:
            users = [user for user in users if user.role == UserRole(role)]
        return users


class InMemoryClientRepository(_InMemoryTable[Client], ClientRepository):
    table_name = "clients"

    def list_all(self, active_only: bool = False) -> List[Client]:
        clients = [client for client in self._all() if client.active or not active_only]
        return sorted(clients, key=lambda client: client.name.lower())


class InMemoryServiceRepository(_InMemoryTable[Service], ServiceRepository):
    table_name = "services"

    def list_all(self, active_only: bool = False) -> List[Service]:
        services = [service for service in self._all() if service.active or not active_only]
        return sorted(services, key=lambda service: service.name.lower())


class InMemoryRateRepository(_InMemoryTable[Rate], RateRepository):
    table_name = "rates"

    def list_all(self, service_id: Optional[str] = None) -> List[Rate]:
        return [rate for rate in self._all() if service_id is None or rate.service_id == service_id]


class InMemoryTimeEntryRepository(_InMemoryTable[TimeEntry], TimeEntryRepository):
    table_name = "time_entries"

    def list(self, filters: Optional[TimeEntryFilters] = None) -> List[TimeEntry]:
        return filter_entries_for_admin(self._all(), filters)

    def delete(self, entry_id: str) -> bool:
        with self.store.lock:
            return self._table.pop(entry_id, None) is not None


class InMemoryAllocationRepository(_InMemoryTable[EmployeeAllocation], AllocationRepository):
    table_name = "allocations"

    def list_all(self, employee_id: Optional[str] = None) -> List[EmployeeAllocation]:
        return [
            allocation for allocation in self._all()
            if employee_id is None or allocation.employee_id == employee_id
        ]


class InMemoryInvoiceRepository(_InMemoryTable[Invoice], InvoiceRepository):
    table_name = "invoices"

    def save(self, invoice: Invoice) -> Invoice:
        with self.store.lock:
            for stored in self._table.values():
                if stored.invoice_number == invoice.invoice_number and stored.id != invoice.id:
                    raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number)
            return super().save(invoice)

    def list_all(self) -> List[Invoice]:
        return self._all()

    def existing_numbers(self) -> Set[str]:
        with self.store.lock:
            return {invoice.invoice_number for invoice in self._table.values()}


class InMemoryBillingRuleRepository(_InMemoryTable[BillingRule], BillingRuleRepository):
    table_name = "billing_rules"

    def list_all(self) -> List[BillingRule]:
        return self._all()


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        with self.store.lock:
            self.store.audit_logs.append(copy.deepcopy(entry))
        return entry

    def list_all(self) -> List[AuditLogEntry]:
        with self.store.lock:
            return [copy.deepcopy(entry) for entry in self.store.audit_logs]


def create_memory_repositories(store: InMemoryStore) -> Repositories:
    return Repositories(
        users=InMemoryUserRepository(store),
        clients=InMemoryClientRepository(store),
        services=InMemoryServiceRepository(store),
        rates=InMemoryRateRepository(store),
        time_entries=InMemoryTimeEntryRepository(store),
        allocations=InMemoryAllocationRepository(store),
        invoices=InMemoryInvoiceRepository(store),
        billing_rules=InMemoryBillingRuleRepository(store),
        audit_logs=InMemoryAuditLogRepository(store),
    )
