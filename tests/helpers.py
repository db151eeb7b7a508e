"""
Builders and fakes shared by the test suite.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from timebill.domain.models.client import Client
from timebill.domain.models.rate import Rate
from timebill.domain.models.service import Service
from timebill.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timebill.domain.models.user import User, UserRole
from timebill.domain.services.billing_service import calculate_amount

NOW = datetime(2024, 3, 20, 12, 0, 0)
TODAY = NOW.date()


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class PlainPasswordHasher:
    """Reversible stand-in for bcrypt in use case tests."""

    def hash(self, password: str) -> str:
        return f"plain:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"plain:{password}"


def make_entry(
    employee_id: str = "emp-1",
    client_id: str = "client-1",
    service_id: str = "service-1",
    activity_date: date = TODAY,
    rate: float = 100.0,
    duration: float = 1.0,
    billable: bool = True,
    memo: Optional[str] = None,
    created_at: datetime = NOW,
    **kwargs
) -> TimeEntry:
    return TimeEntry(
        employee_id=employee_id,
        client_id=client_id,
        service_id=service_id,
        activity_date=activity_date,
        rate=rate,
        duration=duration,
        billable=billable,
        memo=memo,
        amount=kwargs.pop("amount", calculate_amount(rate, duration, billable)),
        status=kwargs.pop("status", TimeEntryStatus.PENDING),
        created_at=created_at,
        updated_at=created_at,
        **kwargs
    )


def add_user(repositories, name: str, role: UserRole = UserRole.EMPLOYEE, **kwargs) -> User:
    email = kwargs.pop("email", f"{name.lower().replace(' ', '.')}@example.com")
    return repositories.users.save(User(email=email, name=name, role=role, **kwargs))


def add_client(repositories, name: str = "Acme Corp", **kwargs) -> Client:
    return repositories.clients.save(Client(
        name=name,
        contact_email=kwargs.pop("contact_email", "billing@acme.test"),
        **kwargs
    ))


def add_service(repositories, name: str = "Consulting", **kwargs) -> Service:
    return repositories.services.save(Service(name=name, **kwargs))


def add_rate(
    repositories,
    service_id: str,
    hourly_rate: float,
    employee_id: Optional[str] = None,
    effective_from: datetime = NOW - timedelta(days=60)
) -> Rate:
    return repositories.rates.save(Rate(
        service_id=service_id,
        employee_id=employee_id,
        hourly_rate=hourly_rate,
        effective_from=effective_from,
    ))
