"""
Shared pytest fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from timebill.config import Settings
from timebill.domain.models.user import UserRole
from timebill.domain.services.notification_service import NotificationService
from timebill.domain.services.numbering_service import InvoiceNumberSequence
from timebill.infrastructure.auth.password import hash_password
from timebill.infrastructure.container import MemoryRepositoryProvider
from timebill.infrastructure.email import EmailTemplateLoader, LoggingMailTransport
from timebill.infrastructure.repositories import InMemoryStore, create_memory_repositories
from timebill.main import create_application
from tests.helpers import FakeClock, add_user

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def repositories(store):
    return create_memory_repositories(store)


@pytest.fixture
def sequence(clock):
    return InvoiceNumberSequence(prefix="INV", clock=clock)


@pytest.fixture
def transport():
    return LoggingMailTransport()


@pytest.fixture
def notifications(transport):
    return NotificationService(EmailTemplateLoader(), transport)


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        environment="testing",
        jwt_secret_key="test-secret-key",
        storage_backend="memory",
        smtp_host=None,
        admin_email=None,
    )


@pytest.fixture
def app(settings, store, clock, transport):
    return create_application(
        settings=settings,
        provider=MemoryRepositoryProvider(store),
        clock=clock,
        transport=transport,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin(repositories, password_hash):
    return add_user(
        repositories, "Ada Admin", UserRole.ADMINISTRATOR,
        email="admin@example.com", password_hash=password_hash,
    )


@pytest.fixture
def employee(repositories, password_hash):
    return add_user(repositories, "Eve Employee", email="eve@example.com", password_hash=password_hash)


@pytest.fixture
def other_employee(repositories, password_hash):
    return add_user(repositories, "Oscar Other", email="oscar@example.com", password_hash=password_hash)


def _auth_headers(app, user):
    token = app.state.jwt_handler.create_access_token(user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app, admin):
    return _auth_headers(app, admin)


@pytest.fixture
def employee_headers(app, employee):
    return _auth_headers(app, employee)


@pytest.fixture
def other_employee_headers(app, other_employee):
    return _auth_headers(app, other_employee)
