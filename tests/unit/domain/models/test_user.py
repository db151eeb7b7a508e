"""
Unit tests for User and Rate models.
"""

from timebill.domain.models.rate import Rate
from timebill.domain.models.user import User, UserRole


class TestUser:
    def test_email_normalised(self):
        user = User(email="  Ada@Example.COM ", name="Ada")
        assert user.email == "ada@example.com"

    def test_role_coerced_and_admin_flag(self):
        user = User(email="a@b.co", name="Ada", role="administrator")

        assert user.role == UserRole.ADMINISTRATOR
        assert user.is_admin

    def test_to_dict_hides_password_hash(self):
        user = User(email="a@b.co", name="Ada", password_hash="secret")
        assert "password_hash" not in user.to_dict()


class TestRate:
    def test_default_rate_has_no_employee(self):
        assert Rate(service_id="s", hourly_rate=150).is_default
        assert not Rate(service_id="s", hourly_rate=200, employee_id="e").is_default
