"""
Tests for allocation, commission and payroll use cases.
"""

from datetime import date

import pytest

from timebill.application.dto.report_dto import SetAllocationRequestDTO
from timebill.application.use_cases.payroll_use_cases import (
    CommissionReportUseCase,
    ListAllocationsUseCase,
    PayrollBreakdownUseCase,
    SetAllocationUseCase,
)
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import EntityNotFoundError, ValidationError
from timebill.infrastructure.repositories import InMemoryStore, create_memory_repositories
from tests.helpers import FakeClock, add_client, add_user, make_entry

START = date(2024, 3, 1)
END = date(2024, 3, 31)


class TestAllocations:
    def setup_method(self):
        self.repositories = create_memory_repositories(InMemoryStore())
        self.clock = FakeClock()
        self.employee = add_user(self.repositories, "Eve Employee")

    def set(self, percentage, employee_id=None):
        return SetAllocationUseCase(self.repositories, self.clock).execute(
            "admin-1", employee_id or self.employee.id, SetAllocationRequestDTO(percentage=percentage)
        )

    def test_set_records_history(self):
        self.set(10)
        self.clock.advance(days=1)
        latest = self.set(15)

        history = ListAllocationsUseCase(self.repositories).execute(self.employee.id)
        assert [a.percentage for a in history] == [15, 10]
        assert latest.effective_from == self.clock.now
        assert self.repositories.audit_logs.list_all()[-1].entity_type == AuditEntityType.ALLOCATION

    @pytest.mark.parametrize("percentage", [-1, 100.5])
    def test_out_of_range_rejected(self, percentage):
        with pytest.raises(ValidationError) as exc_info:
            self.set(percentage)
        assert "percentage" in exc_info.value.errors

    @pytest.mark.parametrize("percentage", [0, 100])
    def test_bounds_accepted(self, percentage):
        assert self.set(percentage).percentage == percentage

    def test_unknown_employee(self):
        with pytest.raises(EntityNotFoundError):
            self.set(10, employee_id="ghost")


class TestCommissionAndPayroll:
    def setup_method(self):
        self.repositories = create_memory_repositories(InMemoryStore())
        self.clock = FakeClock()
        self.eve = add_user(self.repositories, "Eve Employee")
        self.oscar = add_user(self.repositories, "Oscar Other")
        self.acme = add_client(self.repositories)
        self.globex = add_client(self.repositories, "Globex", contact_email="ap@globex.test")

        save = self.repositories.time_entries.save
        save(make_entry(employee_id=self.eve.id, client_id=self.acme.id, activity_date=date(2024, 3, 4), duration=5))
        save(make_entry(employee_id=self.eve.id, client_id=self.globex.id, activity_date=date(2024, 3, 5), duration=5))
        save(make_entry(
            employee_id=self.eve.id, client_id=self.acme.id, activity_date=date(2024, 3, 6), duration=2, billable=False
        ))
        save(make_entry(employee_id=self.oscar.id, client_id=self.acme.id, activity_date=date(2024, 3, 7), duration=4))
        save(make_entry(employee_id=self.oscar.id, client_id=self.acme.id, activity_date=date(2024, 4, 2), duration=8))

        SetAllocationUseCase(self.repositories, self.clock).execute(
            "admin-1", self.eve.id, SetAllocationRequestDTO(percentage=20)
        )

    def test_commission_report(self):
        report = CommissionReportUseCase(self.repositories).execute(START, END)

        rows = {row.employee_id: row for row in report.rows}
        assert rows[self.eve.id].billable_amount == 1000.0
        assert rows[self.eve.id].allocation_percentage == 20
        assert rows[self.eve.id].commission == 200.0
        assert rows[self.eve.id].employee_name == "Eve Employee"
        assert rows[self.oscar.id].billable_amount == 400.0
        assert rows[self.oscar.id].commission == 0
        assert report.total_commission == 200.0

    def test_latest_allocation_applies(self):
        self.clock.advance(days=1)
        SetAllocationUseCase(self.repositories, self.clock).execute(
            "admin-1", self.eve.id, SetAllocationRequestDTO(percentage=25)
        )

        report = CommissionReportUseCase(self.repositories).execute(START, END)

        assert report.total_commission == 250.0

    def test_payroll_breakdown(self):
        report = PayrollBreakdownUseCase(self.repositories).execute(START, END)

        rows = {(row.employee_id, row.client_id): row for row in report.rows}
        assert len(rows) == 3
        eve_acme = rows[(self.eve.id, self.acme.id)]
        assert (eve_acme.total_hours, eve_acme.billable_hours, eve_acme.billable_amount) == (7, 5, 500.0)
        assert eve_acme.client_name == "Acme Corp"
        assert rows[(self.oscar.id, self.acme.id)].total_hours == 4

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError):
            CommissionReportUseCase(self.repositories).execute(END, START)
