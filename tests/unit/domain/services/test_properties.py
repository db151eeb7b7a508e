"""
Property-based tests for the billing, validation, filtering and reporting rules.
"""

import math
import string
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from hypothesis import given, settings, strategies as st

from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.audit_log import AuditAction, AuditEntityType
from timebill.domain.models.rate import Rate
from timebill.domain.services.aggregation_service import (
    aggregate_hours_by_client,
    aggregate_hours_by_employee,
    aggregate_revenue_by_consultant,
    calculate_billable_breakdown,
)
from timebill.domain.services.audit_service import (
    AuditLogFilters,
    create_audit_log_entry,
    filter_audit_logs,
)
from timebill.domain.services.billing_service import calculate_amount, sum_amounts
from timebill.domain.services.commission_service import calculate_commission, get_effective_allocation
from timebill.domain.services.filtering_service import (
    TimeEntryFilters,
    entry_matches,
    filter_entries_for_admin,
    filter_entries_for_employee,
)
from timebill.domain.services.invoice_service import InvoiceRequest, generate_invoice
from timebill.domain.services.numbering_service import InvoiceNumberSequence
from timebill.domain.services.rate_service import get_effective_rate
from timebill.domain.services.time_entry_service import can_user_modify_entry
from timebill.domain.services.validation import (
    validate_activity_date,
    validate_duration,
    validate_rate,
)
from tests.helpers import NOW, FakeClock, make_entry

EMPLOYEES = ["e1", "e2", "e3"]
CLIENTS = ["c1", "c2"]
BASE_DAY = date(2024, 3, 1)

money = st.decimals(min_value="0.01", max_value="1000", places=2).map(float)
hours = st.decimals(min_value="0.25", max_value="24", places=2).map(float)
days = st.integers(min_value=0, max_value=40).map(lambda n: BASE_DAY + timedelta(days=n))
any_value = st.one_of(
    st.none(),
    st.booleans(),
    st.text(max_size=5),
    st.integers(min_value=-100, max_value=100),
    st.floats(allow_nan=True, allow_infinity=True),
    st.decimals(allow_nan=False, allow_infinity=False, places=2, min_value=-50, max_value=50),
)


@st.composite
def entries(draw, max_size=12):
    count = draw(st.integers(min_value=0, max_value=max_size))
    return [
        make_entry(
            employee_id=draw(st.sampled_from(EMPLOYEES)),
            client_id=draw(st.sampled_from(CLIENTS)),
            activity_date=draw(days),
            rate=draw(money),
            duration=draw(hours),
            billable=draw(st.booleans()),
        )
        for _ in range(count)
    ]


@st.composite
def entry_filters(draw):
    start = draw(st.one_of(st.none(), days))
    end = draw(st.one_of(st.none(), days))
    return TimeEntryFilters(
        employee_id=draw(st.one_of(st.none(), st.sampled_from(EMPLOYEES))),
        client_id=draw(st.one_of(st.none(), st.sampled_from(CLIENTS))),
        start_date=start,
        end_date=end,
        billable=draw(st.one_of(st.none(), st.booleans())),
    )


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return math.isfinite(value)


class TestAmountProperties:
    @given(rate=money, duration=hours, billable=st.booleans())
    def test_amount_is_rounded_product_or_zero(self, rate, duration, billable):
        amount = calculate_amount(rate, duration, billable)
        if billable:
            expected = (Decimal(str(rate)) * Decimal(str(duration))).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
            assert amount == float(expected)
        else:
            assert amount == 0


class TestValidationProperties:
    @given(value=any_value)
    def test_duration_valid_iff_numeric_in_range(self, value):
        expected = _is_number(value) and 0 < value <= 24
        assert validate_duration(value).valid == expected

    @given(value=any_value)
    def test_rate_valid_iff_positive_number(self, value):
        expected = _is_number(value) and value > 0
        assert validate_rate(value).valid == expected

    @given(
        offset=st.integers(min_value=-60, max_value=10),
        reference=st.dates(min_value=date(2000, 1, 1), max_value=date(2090, 1, 1)),
    )
    def test_activity_date_window(self, offset, reference):
        activity_date = reference + timedelta(days=offset)
        expected = reference - timedelta(days=30) <= activity_date <= reference
        assert validate_activity_date(activity_date, reference).valid == expected

    @given(text=st.text(alphabet=string.ascii_letters + "-/", max_size=12))
    def test_non_dates_rejected(self, text):
        assert not validate_activity_date(text, date(2024, 3, 20)).valid


class TestFilteringProperties:
    @given(items=entries(), filters=entry_filters(), employee=st.sampled_from(EMPLOYEES))
    def test_employee_view_only_own_matching_entries(self, items, filters, employee):
        result = filter_entries_for_employee(items, employee, filters)

        for entry in result:
            assert entry.employee_id == employee
            assert filters.client_id is None or entry.client_id == filters.client_id
            assert filters.billable is None or entry.billable == filters.billable
            assert filters.start_date is None or entry.activity_date >= filters.start_date
            assert filters.end_date is None or entry.activity_date <= filters.end_date

    @given(items=entries(), filters=entry_filters())
    def test_admin_filters_conjunctive_and_complete(self, items, filters):
        result = filter_entries_for_admin(items, filters)

        assert all(entry_matches(entry, filters) for entry in result)
        assert len(result) == sum(1 for entry in items if entry_matches(entry, filters))


class TestModificationProperties:
    @given(
        minutes=st.integers(min_value=0, max_value=3 * 24 * 60),
        requester=st.sampled_from(EMPLOYEES),
    )
    def test_modify_iff_owner_within_window(self, minutes, requester):
        entry = make_entry(employee_id="e1", created_at=NOW)
        now = NOW + timedelta(minutes=minutes)
        expected = requester == "e1" and minutes <= 24 * 60
        assert can_user_modify_entry(entry, requester, now) == expected


class TestRateProperties:
    @given(default=st.one_of(st.none(), money), override=st.one_of(st.none(), money))
    def test_employee_override_then_default(self, default, override):
        rates = []
        if default is not None:
            rates.append(Rate(service_id="S", hourly_rate=default))
        if override is not None:
            rates.append(Rate(service_id="S", hourly_rate=override, employee_id="E"))

        expected = override if override is not None else default
        assert get_effective_rate(rates, "S", "E") == expected
        assert get_effective_rate(rates, "S", "other") == default


class TestInvoiceProperties:
    @given(
        items=entries(),
        client_id=st.sampled_from(CLIENTS),
        start=days,
        length=st.integers(min_value=0, max_value=40),
    )
    def test_line_items_are_exactly_matching_entries(self, items, client_id, start, length):
        end = start + timedelta(days=length)
        invoice = generate_invoice(
            InvoiceRequest(client_id, start, end), items, set(), InvoiceNumberSequence(clock=FakeClock()), NOW
        )
        expected = [
            entry for entry in items
            if entry.client_id == client_id and entry.billable and start <= entry.activity_date <= end
        ]

        assert [item.time_entry_id for item in invoice.line_items] == [entry.id for entry in expected]
        assert [item.amount for item in invoice.line_items] == [entry.amount for entry in expected]
        assert invoice.total == sum_amounts(entry.amount for entry in expected)

    @given(count=st.integers(min_value=1, max_value=200))
    @settings(max_examples=20)
    def test_sequence_numbers_distinct(self, count):
        sequence = InvoiceNumberSequence(clock=FakeClock())
        taken = set()
        for _ in range(count):
            taken.add(sequence.next_number(taken))
        assert len(taken) == count


class TestCommissionProperties:
    @given(
        amount=st.floats(min_value=0, max_value=1e7, allow_nan=False),
        percentage=st.floats(min_value=0, max_value=100, allow_nan=False),
    )
    def test_in_domain(self, amount, percentage):
        assert calculate_commission(amount, percentage) == amount * percentage / 100

    @given(
        amount=st.floats(min_value=0, max_value=1e7, allow_nan=False),
        percentage=st.one_of(
            st.floats(min_value=100.001, max_value=1e6),
            st.floats(max_value=-0.001, min_value=-1e6),
            st.just(float("nan")),
        ),
    )
    def test_out_of_domain_percentage_is_zero(self, amount, percentage):
        assert calculate_commission(amount, percentage) == 0

    @given(amount=st.floats(max_value=-0.01, min_value=-1e7), percentage=st.floats(min_value=0, max_value=100))
    def test_negative_amount_is_zero(self, amount, percentage):
        assert calculate_commission(amount, percentage) == 0


class TestAggregationProperties:
    @given(items=entries())
    def test_group_sums_match_raw_sums(self, items):
        total_hours = sum(entry.duration for entry in items)
        billable_hours = sum(entry.duration for entry in items if entry.billable)

        by_employee = aggregate_hours_by_employee(items)
        by_client = aggregate_hours_by_client(items)
        breakdown = calculate_billable_breakdown(items)
        revenue = aggregate_revenue_by_consultant(items)

        assert abs(sum(row.total_hours for row in by_employee) - total_hours) < 1e-6
        assert abs(sum(row.total_hours for row in by_client) - total_hours) < 1e-6
        assert abs(breakdown.billable_hours - billable_hours) < 1e-6
        assert abs(breakdown.total_hours - total_hours) < 1e-6
        assert sum_amounts(row.total_revenue for row in revenue) == sum_amounts(
            entry.amount for entry in items if entry.billable
        )
        billing_employees = {entry.employee_id for entry in items if entry.billable}
        assert {row.employee_id for row in revenue} == billing_employees

    @given(items=entries())
    def test_per_employee_hours(self, items):
        for row in aggregate_hours_by_employee(items):
            raw = sum(entry.duration for entry in items if entry.employee_id == row.employee_id)
            assert abs(row.total_hours - raw) < 1e-6


@st.composite
def audit_entries(draw):
    count = draw(st.integers(min_value=0, max_value=10))
    return [
        create_audit_log_entry(
            user_id=draw(st.sampled_from(["u1", "u2"])),
            action=draw(st.sampled_from(list(AuditAction))),
            entity_type=draw(st.sampled_from(list(AuditEntityType))),
            entity_id="x",
            now=datetime.combine(draw(days), datetime.min.time()) + timedelta(hours=draw(st.integers(0, 23))),
        )
        for _ in range(count)
    ]


class TestAuditProperties:
    @given(
        items=audit_entries(),
        user_id=st.one_of(st.none(), st.sampled_from(["u1", "u2"])),
        action=st.one_of(st.none(), st.sampled_from(list(AuditAction))),
        entity_type=st.one_of(st.none(), st.sampled_from(list(AuditEntityType))),
        start=st.one_of(st.none(), days),
        end=st.one_of(st.none(), days),
    )
    def test_every_result_matches_all_filters(self, items, user_id, action, entity_type, start, end):
        filters = AuditLogFilters(user_id, action, entity_type, start, end)
        for entry in filter_audit_logs(items, filters):
            assert user_id is None or entry.user_id == user_id
            assert action is None or entry.action == action
            assert entity_type is None or entry.entity_type == entity_type
            assert start is None or entry.timestamp.date() >= start
            assert end is None or entry.timestamp.date() <= end

    @given(items=audit_entries())
    def test_no_filters_returns_input(self, items):
        assert filter_audit_logs(items, AuditLogFilters()) == items


class TestAllocationProperties:
    @given(percentages=st.lists(st.floats(min_value=0, max_value=100), min_size=1, max_size=5))
    def test_latest_allocation_used(self, percentages):
        allocations = [
            EmployeeAllocation(employee_id="e1", percentage=p, effective_from=NOW + timedelta(days=i))
            for i, p in enumerate(percentages)
        ]
        assert get_effective_allocation(allocations, "e1").percentage == percentages[-1]
