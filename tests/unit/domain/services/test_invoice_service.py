"""
Unit tests for invoice generation.
"""

from datetime import date

import pytest

from timebill.domain.models.base import ValidationError
from timebill.domain.models.invoice import AdditionalCharge, InvoiceStatus, LineItemType
from timebill.domain.services.invoice_service import (
    InvoiceRequest,
    PartyInfo,
    build_invoice_document,
    calculate_invoice_totals,
    create_line_items_from_entries,
    generate_invoice,
    get_billable_entries_for_invoice,
    replace_additional_charges,
    validate_invoice_request,
)
from timebill.domain.services.numbering_service import InvoiceNumberSequence
from tests.helpers import NOW, FakeClock, make_entry

MARCH = (date(2024, 3, 1), date(2024, 3, 31))


class TestInvoiceService:
    """Test cases for invoice generation."""

    def setup_method(self):
        self.sequence = InvoiceNumberSequence(clock=FakeClock())
        self.entries = [
            make_entry(client_id="C", activity_date=date(2024, 3, 5), rate=100, duration=4, memo="Design"),
            make_entry(client_id="C", activity_date=date(2024, 3, 12), rate=100, duration=6),
            make_entry(client_id="C", activity_date=date(2024, 3, 13), rate=100, duration=1, billable=False),
            make_entry(client_id="D", activity_date=date(2024, 3, 14), rate=100, duration=1),
            make_entry(client_id="C", activity_date=date(2024, 4, 1), rate=100, duration=1),
        ]

    def _generate(self, charges=()):
        request = InvoiceRequest("C", *MARCH, additional_charges=charges)
        return generate_invoice(request, self.entries, set(), self.sequence, now=NOW)

    def test_selects_billable_entries_of_client_in_range(self):
        selected = get_billable_entries_for_invoice(self.entries, "C", *MARCH)
        assert selected == self.entries[:2]

    def test_two_entries_total_thousand(self):
        invoice = self._generate()

        assert invoice.subtotal == 1000.0
        assert invoice.total == 1000.0
        assert len(invoice.line_items) == 2
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.invoice_number == "INV-2024-000001"
        assert invoice.generated_at == NOW

    def test_line_items_copy_entry_amounts(self):
        invoice = self._generate()

        for item, entry in zip(invoice.line_items, self.entries[:2]):
            assert item.time_entry_id == entry.id
            assert item.amount == entry.amount
            assert item.quantity == entry.duration
            assert item.invoice_id == invoice.id
        assert invoice.line_items[0].description == "Design"
        assert invoice.line_items[1].description == "Service on 2024-03-12"

    def test_additional_charges_follow_time_lines(self):
        invoice = self._generate((AdditionalCharge("Travel", 120.5),))

        charge = invoice.line_items[-1]
        assert charge.type == LineItemType.ADDITIONAL_CHARGE
        assert charge.quantity == 1
        assert charge.time_entry_id is None
        assert invoice.total == 1120.5

    def test_empty_invoice_allowed(self):
        request = InvoiceRequest("nobody", *MARCH)
        invoice = generate_invoice(request, self.entries, set(), self.sequence, now=NOW)
        assert invoice.line_items == []
        assert invoice.total == 0.0

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_invoice_request(InvoiceRequest("C", date(2024, 3, 31), date(2024, 3, 1)))
        assert "end_date" in exc_info.value.errors

    def test_bad_charges_reported_by_index(self):
        request = InvoiceRequest("C", *MARCH, additional_charges=(
            AdditionalCharge("", 10), AdditionalCharge("Fee", 0),
        ))
        with pytest.raises(ValidationError) as exc_info:
            validate_invoice_request(request)
        assert set(exc_info.value.errors) == {
            "additional_charges[0].description",
            "additional_charges[1].amount",
        }

    def test_replace_charges_keeps_time_lines(self):
        invoice = self._generate((AdditionalCharge("Travel", 100),))
        replace_additional_charges(invoice, [AdditionalCharge("Lodging", 50), AdditionalCharge("Meals", 25)])

        assert len(invoice.time_entry_items) == 2
        assert [item.description for item in invoice.charge_items] == ["Lodging", "Meals"]
        assert invoice.total == 1075.0

    def test_totals_and_document(self):
        items = create_line_items_from_entries(self.entries[:1], "inv")
        assert calculate_invoice_totals(items).subtotal == 400.0

        invoice = self._generate()
        document = build_invoice_document(invoice, PartyInfo("Client C", "1 Road"), PartyInfo("Us"))
        assert document.client.address == "1 Road"
        assert len(document.line_items) == 2
