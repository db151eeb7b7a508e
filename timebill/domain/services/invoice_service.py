"""
Invoice generation.
Builds an invoice snapshot from billable time entries and extra charges.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Collection, Iterable, List, Optional, Sequence

from timebill.domain.models.base import ValidationError, utcnow, new_id
from timebill.domain.models.invoice import (
    AdditionalCharge,
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    LineItemType,
)
from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.services.billing_service import format_currency, sum_amounts
from timebill.domain.services.numbering_service import InvoiceNumberSequence


@dataclass(frozen=True)
class InvoiceRequest:
    client_id: str
    start_date: date
    end_date: date
    additional_charges: Sequence[AdditionalCharge] = ()


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: float
    total: float


@dataclass(frozen=True)
class PartyInfo:
    name: str
    address: str = ""


@dataclass(frozen=True)
class InvoiceDocument:
    """Everything a renderer needs to lay out an invoice."""

    invoice: Invoice
    client: PartyInfo
    company: PartyInfo
    line_items: List[InvoiceLineItem] = field(default_factory=list)


def validate_invoice_request(request: InvoiceRequest) -> None:
    errors = {}
    if request.start_date > request.end_date:
        errors["end_date"] = ["End date must be on or after start date"]
    for index, charge in enumerate(request.additional_charges):
        if not charge.description or not charge.description.strip():
            errors.setdefault(f"additional_charges[{index}].description", []).append(
                "Description is required"
            )
        if charge.amount is None or charge.amount <= 0:
            errors.setdefault(f"additional_charges[{index}].amount", []).append(
                "Amount must be a positive number"
            )
    if errors:
        raise ValidationError.from_errors(errors)


def get_billable_entries_for_invoice(
    entries: Iterable[TimeEntry],
    client_id: str,
    start_date: date,
    end_date: date
) -> List[TimeEntry]:
    """Billable entries of the client dated within [start_date, end_date]."""
    return [
        entry for entry in entries
        if entry.client_id == client_id
        and entry.billable
        and start_date <= entry.activity_date <= end_date
    ]


def line_item_description(entry: TimeEntry) -> str:
    if entry.memo:
        return entry.memo
    return f"Service on {entry.activity_date.isoformat()}"


def create_line_items_from_entries(
    entries: Iterable[TimeEntry],
    invoice_id: str
) -> List[InvoiceLineItem]:
    """Amounts are copied from the entries, never recomputed."""
    return [
        InvoiceLineItem(
            invoice_id=invoice_id,
            time_entry_id=entry.id,
            description=line_item_description(entry),
            quantity=entry.duration,
            rate=entry.rate,
            amount=entry.amount,
            type=LineItemType.TIME_ENTRY,
        )
        for entry in entries
    ]


def create_line_items_from_charges(
    charges: Iterable[AdditionalCharge],
    invoice_id: str
) -> List[InvoiceLineItem]:
    return [
        InvoiceLineItem(
            invoice_id=invoice_id,
            time_entry_id=None,
            description=charge.description,
            quantity=1,
            rate=charge.amount,
            amount=charge.amount,
            type=LineItemType.ADDITIONAL_CHARGE,
        )
        for charge in charges
    ]


def calculate_invoice_totals(line_items: Iterable[InvoiceLineItem]) -> InvoiceTotals:
    """No tax or discounts; total equals subtotal."""
    subtotal = sum_amounts(item.amount for item in line_items)
    return InvoiceTotals(subtotal=subtotal, total=subtotal)


def generate_invoice(
    request: InvoiceRequest,
    entries: Iterable[TimeEntry],
    existing_numbers: Collection[str],
    sequence: InvoiceNumberSequence,
    now: Optional[datetime] = None
) -> Invoice:
    """
    Build a draft invoice for the client and date range in ``request``.
    The returned invoice is not persisted.
    """
    validate_invoice_request(request)
    now = now or utcnow()
    invoice_id = new_id()

    selected = get_billable_entries_for_invoice(
        entries, request.client_id, request.start_date, request.end_date
    )
    line_items = create_line_items_from_entries(selected, invoice_id)
    line_items.extend(create_line_items_from_charges(request.additional_charges, invoice_id))
    totals = calculate_invoice_totals(line_items)

    return Invoice(
        id=invoice_id,
        invoice_number=sequence.next_number(existing_numbers),
        client_id=request.client_id,
        start_date=request.start_date,
        end_date=request.end_date,
        subtotal=totals.subtotal,
        total=totals.total,
        status=InvoiceStatus.DRAFT,
        generated_at=now,
        line_items=line_items,
        created_at=now,
        updated_at=now,
    )


def replace_additional_charges(
    invoice: Invoice,
    charges: Sequence[AdditionalCharge],
    now: Optional[datetime] = None
) -> Invoice:
    """Swap the charge lines of a draft invoice and recompute totals in place."""
    validate_invoice_request(InvoiceRequest(
        client_id=invoice.client_id,
        start_date=invoice.start_date,
        end_date=invoice.end_date,
        additional_charges=charges,
    ))
    invoice.line_items = invoice.time_entry_items + create_line_items_from_charges(charges, invoice.id)
    totals = calculate_invoice_totals(invoice.line_items)
    invoice.subtotal = totals.subtotal
    invoice.total = totals.total
    invoice.mark_as_updated(now)
    return invoice


def build_invoice_document(
    invoice: Invoice,
    client: PartyInfo,
    company: PartyInfo
) -> InvoiceDocument:
    return InvoiceDocument(
        invoice=invoice,
        client=client,
        company=company,
        line_items=list(invoice.line_items),
    )


__all__ = [
    "InvoiceRequest",
    "InvoiceTotals",
    "PartyInfo",
    "InvoiceDocument",
    "validate_invoice_request",
    "get_billable_entries_for_invoice",
    "create_line_items_from_entries",
    "create_line_items_from_charges",
    "calculate_invoice_totals",
    "generate_invoice",
    "replace_additional_charges",
    "build_invoice_document",
    "format_currency",
]
