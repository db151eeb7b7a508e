"""
Invoice domain model.
Invoices snapshot the amounts of the time entries they were generated from;
later edits to those entries never change an issued invoice.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional
from enum import Enum

from timebill.domain.models.base import BaseEntity, BusinessRuleViolation, utcnow


class InvoiceStatus(str, Enum):
    """Invoice status."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


class LineItemType(str, Enum):
    """Source of an invoice line item."""
    TIME_ENTRY = "time_entry"
    ADDITIONAL_CHARGE = "additional_charge"


# Allowed forward moves; anything else is rejected.
INVOICE_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.PAID},
    InvoiceStatus.SENT: {InvoiceStatus.PAID},
    InvoiceStatus.PAID: set(),
}


@dataclass(frozen=True)
class AdditionalCharge:
    """Free-form charge added to an invoice on top of logged time."""

    description: str
    amount: float


@dataclass
class InvoiceLineItem(BaseEntity):
    """Line item owned by an invoice."""

    invoice_id: str
    description: str
    quantity: float
    rate: float
    amount: float
    type: LineItemType = LineItemType.TIME_ENTRY
    time_entry_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.type, LineItemType):
            self.type = LineItemType(self.type)


@dataclass
class Invoice(BaseEntity):
    """Invoice aggregate root."""

    invoice_number: str
    client_id: str
    start_date: date
    end_date: date
    subtotal: float = 0.0
    total: float = 0.0
    status: InvoiceStatus = InvoiceStatus.DRAFT
    generated_at: datetime = field(default_factory=utcnow)
    line_items: List[InvoiceLineItem] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.status, InvoiceStatus):
            self.status = InvoiceStatus(self.status)

    @property
    def is_draft(self) -> bool:
        return self.status == InvoiceStatus.DRAFT

    @property
    def time_entry_items(self) -> List[InvoiceLineItem]:
        return [item for item in self.line_items if item.type == LineItemType.TIME_ENTRY]

    @property
    def charge_items(self) -> List[InvoiceLineItem]:
        return [item for item in self.line_items if item.type == LineItemType.ADDITIONAL_CHARGE]

    def can_transition_to(self, status: InvoiceStatus) -> bool:
        return status == self.status or status in INVOICE_TRANSITIONS[self.status]

    def change_status(self, status: InvoiceStatus, now: Optional[datetime] = None) -> None:
        """Move the invoice forward through draft, sent and paid."""
        status = InvoiceStatus(status)
        if not self.can_transition_to(status):
            raise BusinessRuleViolation(
                f"Invoice cannot move from {self.status.value} to {status.value}"
            )
        self.status = status
        self.mark_as_updated(now)
