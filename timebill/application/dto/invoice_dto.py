"""
Invoice DTOs for the application layer.
Data Transfer Objects for invoice and billing operations.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from timebill.application.dto.base_dto import RequestDTO, ResponseDTO
from timebill.domain.models.invoice import (
    AdditionalCharge,
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    LineItemType,
)


class AdditionalChargeDTO(RequestDTO):
    """Extra charge; positivity is checked when the invoice is built."""

    description: str = Field(max_length=500, description="Line item text")
    amount: float = Field(description="Charge amount")

    def to_domain(self) -> AdditionalCharge:
        return AdditionalCharge(description=self.description, amount=self.amount)


class GenerateInvoiceRequestDTO(RequestDTO):
    """DTO for invoice generation."""

    client_id: str = Field(min_length=1, description="Client ID")
    start_date: date = Field(description="Period start (inclusive)")
    end_date: date = Field(description="Period end (inclusive)")
    additional_charges: List[AdditionalChargeDTO] = Field(default_factory=list)
    billing_rule_ids: List[str] = Field(
        default_factory=list,
        description="Billing rules to add as charges at their default amount"
    )


class UpdateInvoiceRequestDTO(RequestDTO):
    """DTO for invoice updates. Charges may only change while the invoice is a draft."""

    status: Optional[InvoiceStatus] = None
    additional_charges: Optional[List[AdditionalChargeDTO]] = None


class InvoiceLineItemResponseDTO(ResponseDTO):
    invoice_id: str
    time_entry_id: Optional[str] = None
    description: str
    quantity: float
    rate: float
    amount: float
    type: LineItemType

    @classmethod
    def from_domain(cls, item: InvoiceLineItem) -> "InvoiceLineItemResponseDTO":
        return cls(
            id=item.id,
            invoice_id=item.invoice_id,
            time_entry_id=item.time_entry_id,
            description=item.description,
            quantity=item.quantity,
            rate=item.rate,
            amount=item.amount,
            type=item.type,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice responses."""

    invoice_number: str
    client_id: str
    start_date: date
    end_date: date
    subtotal: float
    total: float
    status: InvoiceStatus
    generated_at: datetime
    line_items: List[InvoiceLineItemResponseDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponseDTO":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_id=invoice.client_id,
            start_date=invoice.start_date,
            end_date=invoice.end_date,
            subtotal=invoice.subtotal,
            total=invoice.total,
            status=invoice.status,
            generated_at=invoice.generated_at,
            line_items=[InvoiceLineItemResponseDTO.from_domain(item) for item in invoice.line_items],
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class InvoiceSummaryResponseDTO(ResponseDTO):
    """Invoice without its line items, for listings."""

    invoice_number: str
    client_id: str
    start_date: date
    end_date: date
    total: float
    status: InvoiceStatus
    generated_at: datetime

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceSummaryResponseDTO":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_id=invoice.client_id,
            start_date=invoice.start_date,
            end_date=invoice.end_date,
            total=invoice.total,
            status=invoice.status,
            generated_at=invoice.generated_at,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )
