"""
Invoice use cases for the application layer.
Implements generation, status tracking, listing and PDF rendering of invoices.
"""

import copy
import logging
from datetime import date
from typing import List, Optional

from timebill.application.dto.invoice_dto import GenerateInvoiceRequestDTO, UpdateInvoiceRequestDTO
from timebill.application.use_cases.base_use_case import BaseUseCase, Clock
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import BusinessRuleViolation, ValidationError
from timebill.domain.models.invoice import Invoice, InvoiceStatus
from timebill.domain.repositories import Repositories
from timebill.domain.services.billing_rule_service import billing_rule_to_charge
from timebill.domain.services.filtering_service import TimeEntryFilters
from timebill.domain.services.invoice_service import (
    InvoiceDocument,
    InvoiceRequest,
    PartyInfo,
    build_invoice_document,
    generate_invoice,
    replace_additional_charges,
    validate_invoice_request,
)
from timebill.domain.services.notification_service import NotificationService
from timebill.domain.services.numbering_service import InvoiceNumberSequence

logger = logging.getLogger(__name__)


class GenerateInvoiceUseCase(BaseUseCase):
    """
    Use case for generating a draft invoice.

    Billable entries of the client dated inside the period become line
    items with their stored amounts; additional charges and selected
    billing rules follow them.
    """

    def __init__(
        self,
        repositories: Repositories,
        sequence: InvoiceNumberSequence,
        clock: Optional[Clock] = None,
        notifications: Optional[NotificationService] = None
    ):
        super().__init__(repositories, clock, notifications)
        self.sequence = sequence

    def _charges(self, request: GenerateInvoiceRequestDTO):
        charges = [charge.to_domain() for charge in request.additional_charges]
        errors = {}
        for index, rule_id in enumerate(request.billing_rule_ids):
            rule = self.repositories.billing_rules.get_by_id(rule_id)
            if rule is None or not rule.active:
                errors[f"billing_rule_ids[{index}]"] = ["Billing rule not found or inactive"]
            else:
                charges.append(billing_rule_to_charge(rule))
        return charges, errors

    def execute(self, actor_id: str, request: GenerateInvoiceRequestDTO) -> Invoice:
        charges, errors = self._charges(request)
        client = self.repositories.clients.get_by_id(request.client_id)
        if client is None:
            errors["client_id"] = ["Client not found"]

        invoice_request = InvoiceRequest(
            client_id=request.client_id,
            start_date=request.start_date,
            end_date=request.end_date,
            additional_charges=tuple(charges),
        )
        try:
            validate_invoice_request(invoice_request)
        except ValidationError as e:
            errors.update(e.errors)
        if errors:
            raise ValidationError.from_errors(errors)

        entries = self.repositories.time_entries.list(TimeEntryFilters(
            client_id=request.client_id,
            start_date=request.start_date,
            end_date=request.end_date,
            billable=True,
        ))
        invoice = generate_invoice(
            invoice_request,
            entries,
            self.repositories.invoices.existing_numbers(),
            self.sequence,
            now=self.clock(),
        )
        saved = self.repositories.invoices.save(invoice)
        self.audit.created(actor_id, AuditEntityType.INVOICE, saved)
        logger.info(
            f"Invoice {saved.invoice_number} generated for client {saved.client_id} "
            f"with {len(saved.line_items)} line items by {actor_id}"
        )

        if self.notifications is not None:
            self._notify(
                self.notifications.notify_invoice_generated,
                saved,
                client.name,
                self._admin_recipients(),
            )
        return saved


class UpdateInvoiceUseCase(BaseUseCase):
    """
    Use case for invoice updates.

    Charges are replaced before the status moves, so a draft can be
    finalised and sent in one request. Time entry lines never change.
    """

    def execute(self, actor_id: str, invoice_id: str, request: UpdateInvoiceRequestDTO) -> Invoice:
        invoice = self._get_or_raise(self.repositories.invoices, "Invoice", invoice_id)
        before = copy.deepcopy(invoice)
        now = self.clock()

        if request.additional_charges is not None:
            if not invoice.is_draft:
                raise BusinessRuleViolation("Additional charges can only be changed on draft invoices")
            replace_additional_charges(
                invoice, [charge.to_domain() for charge in request.additional_charges], now
            )

        if request.status is not None:
            invoice.change_status(InvoiceStatus(request.status), now)

        saved = self.repositories.invoices.save(invoice)
        self.audit.updated(actor_id, AuditEntityType.INVOICE, before, saved)
        logger.info(f"Invoice {saved.invoice_number} updated by {actor_id}")
        return saved


class GetInvoiceUseCase(BaseUseCase):
    def execute(self, invoice_id: str) -> Invoice:
        return self._get_or_raise(self.repositories.invoices, "Invoice", invoice_id)


class ListInvoicesUseCase(BaseUseCase):
    """Invoices newest first. The date filter keeps invoices whose period overlaps the range."""

    def execute(
        self,
        client_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Invoice]:
        invoices = self.repositories.invoices.list_all()
        if client_id is not None:
            invoices = [invoice for invoice in invoices if invoice.client_id == client_id]
        if status is not None:
            status = InvoiceStatus(status)
            invoices = [invoice for invoice in invoices if invoice.status == status]
        if start_date is not None:
            invoices = [invoice for invoice in invoices if invoice.end_date >= start_date]
        if end_date is not None:
            invoices = [invoice for invoice in invoices if invoice.start_date <= end_date]
        return sorted(
            invoices,
            key=lambda invoice: (invoice.generated_at, invoice.invoice_number),
            reverse=True,
        )


class RenderInvoicePdfUseCase(BaseUseCase):
    """Use case for printing an invoice with the client and company address blocks."""

    def __init__(self, repositories: Repositories, renderer, company: PartyInfo):
        super().__init__(repositories)
        self.renderer = renderer
        self.company = company

    def build_document(self, invoice_id: str) -> InvoiceDocument:
        invoice = self._get_or_raise(self.repositories.invoices, "Invoice", invoice_id)
        client = self._get_or_raise(self.repositories.clients, "Client", invoice.client_id)
        return build_invoice_document(
            invoice,
            PartyInfo(name=client.name, address=client.address or ""),
            self.company,
        )

    def execute(self, invoice_id: str) -> bytes:
        document = self.build_document(invoice_id)
        return self.renderer.render_pdf(document)
