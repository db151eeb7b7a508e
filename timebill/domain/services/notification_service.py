"""
Notification templating and dispatch for time entry and invoice events.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from timebill.domain.models.invoice import Invoice
from timebill.domain.models.time_entry import TimeEntry, TimeEntryStatus
from timebill.domain.services.email_service import (
    EmailSendResult,
    EmailTemplate,
    MailTransport,
    NotificationRecipient,
    TemplateRenderer,
)

logger = logging.getLogger(__name__)

TIME_ENTRY_SUBMITTED = "time_entry_submitted.txt"
TIME_ENTRY_STATUS = "time_entry_status.txt"
INVOICE_GENERATED = "invoice_generated.txt"


def _entry_context(entry: TimeEntry) -> Dict[str, Any]:
    return {
        "date": entry.activity_date.isoformat(),
        "duration": entry.duration,
        "amount": entry.amount,
        "memo": entry.memo or "N/A",
    }


class NotificationService:
    """Renders notification templates and hands them to the mail transport."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        transport: MailTransport,
        admin_fallback: Optional[NotificationRecipient] = None
    ):
        self.renderer = renderer
        self.transport = transport
        # Used when no administrator account is active
        self.admin_fallback = admin_fallback

    def time_entry_submitted_template(self, entry: TimeEntry, employee_name: str) -> EmailTemplate:
        context = _entry_context(entry)
        context["employee_name"] = employee_name
        return self.renderer.render(TIME_ENTRY_SUBMITTED, context)

    def time_entry_status_template(
        self,
        entry: TimeEntry,
        approved: bool,
        employee_name: str
    ) -> EmailTemplate:
        context = _entry_context(entry)
        context["employee_name"] = employee_name
        context["status"] = "Approved" if approved else "Rejected"
        return self.renderer.render(TIME_ENTRY_STATUS, context)

    def invoice_generated_template(self, invoice: Invoice, client_name: str) -> EmailTemplate:
        return self.renderer.render(INVOICE_GENERATED, {
            "invoice_number": invoice.invoice_number,
            "client_name": client_name,
            "total": invoice.total,
        })

    def send(self, recipient: NotificationRecipient, template: EmailTemplate) -> EmailSendResult:
        """Deliver once. Transport errors become a failed result."""
        try:
            result = self.transport.send(recipient, template)
        except Exception as exc:
            logger.error(f"Failed to send '{template.subject}' to {recipient.email}: {exc}")
            return EmailSendResult(success=False, error=str(exc))

        if result.success:
            logger.info(f"Notification sent to {recipient.email}: {template.subject}")
        else:
            logger.error(f"Notification to {recipient.email} failed: {result.error}")
        return result

    def send_to_all(
        self,
        recipients: Iterable[NotificationRecipient],
        template: EmailTemplate
    ) -> List[EmailSendResult]:
        return [self.send(recipient, template) for recipient in recipients]

    def notify_time_entry_submitted(
        self,
        entry: TimeEntry,
        employee_name: str,
        admin_recipients: Iterable[NotificationRecipient]
    ) -> List[EmailSendResult]:
        template = self.time_entry_submitted_template(entry, employee_name)
        return self.send_to_all(admin_recipients, template)

    def notify_time_entry_status(
        self,
        entry: TimeEntry,
        employee_recipient: NotificationRecipient
    ) -> List[EmailSendResult]:
        """Only approvals and rejections are announced."""
        if entry.status == TimeEntryStatus.PENDING:
            return []
        template = self.time_entry_status_template(
            entry, entry.status == TimeEntryStatus.APPROVED, employee_recipient.name
        )
        return [self.send(employee_recipient, template)]

    def notify_invoice_generated(
        self,
        invoice: Invoice,
        client_name: str,
        admin_recipients: Iterable[NotificationRecipient]
    ) -> List[EmailSendResult]:
        template = self.invoice_generated_template(invoice, client_name)
        return self.send_to_all(admin_recipients, template)
