"""
PDF generation service using WeasyPrint and Jinja2.
Lays out an InvoiceDocument as HTML and prints it to PDF bytes.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from timebill.domain.models.invoice import LineItemType
from timebill.domain.services.billing_service import format_currency
from timebill.domain.services.invoice_service import InvoiceDocument

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class InvoicePdfRenderer:
    """Service for generating invoice PDFs from templates."""

    def __init__(self, templates_dir: Optional[Path] = None, template_name: str = "invoice.html"):
        self.templates_dir = Path(templates_dir or TEMPLATES_DIR)
        self.template_name = template_name

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"])
        )
        self._register_filters()

    def _register_filters(self):
        """Register custom Jinja2 filters."""

        def date_format(value, format="%Y-%m-%d"):
            if isinstance(value, (date, datetime)):
                return value.strftime(format)
            return str(value)

        def quantity_format(value):
            return f"{float(value):,.2f}"

        self.env.filters["currency"] = format_currency
        self.env.filters["date"] = date_format
        self.env.filters["quantity"] = quantity_format

    def _prepare_context(self, document: InvoiceDocument) -> Dict[str, Any]:
        invoice = document.invoice
        return {
            "invoice": invoice,
            "status_display": invoice.status.value.title(),
            "client": document.client,
            "company": document.company,
            "time_items": [
                item for item in document.line_items if item.type == LineItemType.TIME_ENTRY
            ],
            "charge_items": [
                item for item in document.line_items if item.type == LineItemType.ADDITIONAL_CHARGE
            ],
        }

    def render_html(self, document: InvoiceDocument) -> str:
        """Render the invoice template to an HTML string."""
        template = self.env.get_template(self.template_name)
        return template.render(**self._prepare_context(document))

    def render_pdf(self, document: InvoiceDocument) -> bytes:
        """
        Render the invoice to PDF.

        Args:
            document: Invoice with resolved client and company blocks

        Returns:
            bytes: PDF file content
        """
        # WeasyPrint loads pango/cairo on import
        from weasyprint import HTML

        html_content = self.render_html(document)
        pdf_bytes = HTML(string=html_content, base_url=str(self.templates_dir)).write_pdf()
        logger.info(f"Rendered PDF for invoice {document.invoice.invoice_number}")
        return pdf_bytes
