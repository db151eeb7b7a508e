"""
Invoice mapper. Line items travel with their invoice.
"""

from timebill.domain.models.invoice import Invoice, InvoiceLineItem
from timebill.infrastructure.db.models import InvoiceLineItemModel, InvoiceModel
from timebill.infrastructure.mappers.base_mapper import ColumnMapper


class InvoiceLineItemMapper(ColumnMapper[InvoiceLineItem, InvoiceLineItemModel]):
    entity_class = InvoiceLineItem
    model_class = InvoiceLineItemModel
    fields = ("invoice_id", "time_entry_id", "description", "quantity", "rate", "amount", "type")


class InvoiceMapper(ColumnMapper[Invoice, InvoiceModel]):
    """Maps between the Invoice aggregate and InvoiceModel with its line rows."""

    entity_class = Invoice
    model_class = InvoiceModel
    fields = (
        "invoice_number",
        "client_id",
        "start_date",
        "end_date",
        "subtotal",
        "total",
        "status",
        "generated_at",
    )

    def __init__(self):
        self.line_item_mapper = InvoiceLineItemMapper()

    def _line_models(self, invoice: Invoice):
        models = []
        for position, item in enumerate(invoice.line_items):
            model = self.line_item_mapper.domain_to_model(item)
            model.position = position
            models.append(model)
        return models

    def domain_to_model(self, invoice: Invoice) -> InvoiceModel:
        model = super().domain_to_model(invoice)
        model.line_items = self._line_models(invoice)
        return model

    def update_model(self, model: InvoiceModel, invoice: Invoice) -> InvoiceModel:
        """Update in place, reusing persisted line rows that keep their id."""
        super().update_model(model, invoice)
        existing = {line.id: line for line in model.line_items}
        lines = []
        for position, item in enumerate(invoice.line_items):
            line = existing.get(item.id)
            if line is None:
                line = self.line_item_mapper.domain_to_model(item)
            else:
                self.line_item_mapper.update_model(line, item)
            line.position = position
            lines.append(line)
        model.line_items = lines
        return model

    def model_to_domain(self, model: InvoiceModel) -> Invoice:
        invoice = super().model_to_domain(model)
        invoice.line_items = [
            self.line_item_mapper.model_to_domain(line) for line in model.line_items
        ]
        return invoice
