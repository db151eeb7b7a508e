"""
Invoice repository implementation using SQLAlchemy.
"""

from typing import List, Set

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from timebill.domain.models.base import DuplicateEntityError
from timebill.domain.models.invoice import Invoice
from timebill.domain.repositories.invoice_repository import InvoiceRepository as InvoiceRepositoryInterface
from timebill.infrastructure.db.models import InvoiceModel
from timebill.infrastructure.mappers.invoice_mapper import InvoiceMapper
from timebill.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyInvoiceRepository(SQLAlchemyRepository[Invoice], InvoiceRepositoryInterface):
    """SQLAlchemy implementation of invoice repository."""

    model = InvoiceModel
    mapper_class = InvoiceMapper

    def save(self, invoice: Invoice) -> Invoice:
        """The unique constraint on invoice_number is the cross-process guard."""
        try:
            return super().save(invoice)
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number) from exc

    def list_all(self) -> List[Invoice]:
        query = select(InvoiceModel).order_by(InvoiceModel.generated_at, InvoiceModel.invoice_number)
        return self._to_domain(self.session.scalars(query))

    def existing_numbers(self) -> Set[str]:
        return set(self.session.scalars(select(InvoiceModel.invoice_number)))
