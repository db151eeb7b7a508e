"""Invoice repository interface.
Line items are stored and loaded together with their invoice.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set

from timebill.domain.models.invoice import Invoice


class InvoiceRepository(ABC):
    """Repository interface for Invoice aggregate."""

    @abstractmethod
    def save(self, invoice: Invoice) -> Invoice:
        """
        Save an invoice with its line items.
        Raises DuplicateEntityError when the invoice number is taken.
        """
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        pass

    @abstractmethod
    def list_all(self) -> List[Invoice]:
        pass

    @abstractmethod
    def existing_numbers(self) -> Set[str]:
        """
        All invoice numbers already issued.
        """
        pass
