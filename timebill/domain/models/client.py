"""
Client domain model.
Clients are billing counterparties and are deactivated, never deleted,
so issued invoices keep a valid reference.
"""

import re
from dataclasses import dataclass
from typing import Optional

from timebill.domain.models.base import BaseEntity

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class Client(BaseEntity):
    """Client entity."""

    name: str
    contact_email: str
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    active: bool = True

    def deactivate(self) -> None:
        self.active = False
        self.mark_as_updated()

    def activate(self) -> None:
        self.active = True
        self.mark_as_updated()
