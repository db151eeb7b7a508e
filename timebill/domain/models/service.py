"""
Service domain model.
A billable work category that time entries and rates refer to.
"""

from dataclasses import dataclass
from typing import Optional

from timebill.domain.models.base import BaseEntity


@dataclass
class Service(BaseEntity):
    """Service entity."""

    name: str
    description: Optional[str] = None
    active: bool = True
