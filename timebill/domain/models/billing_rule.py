"""
Billing rule domain model.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from timebill.domain.models.base import BaseEntity


class BillingRuleType(str, Enum):
    """Kinds of default charges."""
    TRAVEL = "travel"
    ALLOWANCE = "allowance"
    OTHER = "other"


@dataclass
class BillingRule(BaseEntity):
    """Named default charge used when composing invoice charges."""

    name: str
    type: BillingRuleType
    default_amount: float
    description: Optional[str] = None
    active: bool = True

    def __post_init__(self):
        if not isinstance(self.type, BillingRuleType):
            self.type = BillingRuleType(self.type)
