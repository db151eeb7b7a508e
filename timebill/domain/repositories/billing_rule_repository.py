"""Billing rule repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.billing_rule import BillingRule


class BillingRuleRepository(ABC):
    """Repository interface for BillingRule entity."""

    @abstractmethod
    def save(self, rule: BillingRule) -> BillingRule:
        pass

    @abstractmethod
    def get_by_id(self, rule_id: str) -> Optional[BillingRule]:
        pass

    @abstractmethod
    def list_all(self) -> List[BillingRule]:
        pass
