"""
Billing rule management.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from timebill.domain.models.base import ValidationError, utcnow
from timebill.domain.models.billing_rule import BillingRule, BillingRuleType
from timebill.domain.models.invoice import AdditionalCharge
from timebill.domain.services.validation import is_numeric

UPDATABLE_FIELDS = ("name", "type", "default_amount", "description", "active")


def _validate(name: Any, default_amount: Any) -> None:
    errors = {}
    if not name or not str(name).strip():
        errors["name"] = ["Name is required"]
    if not is_numeric(default_amount) or default_amount < 0:
        errors["default_amount"] = ["Default amount must be a non-negative number"]
    if errors:
        raise ValidationError.from_errors(errors)


def create_billing_rule(
    name: str,
    type: BillingRuleType,
    default_amount: float,
    description: Optional[str] = None,
    now: Optional[datetime] = None
) -> BillingRule:
    _validate(name, default_amount)
    now = now or utcnow()
    return BillingRule(
        name=name.strip(),
        type=BillingRuleType(type),
        default_amount=default_amount,
        description=description or "",
        active=True,
        created_at=now,
        updated_at=now,
    )


def update_billing_rule(
    rule: BillingRule,
    updates: Mapping[str, Any],
    now: Optional[datetime] = None
) -> BillingRule:
    """Return a new rule with the given fields replaced; None values are ignored."""
    changes = {
        key: value for key, value in updates.items()
        if key in UPDATABLE_FIELDS and value is not None
    }
    updated = replace(rule, **changes, updated_at=now or utcnow())
    _validate(updated.name, updated.default_amount)
    return updated


def get_active_billing_rules(rules: Iterable[BillingRule]) -> List[BillingRule]:
    return [rule for rule in rules if rule.active]


def get_billing_rules_by_type(rules: Iterable[BillingRule], type: BillingRuleType) -> List[BillingRule]:
    """Active rules of one type."""
    type = BillingRuleType(type)
    return [rule for rule in rules if rule.active and rule.type == type]


def billing_rule_to_charge(rule: BillingRule, amount: Optional[float] = None) -> AdditionalCharge:
    """Turn a rule into an invoice charge, optionally overriding its amount."""
    return AdditionalCharge(
        description=rule.description or rule.name,
        amount=rule.default_amount if amount is None else amount,
    )
