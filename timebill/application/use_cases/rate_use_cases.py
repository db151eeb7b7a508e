"""
Rate and billing rule use cases for the application layer.
"""

import logging
from typing import List, Optional

from timebill.application.dto.rate_dto import (
    CreateBillingRuleRequestDTO,
    CreateRateRequestDTO,
    UpdateBillingRuleRequestDTO,
    UpdateRateRequestDTO,
)
from timebill.application.use_cases.base_use_case import BaseUseCase
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import ValidationError
from timebill.domain.models.billing_rule import BillingRule, BillingRuleType
from timebill.domain.models.rate import Rate
from timebill.domain.services.billing_rule_service import (
    create_billing_rule,
    get_active_billing_rules,
    get_billing_rules_by_type,
    update_billing_rule,
)
from timebill.domain.services.rate_service import get_effective_rate
from timebill.domain.services.validation import validate_rate

logger = logging.getLogger(__name__)


def _check_hourly_rate(value) -> None:
    result = validate_rate(value)
    if not result.valid:
        raise ValidationError(result.error, field="hourly_rate")


class CreateRateUseCase(BaseUseCase):
    """
    Use case for recording a rate.

    Rates are never overwritten by a new rate: each call adds a record
    effective from now, and resolution picks the latest.
    """

    def execute(self, actor_id: str, request: CreateRateRequestDTO) -> Rate:
        errors = {}
        result = validate_rate(request.hourly_rate)
        if not result.valid:
            errors["hourly_rate"] = [result.error]
        if self.repositories.services.get_by_id(request.service_id) is None:
            errors["service_id"] = ["Service not found"]
        if request.employee_id is not None and self.repositories.users.get_by_id(request.employee_id) is None:
            errors["employee_id"] = ["Employee not found"]
        if errors:
            raise ValidationError.from_errors(errors)

        now = self.clock()
        rate = Rate(
            service_id=request.service_id,
            employee_id=request.employee_id,
            hourly_rate=request.hourly_rate,
            effective_from=now,
            created_at=now,
            updated_at=now,
        )
        saved = self.repositories.rates.save(rate)
        self.audit.created(actor_id, AuditEntityType.RATE, saved)
        logger.info(f"Rate {saved.id} for service {saved.service_id} created by {actor_id}")
        return saved


class UpdateRateUseCase(BaseUseCase):
    def execute(self, actor_id: str, rate_id: str, request: UpdateRateRequestDTO) -> Rate:
        rate = self._get_or_raise(self.repositories.rates, "Rate", rate_id)
        _check_hourly_rate(request.hourly_rate)

        updated = Rate(
            id=rate.id,
            service_id=rate.service_id,
            employee_id=rate.employee_id,
            hourly_rate=request.hourly_rate,
            effective_from=rate.effective_from,
            created_at=rate.created_at,
            updated_at=self.clock(),
        )
        saved = self.repositories.rates.save(updated)
        self.audit.updated(actor_id, AuditEntityType.RATE, rate, saved)
        logger.info(f"Rate {saved.id} updated by {actor_id}")
        return saved


class ListRatesUseCase(BaseUseCase):
    def execute(self, service_id: Optional[str] = None, employee_id: Optional[str] = None) -> List[Rate]:
        rates = self.repositories.rates.list_all(service_id=service_id)
        if employee_id is not None:
            rates = [rate for rate in rates if rate.employee_id == employee_id]
        return rates


class GetEffectiveRateUseCase(BaseUseCase):
    """Employee override first, then the service default; None when neither exists."""

    def execute(self, service_id: str, employee_id: Optional[str] = None) -> Optional[float]:
        return get_effective_rate(
            self.repositories.rates.list_all(service_id=service_id), service_id, employee_id
        )


class CreateBillingRuleUseCase(BaseUseCase):
    def execute(self, actor_id: str, request: CreateBillingRuleRequestDTO) -> BillingRule:
        rule = create_billing_rule(
            name=request.name,
            type=request.type,
            default_amount=request.default_amount,
            description=request.description,
            now=self.clock(),
        )
        saved = self.repositories.billing_rules.save(rule)
        self.audit.created(actor_id, AuditEntityType.BILLING_RULE, saved)
        logger.info(f"Billing rule {saved.id} created by {actor_id}")
        return saved


class UpdateBillingRuleUseCase(BaseUseCase):
    def execute(self, actor_id: str, rule_id: str, request: UpdateBillingRuleRequestDTO) -> BillingRule:
        rule = self._get_or_raise(self.repositories.billing_rules, "BillingRule", rule_id)
        updated = update_billing_rule(rule, request.model_dump(exclude_unset=True), now=self.clock())
        saved = self.repositories.billing_rules.save(updated)
        self.audit.updated(actor_id, AuditEntityType.BILLING_RULE, rule, saved)
        logger.info(f"Billing rule {saved.id} updated by {actor_id}")
        return saved


class ListBillingRulesUseCase(BaseUseCase):
    def execute(self, active_only: bool = False, type: Optional[BillingRuleType] = None) -> List[BillingRule]:
        rules = self.repositories.billing_rules.list_all()
        if type is not None:
            return get_billing_rules_by_type(rules, type)
        if active_only:
            return get_active_billing_rules(rules)
        return rules
