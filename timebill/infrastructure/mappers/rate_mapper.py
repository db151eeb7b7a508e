"""
Rate, allocation and billing rule mappers.
"""

from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.billing_rule import BillingRule
from timebill.domain.models.rate import Rate
from timebill.infrastructure.db.models import BillingRuleModel, EmployeeAllocationModel, RateModel
from timebill.infrastructure.mappers.base_mapper import ColumnMapper


class RateMapper(ColumnMapper[Rate, RateModel]):
    entity_class = Rate
    model_class = RateModel
    fields = ("service_id", "employee_id", "hourly_rate", "effective_from")


class AllocationMapper(ColumnMapper[EmployeeAllocation, EmployeeAllocationModel]):
    entity_class = EmployeeAllocation
    model_class = EmployeeAllocationModel
    fields = ("employee_id", "percentage", "effective_from")


class BillingRuleMapper(ColumnMapper[BillingRule, BillingRuleModel]):
    entity_class = BillingRule
    model_class = BillingRuleModel
    fields = ("name", "type", "default_amount", "description", "active")
