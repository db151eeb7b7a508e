"""
Rate, allocation and billing rule repositories using SQLAlchemy.
"""

from typing import List, Optional

from sqlalchemy import select

from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.billing_rule import BillingRule
from timebill.domain.models.rate import Rate
from timebill.domain.repositories.allocation_repository import AllocationRepository
from timebill.domain.repositories.billing_rule_repository import BillingRuleRepository
from timebill.domain.repositories.rate_repository import RateRepository
from timebill.infrastructure.db.models import BillingRuleModel, EmployeeAllocationModel, RateModel
from timebill.infrastructure.mappers.rate_mapper import AllocationMapper, BillingRuleMapper, RateMapper
from timebill.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyRateRepository(SQLAlchemyRepository[Rate], RateRepository):
    model = RateModel
    mapper_class = RateMapper

    def list_all(self, service_id: Optional[str] = None) -> List[Rate]:
        query = select(RateModel).order_by(RateModel.effective_from)
        if service_id is not None:
            query = query.where(RateModel.service_id == service_id)
        return self._to_domain(self.session.scalars(query))


class SQLAlchemyAllocationRepository(SQLAlchemyRepository[EmployeeAllocation], AllocationRepository):
    model = EmployeeAllocationModel
    mapper_class = AllocationMapper

    def list_all(self, employee_id: Optional[str] = None) -> List[EmployeeAllocation]:
        query = select(EmployeeAllocationModel).order_by(EmployeeAllocationModel.effective_from)
        if employee_id is not None:
            query = query.where(EmployeeAllocationModel.employee_id == employee_id)
        return self._to_domain(self.session.scalars(query))


class SQLAlchemyBillingRuleRepository(SQLAlchemyRepository[BillingRule], BillingRuleRepository):
    model = BillingRuleModel
    mapper_class = BillingRuleMapper

    def list_all(self) -> List[BillingRule]:
        query = select(BillingRuleModel).order_by(BillingRuleModel.created_at)
        return self._to_domain(self.session.scalars(query))
