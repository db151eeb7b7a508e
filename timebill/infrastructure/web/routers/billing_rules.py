"""
Billing rule router.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from timebill.application.dto.rate_dto import (
    BillingRuleResponseDTO,
    CreateBillingRuleRequestDTO,
    UpdateBillingRuleRequestDTO,
)
from timebill.application.use_cases.rate_use_cases import (
    CreateBillingRuleUseCase,
    ListBillingRulesUseCase,
    UpdateBillingRuleUseCase,
)
from timebill.domain.models.billing_rule import BillingRuleType
from timebill.infrastructure.auth.dependencies import AdminUser
from timebill.infrastructure.web.dependencies import ClockDep, RepositoriesDep

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BillingRuleResponseDTO)
def create_billing_rule(
    request: CreateBillingRuleRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    rule = CreateBillingRuleUseCase(repositories, clock).execute(admin.id, request)
    return BillingRuleResponseDTO.from_domain(rule)


@router.get("", response_model=List[BillingRuleResponseDTO])
def list_billing_rules(
    admin: AdminUser,
    repositories: RepositoriesDep,
    active_only: bool = Query(False),
    type: Optional[BillingRuleType] = Query(None, description="Active rules of one type")
):
    rules = ListBillingRulesUseCase(repositories).execute(active_only=active_only, type=type)
    return [BillingRuleResponseDTO.from_domain(rule) for rule in rules]


@router.put("/{rule_id}", response_model=BillingRuleResponseDTO)
def update_billing_rule(
    rule_id: str,
    request: UpdateBillingRuleRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    rule = UpdateBillingRuleUseCase(repositories, clock).execute(admin.id, rule_id, request)
    return BillingRuleResponseDTO.from_domain(rule)
