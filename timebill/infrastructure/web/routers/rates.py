"""
Rate table router.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from timebill.application.dto.rate_dto import (
    CreateRateRequestDTO,
    EffectiveRateResponseDTO,
    RateResponseDTO,
    UpdateRateRequestDTO,
)
from timebill.application.use_cases.rate_use_cases import (
    CreateRateUseCase,
    GetEffectiveRateUseCase,
    ListRatesUseCase,
    UpdateRateUseCase,
)
from timebill.infrastructure.auth.dependencies import AdminUser, CurrentUser
from timebill.infrastructure.web.dependencies import ClockDep, RepositoriesDep

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RateResponseDTO)
def create_rate(
    request: CreateRateRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    """
    Record a rate.

    - **service_id**: Service the rate applies to
    - **employee_id**: Set for an employee-specific override, omit for the service default
    - **hourly_rate**: Positive hourly rate
    """
    rate = CreateRateUseCase(repositories, clock).execute(admin.id, request)
    return RateResponseDTO.from_domain(rate)


@router.get("", response_model=List[RateResponseDTO])
def list_rates(
    admin: AdminUser,
    repositories: RepositoriesDep,
    service_id: Optional[str] = Query(None),
    employee_id: Optional[str] = Query(None)
):
    rates = ListRatesUseCase(repositories).execute(service_id, employee_id)
    return [RateResponseDTO.from_domain(rate) for rate in rates]


@router.get("/effective", response_model=EffectiveRateResponseDTO)
def get_effective_rate(
    user: CurrentUser,
    repositories: RepositoriesDep,
    service_id: str = Query(..., description="Service ID"),
    employee_id: Optional[str] = Query(None, description="Employee ID (administrators only)")
):
    """Rate that would apply to a new entry. Employees always resolve their own rate."""
    if not user.is_admin:
        employee_id = user.id
    hourly_rate = GetEffectiveRateUseCase(repositories).execute(service_id, employee_id)
    return EffectiveRateResponseDTO(service_id=service_id, employee_id=employee_id, hourly_rate=hourly_rate)


@router.put("/{rate_id}", response_model=RateResponseDTO)
def update_rate(
    rate_id: str,
    request: UpdateRateRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    rate = UpdateRateUseCase(repositories, clock).execute(admin.id, rate_id, request)
    return RateResponseDTO.from_domain(rate)
