"""
Service catalogue router.
"""

from typing import List

from fastapi import APIRouter, Query, status

from timebill.application.dto.client_dto import (
    CreateServiceRequestDTO,
    ServiceResponseDTO,
    UpdateServiceRequestDTO,
)
from timebill.application.use_cases.client_use_cases import (
    CreateServiceUseCase,
    ListServicesUseCase,
    UpdateServiceUseCase,
)
from timebill.infrastructure.auth.dependencies import AdminUser, CurrentUser
from timebill.infrastructure.web.dependencies import ClockDep, RepositoriesDep

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ServiceResponseDTO)
def create_service(
    request: CreateServiceRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    service = CreateServiceUseCase(repositories, clock).execute(admin.id, request)
    return ServiceResponseDTO.from_domain(service)


@router.get("", response_model=List[ServiceResponseDTO])
def list_services(
    user: CurrentUser,
    repositories: RepositoriesDep,
    include_inactive: bool = Query(False, description="Include inactive services")
):
    services = ListServicesUseCase(repositories).execute(active_only=not include_inactive)
    return [ServiceResponseDTO.from_domain(service) for service in services]


@router.put("/{service_id}", response_model=ServiceResponseDTO)
def update_service(
    service_id: str,
    request: UpdateServiceRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    service = UpdateServiceUseCase(repositories, clock).execute(admin.id, service_id, request)
    return ServiceResponseDTO.from_domain(service)
