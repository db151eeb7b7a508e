"""
Client management router.
"""

from typing import List

from fastapi import APIRouter, Query, status

from timebill.application.dto.client_dto import (
    ClientResponseDTO,
    CreateClientRequestDTO,
    UpdateClientRequestDTO,
)
from timebill.application.use_cases.client_use_cases import (
    CreateClientUseCase,
    DeactivateClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    UpdateClientUseCase,
)
from timebill.infrastructure.auth.dependencies import AdminUser, CurrentUser
from timebill.infrastructure.web.dependencies import ClockDep, RepositoriesDep

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ClientResponseDTO)
def create_client(
    request: CreateClientRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    """
    Create a new client.

    - **name**: Client name (required)
    - **contact_email**: Contact email (required, must be well formed)
    - **contact_phone**: Contact phone
    - **address**: Postal address printed on invoices
    """
    client = CreateClientUseCase(repositories, clock).execute(admin.id, request)
    return ClientResponseDTO.from_domain(client)


@router.get("", response_model=List[ClientResponseDTO])
def list_clients(
    user: CurrentUser,
    repositories: RepositoriesDep,
    include_inactive: bool = Query(False, description="Include deactivated clients")
):
    """List clients by name. Only active clients unless asked otherwise."""
    clients = ListClientsUseCase(repositories).execute(active_only=not include_inactive)
    return [ClientResponseDTO.from_domain(client) for client in clients]


@router.get("/{client_id}", response_model=ClientResponseDTO)
def get_client(client_id: str, user: CurrentUser, repositories: RepositoriesDep):
    return ClientResponseDTO.from_domain(GetClientUseCase(repositories).execute(client_id))


@router.put("/{client_id}", response_model=ClientResponseDTO)
def update_client(
    client_id: str,
    request: UpdateClientRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    """Update client information. Only the fields present in the body change."""
    client = UpdateClientUseCase(repositories, clock).execute(admin.id, client_id, request)
    return ClientResponseDTO.from_domain(client)


@router.delete("/{client_id}", response_model=ClientResponseDTO)
def deactivate_client(
    client_id: str,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    """Deactivate a client. Clients are never hard-deleted."""
    client = DeactivateClientUseCase(repositories, clock).execute(admin.id, client_id)
    return ClientResponseDTO.from_domain(client)
