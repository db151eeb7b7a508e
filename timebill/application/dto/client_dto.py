"""
Client and service DTOs.
"""

from typing import Optional

from pydantic import Field

from timebill.application.dto.base_dto import RequestDTO, ResponseDTO
from timebill.domain.models.client import Client
from timebill.domain.models.service import Service


class CreateClientRequestDTO(RequestDTO):
    """DTO for client creation. Name and email rules are checked by the use case."""

    name: Optional[str] = Field(default=None, max_length=255, description="Client name")
    contact_email: Optional[str] = Field(default=None, max_length=255, description="Contact email")
    contact_phone: Optional[str] = Field(default=None, max_length=50, description="Contact phone")
    address: Optional[str] = Field(default=None, description="Postal address")


class UpdateClientRequestDTO(RequestDTO):
    """DTO for client updates. Only supplied fields change."""

    name: Optional[str] = Field(default=None, max_length=255)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = None
    active: Optional[bool] = None


class ClientResponseDTO(ResponseDTO):
    name: str
    contact_email: str
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    active: bool

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponseDTO":
        return cls(
            id=client.id,
            name=client.name,
            contact_email=client.contact_email,
            contact_phone=client.contact_phone,
            address=client.address,
            active=client.active,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class CreateServiceRequestDTO(RequestDTO):
    name: str = Field(max_length=255, description="Service name")
    description: Optional[str] = Field(default=None, description="What the service covers")


class UpdateServiceRequestDTO(RequestDTO):
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    active: Optional[bool] = None


class ServiceResponseDTO(ResponseDTO):
    name: str
    description: Optional[str] = None
    active: bool

    @classmethod
    def from_domain(cls, service: Service) -> "ServiceResponseDTO":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            active=service.active,
            created_at=service.created_at,
            updated_at=service.updated_at,
        )
