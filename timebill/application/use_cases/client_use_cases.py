"""
Client and service use cases for the application layer.
"""

import copy
import logging
from typing import Any, Dict, List

from timebill.application.dto.client_dto import (
    CreateClientRequestDTO,
    CreateServiceRequestDTO,
    UpdateClientRequestDTO,
    UpdateServiceRequestDTO,
)
from timebill.application.use_cases.base_use_case import BaseUseCase
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import ValidationError
from timebill.domain.models.client import Client
from timebill.domain.models.service import Service
from timebill.domain.services.validation import validate_client_input

logger = logging.getLogger(__name__)


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _provided(request) -> Dict[str, Any]:
    """Fields present in the request body. A null active flag is ignored."""
    return {
        name: _strip(getattr(request, name))
        for name in request.model_fields_set
        if not (name == "active" and getattr(request, name) is None)
    }


def _check_client(data: Dict[str, Any]) -> None:
    result = validate_client_input(data)
    if not result.valid:
        raise ValidationError.from_errors(result.errors)


def _check_service_name(name: Any) -> None:
    if not name or not str(name).strip():
        raise ValidationError("Service name is required", field="name")


class CreateClientUseCase(BaseUseCase):
    """Use case for creating a new client."""

    def execute(self, actor_id: str, request: CreateClientRequestDTO) -> Client:
        data = {key: _strip(value) for key, value in request.model_dump().items()}
        _check_client(data)

        now = self.clock()
        client = Client(
            name=data["name"],
            contact_email=data["contact_email"],
            contact_phone=data.get("contact_phone") or None,
            address=data.get("address") or None,
            active=True,
            created_at=now,
            updated_at=now,
        )
        saved = self.repositories.clients.save(client)
        self.audit.created(actor_id, AuditEntityType.CLIENT, saved)
        logger.info(f"Client {saved.id} created by {actor_id}")
        return saved


class UpdateClientUseCase(BaseUseCase):
    """Use case for updating client information. Only supplied fields change."""

    def execute(self, actor_id: str, client_id: str, request: UpdateClientRequestDTO) -> Client:
        client = self._get_or_raise(self.repositories.clients, "Client", client_id)
        before = copy.deepcopy(client)

        for name, value in _provided(request).items():
            setattr(client, name, value)
        _check_client({"name": client.name, "contact_email": client.contact_email})

        client.mark_as_updated(self.clock())
        saved = self.repositories.clients.save(client)
        self.audit.updated(actor_id, AuditEntityType.CLIENT, before, saved)
        logger.info(f"Client {saved.id} updated by {actor_id}")
        return saved


class DeactivateClientUseCase(BaseUseCase):
    """Clients are deactivated rather than deleted so invoices keep their reference."""

    def execute(self, actor_id: str, client_id: str) -> Client:
        client = self._get_or_raise(self.repositories.clients, "Client", client_id)
        before = copy.deepcopy(client)

        client.deactivate()
        client.mark_as_updated(self.clock())
        saved = self.repositories.clients.save(client)
        self.audit.updated(actor_id, AuditEntityType.CLIENT, before, saved)
        logger.info(f"Client {saved.id} deactivated by {actor_id}")
        return saved


class GetClientUseCase(BaseUseCase):
    def execute(self, client_id: str) -> Client:
        return self._get_or_raise(self.repositories.clients, "Client", client_id)


class ListClientsUseCase(BaseUseCase):
    def execute(self, active_only: bool = True) -> List[Client]:
        return self.repositories.clients.list_all(active_only=active_only)


class CreateServiceUseCase(BaseUseCase):
    """Use case for adding a billable service."""

    def execute(self, actor_id: str, request: CreateServiceRequestDTO) -> Service:
        _check_service_name(request.name)

        now = self.clock()
        service = Service(
            name=request.name.strip(),
            description=_strip(request.description) or None,
            active=True,
            created_at=now,
            updated_at=now,
        )
        saved = self.repositories.services.save(service)
        self.audit.created(actor_id, AuditEntityType.SERVICE, saved)
        logger.info(f"Service {saved.id} created by {actor_id}")
        return saved


class UpdateServiceUseCase(BaseUseCase):
    def execute(self, actor_id: str, service_id: str, request: UpdateServiceRequestDTO) -> Service:
        service = self._get_or_raise(self.repositories.services, "Service", service_id)
        before = copy.deepcopy(service)

        for name, value in _provided(request).items():
            setattr(service, name, value)
        _check_service_name(service.name)

        service.mark_as_updated(self.clock())
        saved = self.repositories.services.save(service)
        self.audit.updated(actor_id, AuditEntityType.SERVICE, before, saved)
        logger.info(f"Service {saved.id} updated by {actor_id}")
        return saved


class ListServicesUseCase(BaseUseCase):
    def execute(self, active_only: bool = True) -> List[Service]:
        return self.repositories.services.list_all(active_only=active_only)
