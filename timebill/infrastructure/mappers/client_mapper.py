"""
Client and service mappers.
"""

from timebill.domain.models.client import Client
from timebill.domain.models.service import Service
from timebill.infrastructure.db.models import ClientModel, ServiceModel
from timebill.infrastructure.mappers.base_mapper import ColumnMapper


class ClientMapper(ColumnMapper[Client, ClientModel]):
    """Maps between Client domain entity and ClientModel database model."""

    entity_class = Client
    model_class = ClientModel
    fields = ("name", "contact_email", "contact_phone", "address", "active")


class ServiceMapper(ColumnMapper[Service, ServiceModel]):
    """Maps between Service domain entity and ServiceModel database model."""

    entity_class = Service
    model_class = ServiceModel
    fields = ("name", "description", "active")
