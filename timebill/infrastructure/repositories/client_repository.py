"""
Client and service repository implementations using SQLAlchemy.
"""

from typing import List

from sqlalchemy import func, select

from timebill.domain.models.client import Client
from timebill.domain.models.service import Service
from timebill.domain.repositories.client_repository import ClientRepository
from timebill.domain.repositories.service_repository import ServiceRepository
from timebill.infrastructure.db.models import ClientModel, ServiceModel
from timebill.infrastructure.mappers.client_mapper import ClientMapper, ServiceMapper
from timebill.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyClientRepository(SQLAlchemyRepository[Client], ClientRepository):
    """SQLAlchemy implementation of client repository."""

    model = ClientModel
    mapper_class = ClientMapper

    def list_all(self, active_only: bool = False) -> List[Client]:
        query = select(ClientModel).order_by(func.lower(ClientModel.name))
        if active_only:
            query = query.where(ClientModel.active.is_(True))
        return self._to_domain(self.session.scalars(query))


class SQLAlchemyServiceRepository(SQLAlchemyRepository[Service], ServiceRepository):
    """SQLAlchemy implementation of service repository."""

    model = ServiceModel
    mapper_class = ServiceMapper

    def list_all(self, active_only: bool = False) -> List[Service]:
        query = select(ServiceModel).order_by(func.lower(ServiceModel.name))
        if active_only:
            query = query.where(ServiceModel.active.is_(True))
        return self._to_domain(self.session.scalars(query))
