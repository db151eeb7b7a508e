"""
Time entry repository implementation using SQLAlchemy.
"""

from typing import List, Optional

from sqlalchemy import select

from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.repositories.time_entry_repository import TimeEntryRepository as TimeEntryRepositoryInterface
from timebill.domain.services.filtering_service import TimeEntryFilters
from timebill.infrastructure.db.models import TimeEntryModel
from timebill.infrastructure.mappers.time_entry_mapper import TimeEntryMapper
from timebill.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyTimeEntryRepository(SQLAlchemyRepository[TimeEntry], TimeEntryRepositoryInterface):
    """SQLAlchemy implementation of time entry repository."""

    model = TimeEntryModel
    mapper_class = TimeEntryMapper

    def list(self, filters: Optional[TimeEntryFilters] = None) -> List[TimeEntry]:
        """Filters are pushed down into the WHERE clause."""
        query = select(TimeEntryModel).order_by(TimeEntryModel.created_at, TimeEntryModel.id)
        if filters is not None:
            if filters.employee_id is not None:
                query = query.where(TimeEntryModel.employee_id == filters.employee_id)
            if filters.client_id is not None:
                query = query.where(TimeEntryModel.client_id == filters.client_id)
            if filters.start_date is not None:
                query = query.where(TimeEntryModel.activity_date >= filters.start_date)
            if filters.end_date is not None:
                query = query.where(TimeEntryModel.activity_date <= filters.end_date)
            if filters.billable is not None:
                query = query.where(TimeEntryModel.billable.is_(filters.billable))
        return self._to_domain(self.session.scalars(query))

    def delete(self, entry_id: str) -> bool:
        """Delete time entry by ID."""
        model = self.session.get(TimeEntryModel, entry_id)
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True
