"""
Time entry mapper for converting between domain entities and database models.
"""

from timebill.domain.models.time_entry import TimeEntry
from timebill.infrastructure.db.models import TimeEntryModel
from timebill.infrastructure.mappers.base_mapper import ColumnMapper


class TimeEntryMapper(ColumnMapper[TimeEntry, TimeEntryModel]):
    """Maps between TimeEntry domain entity and TimeEntryModel database model."""

    entity_class = TimeEntry
    model_class = TimeEntryModel
    fields = (
        "employee_id",
        "client_id",
        "service_id",
        "activity_date",
        "memo",
        "rate",
        "duration",
        "billable",
        "amount",
        "status",
    )
