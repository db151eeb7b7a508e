"""
Time entry use cases for the application layer.
Implements logging, editing, reviewing and listing of time entries.
"""

import copy
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from timebill.application.dto.time_entry_dto import CreateTimeEntryRequestDTO
from timebill.application.use_cases.base_use_case import BaseUseCase, Clock
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import ValidationError
from timebill.domain.models.time_entry import TimeEntry, TimeEntryPatch, TimeEntryStatus
from timebill.domain.repositories import Repositories
from timebill.domain.services.billing_service import calculate_amount
from timebill.domain.services.email_service import NotificationRecipient
from timebill.domain.services.filtering_service import (
    TimeEntryFilters,
    filter_entries_for_admin,
    filter_entries_for_employee,
)
from timebill.domain.services.notification_service import NotificationService
from timebill.domain.services.rate_service import get_effective_rate
from timebill.domain.services.time_entry_service import MODIFICATION_WINDOW, ensure_user_can_modify
from timebill.domain.services.validation import (
    MAX_ACTIVITY_DATE_AGE_DAYS,
    normalize_memo,
    validate_memo,
    validate_time_entry_form,
)

logger = logging.getLogger(__name__)

VALIDATED_FIELDS = ("rate", "duration", "activity_date")


class _TimeEntryUseCase(BaseUseCase):
    """Shared checks for use cases that write time entries."""

    def __init__(
        self,
        repositories: Repositories,
        clock: Optional[Clock] = None,
        notifications: Optional[NotificationService] = None,
        window: timedelta = MODIFICATION_WINDOW,
        max_age_days: int = MAX_ACTIVITY_DATE_AGE_DAYS
    ):
        super().__init__(repositories, clock, notifications)
        self.window = window
        self.max_age_days = max_age_days

    def _field_errors(self, data: Dict[str, Any]) -> Dict[str, List[str]]:
        """Validate the rate, duration and date values in ``data`` together."""
        result = validate_time_entry_form(
            {key: value for key, value in data.items() if key in VALIDATED_FIELDS},
            reference_date=self.clock().date(),
            max_age_days=self.max_age_days,
        )
        errors = {key: list(messages) for key, messages in result.errors.items()}

        if "client_id" in data:
            self._check_reference(errors, "client_id", "Client", self.repositories.clients, data["client_id"])
        if "service_id" in data:
            self._check_reference(errors, "service_id", "Service", self.repositories.services, data["service_id"])
        if "billable" in data and not isinstance(data["billable"], bool):
            errors["billable"] = ["Billable must be true or false"]
        if "memo" in data:
            memo = validate_memo(data["memo"])
            if not memo.valid:
                errors["memo"] = [memo.error]
        return errors

    @staticmethod
    def _check_reference(errors, field_name, label, repository, entity_id) -> None:
        if not entity_id:
            errors[field_name] = [f"{label} is required"]
            return
        entity = repository.get_by_id(entity_id)
        if entity is None:
            errors[field_name] = [f"{label} not found"]
        elif not entity.active:
            errors[field_name] = [f"{label} is inactive"]

    def _get_entry(self, entry_id: str) -> TimeEntry:
        return self._get_or_raise(self.repositories.time_entries, "TimeEntry", entry_id)


class CreateTimeEntryUseCase(_TimeEntryUseCase):
    """Use case for logging time against a client and service."""

    def execute(self, employee_id: str, request: CreateTimeEntryRequestDTO) -> TimeEntry:
        data: Dict[str, Any] = {
            "client_id": request.client_id,
            "service_id": request.service_id,
            "duration": request.duration,
            "activity_date": request.activity_date,
            "memo": request.memo,
        }
        if request.rate is not None:
            data["rate"] = request.rate
        errors = self._field_errors(data)

        rate = request.rate
        if rate is None and "service_id" not in errors:
            rate = get_effective_rate(
                self.repositories.rates.list_all(service_id=request.service_id),
                request.service_id,
                employee_id,
            )
            if rate is None:
                errors["rate"] = ["No rate is configured for this service; a rate is required"]

        if errors:
            raise ValidationError.from_errors(errors)

        now = self.clock()
        entry = TimeEntry(
            employee_id=employee_id,
            client_id=request.client_id,
            service_id=request.service_id,
            activity_date=request.activity_date,
            memo=normalize_memo(request.memo),
            rate=rate,
            duration=request.duration,
            billable=request.billable,
            amount=calculate_amount(rate, request.duration, request.billable),
            status=TimeEntryStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        saved = self.repositories.time_entries.save(entry)
        self.audit.created(employee_id, AuditEntityType.TIME_ENTRY, saved)
        logger.info(f"Time entry {saved.id} created by {employee_id}")

        employee = self.repositories.users.get_by_id(employee_id)
        if self.notifications is not None:
            self._notify(
                self.notifications.notify_time_entry_submitted,
                saved,
                employee.name if employee else employee_id,
                self._admin_recipients(),
            )
        return saved


class UpdateTimeEntryUseCase(_TimeEntryUseCase):
    """
    Use case for editing an entry.

    Only the owner may edit, and only inside the modification window. The
    amount is recomputed from the merged rate, duration and billable flag.
    """

    def execute(self, user_id: str, entry_id: str, patch: TimeEntryPatch) -> TimeEntry:
        entry = self._get_entry(entry_id)
        now = self.clock()
        ensure_user_can_modify(entry, user_id, now, self.window, action="edit")

        changes = patch.provided()
        errors = self._field_errors(changes)
        if errors:
            raise ValidationError.from_errors(errors)

        if "memo" in changes:
            changes["memo"] = normalize_memo(changes["memo"])
        updated = TimeEntryPatch(**changes).apply_to(entry)
        updated.amount = calculate_amount(updated.rate, updated.duration, updated.billable)
        updated.mark_as_updated(now)

        saved = self.repositories.time_entries.save(updated)
        self.audit.updated(user_id, AuditEntityType.TIME_ENTRY, entry, saved)
        logger.info(f"Time entry {saved.id} updated by {user_id}")
        return saved


class DeleteTimeEntryUseCase(_TimeEntryUseCase):
    """Use case for deleting an entry inside the modification window."""

    def execute(self, user_id: str, entry_id: str) -> None:
        entry = self._get_entry(entry_id)
        ensure_user_can_modify(entry, user_id, self.clock(), self.window, action="delete")

        self.repositories.time_entries.delete(entry.id)
        self.audit.deleted(user_id, AuditEntityType.TIME_ENTRY, entry)
        logger.info(f"Time entry {entry.id} deleted by {user_id}")


class ChangeTimeEntryStatusUseCase(_TimeEntryUseCase):
    """
    Use case for reviewing an entry.
    Any status may be set; approvals and rejections notify the employee.
    """

    def execute(self, actor_id: str, entry_id: str, status: TimeEntryStatus) -> TimeEntry:
        entry = self._get_entry(entry_id)
        before = copy.deepcopy(entry)

        entry.status = TimeEntryStatus(status)
        entry.mark_as_updated(self.clock())
        saved = self.repositories.time_entries.save(entry)
        self.audit.updated(actor_id, AuditEntityType.TIME_ENTRY, before, saved)
        logger.info(f"Time entry {saved.id} marked {saved.status.value} by {actor_id}")

        employee = self.repositories.users.get_by_id(saved.employee_id)
        if self.notifications is not None and employee is not None:
            self._notify(
                self.notifications.notify_time_entry_status,
                saved,
                NotificationRecipient(email=employee.email, name=employee.name),
            )
        return saved


class GetTimeEntryUseCase(BaseUseCase):
    def execute(self, entry_id: str) -> TimeEntry:
        return self._get_or_raise(self.repositories.time_entries, "TimeEntry", entry_id)


class ListTimeEntriesUseCase(BaseUseCase):
    """
    Use case for listing entries, newest activity first.

    With ``employee_id`` the result is restricted to that employee no matter
    what the filters say; without it every employee's entries are eligible.
    """

    def execute(
        self,
        filters: Optional[TimeEntryFilters] = None,
        employee_id: Optional[str] = None
    ) -> List[TimeEntry]:
        filters = filters or TimeEntryFilters()
        if employee_id is not None:
            stored = self.repositories.time_entries.list(TimeEntryFilters(employee_id=employee_id))
            entries = filter_entries_for_employee(stored, employee_id, filters)
        else:
            entries = filter_entries_for_admin(self.repositories.time_entries.list(filters), filters)
        return sorted(entries, key=lambda entry: (entry.activity_date, entry.created_at), reverse=True)
