"""
Modification policy for time entries.
Only the owner may edit or delete an entry, and only inside the edit window.
"""

from datetime import datetime, timedelta

from timebill.domain.models.base import ForbiddenError, ModificationWindowExpiredError
from timebill.domain.models.time_entry import TimeEntry

MODIFICATION_WINDOW = timedelta(hours=24)


def is_entry_owner(entry: TimeEntry, user_id: str) -> bool:
    return entry.employee_id == user_id


def can_modify_entry(
    created_at: datetime,
    now: datetime,
    window: timedelta = MODIFICATION_WINDOW
) -> bool:
    """True while no more than ``window`` has passed since creation."""
    return now - created_at <= window


def can_user_modify_entry(
    entry: TimeEntry,
    user_id: str,
    now: datetime,
    window: timedelta = MODIFICATION_WINDOW
) -> bool:
    return is_entry_owner(entry, user_id) and can_modify_entry(entry.created_at, now, window)


def ensure_user_can_modify(
    entry: TimeEntry,
    user_id: str,
    now: datetime,
    window: timedelta = MODIFICATION_WINDOW,
    action: str = "modify"
) -> None:
    """
    Raise ForbiddenError for a non-owner and ModificationWindowExpiredError
    for an owner whose window has closed. Ownership is checked first.
    """
    if not is_entry_owner(entry, user_id):
        raise ForbiddenError(f"You can only {action} your own entries")
    if not can_modify_entry(entry.created_at, now, window):
        raise ModificationWindowExpiredError(int(window.total_seconds() // 3600))
