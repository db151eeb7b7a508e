"""
Audit log helpers.
"""

import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from timebill.domain.models.audit_log import AuditAction, AuditEntityType, AuditLogEntry
from timebill.domain.models.base import BaseEntity, to_primitive, utcnow

# Bookkeeping fields that never count as a change.
SNAPSHOT_EXCLUDED_FIELDS = ("created_at", "updated_at")


@dataclass(frozen=True)
class AuditLogFilters:
    user_id: Optional[str] = None
    action: Optional[AuditAction] = None
    entity_type: Optional[AuditEntityType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def create_audit_log_entry(
    user_id: str,
    action: Any,
    entity_type: Any,
    entity_id: str,
    old_values: Optional[Mapping[str, Any]] = None,
    new_values: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None
) -> AuditLogEntry:
    """Stamp a new entry with an id and the current time."""
    return AuditLogEntry(
        user_id=user_id,
        action=AuditAction(action),
        entity_type=AuditEntityType(entity_type),
        entity_id=entity_id,
        old_values=dict(old_values) if old_values is not None else None,
        new_values=dict(new_values) if new_values is not None else None,
        timestamp=now or utcnow(),
    )


def is_valid_audit_log_entry(entry: Any) -> bool:
    """Shape check used when reading entries back from storage."""
    if not isinstance(entry, AuditLogEntry):
        return False
    if not entry.id or not entry.user_id or not entry.entity_id:
        return False
    if not isinstance(entry.timestamp, datetime):
        return False
    try:
        AuditAction(entry.action)
        AuditEntityType(entry.entity_type)
    except ValueError:
        return False
    return all(
        values is None or isinstance(values, dict)
        for values in (entry.old_values, entry.new_values)
    )


def snapshot(entity: BaseEntity) -> Dict[str, Any]:
    """JSON-friendly field values of an entity, without bookkeeping timestamps."""
    data = entity.to_dict()
    for name in SNAPSHOT_EXCLUDED_FIELDS:
        data.pop(name, None)
    return data


def _normalise(value: Any) -> str:
    return json.dumps(to_primitive(value), sort_keys=True, default=str)


def get_changed_values(
    old_values: Mapping[str, Any],
    new_values: Mapping[str, Any]
) -> Dict[str, Dict[str, Any]]:
    """
    Keys whose values differ between the two mappings.
    Returns ``{"old": {...}, "new": {...}}`` restricted to those keys.
    """
    changed_old: Dict[str, Any] = {}
    changed_new: Dict[str, Any] = {}
    for key in list(old_values.keys()) + [k for k in new_values.keys() if k not in old_values]:
        old = old_values.get(key)
        new = new_values.get(key)
        if _normalise(old) != _normalise(new):
            changed_old[key] = to_primitive(old)
            changed_new[key] = to_primitive(new)
    return {"old": changed_old, "new": changed_new}


def audit_entry_matches(entry: AuditLogEntry, filters: AuditLogFilters) -> bool:
    if filters.user_id is not None and entry.user_id != filters.user_id:
        return False
    if filters.action is not None and entry.action != AuditAction(filters.action):
        return False
    if filters.entity_type is not None and entry.entity_type != AuditEntityType(filters.entity_type):
        return False
    entry_date = entry.timestamp.date()
    if filters.start_date is not None and entry_date < filters.start_date:
        return False
    if filters.end_date is not None and entry_date > filters.end_date:
        return False
    return True


def filter_audit_logs(
    entries: Iterable[AuditLogEntry],
    filters: Optional[AuditLogFilters] = None
) -> List[AuditLogEntry]:
    """AND across the supplied filters; no filters returns everything."""
    filters = filters or AuditLogFilters()
    return [entry for entry in entries if audit_entry_matches(entry, filters)]


class AuditLogRecorder:
    """
    Appends audit entries for use case writes.
    Follows the create/update/delete conventions for old and new values.
    """

    def __init__(self, repository, clock: Optional[Callable[[], datetime]] = None):
        self.repository = repository
        self.clock = clock or utcnow

    def record(
        self,
        user_id: str,
        action: AuditAction,
        entity_type: AuditEntityType,
        entity_id: str,
        old_values: Optional[Mapping[str, Any]] = None,
        new_values: Optional[Mapping[str, Any]] = None
    ) -> AuditLogEntry:
        entry = create_audit_log_entry(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            old_values=old_values,
            new_values=new_values,
            now=self.clock(),
        )
        return self.repository.append(entry)

    def created(self, user_id: str, entity_type: AuditEntityType, entity: BaseEntity) -> AuditLogEntry:
        return self.record(user_id, AuditAction.CREATE, entity_type, entity.id, new_values=snapshot(entity))

    def updated(
        self,
        user_id: str,
        entity_type: AuditEntityType,
        before: BaseEntity,
        after: BaseEntity
    ) -> Optional[AuditLogEntry]:
        """Record only changed keys. Nothing is written when nothing changed."""
        changes = get_changed_values(snapshot(before), snapshot(after))
        if not changes["new"]:
            return None
        return self.record(
            user_id, AuditAction.UPDATE, entity_type, after.id,
            old_values=changes["old"], new_values=changes["new"]
        )

    def deleted(self, user_id: str, entity_type: AuditEntityType, entity: BaseEntity) -> AuditLogEntry:
        return self.record(user_id, AuditAction.DELETE, entity_type, entity.id, old_values=snapshot(entity))
