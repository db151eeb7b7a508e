"""
Base use case classes for the application layer.
Provides the collaborators every use case shares.
"""

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from timebill.domain.models.base import EntityNotFoundError, utcnow
from timebill.domain.models.user import UserRole
from timebill.domain.repositories import Repositories
from timebill.domain.services.audit_service import AuditLogRecorder
from timebill.domain.services.email_service import NotificationRecipient
from timebill.domain.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class BaseUseCase:
    """
    Base class for all use cases.

    Use cases are synchronous and role-agnostic: they receive the acting
    user's id where a write must be attributed, and raise domain
    exceptions instead of returning error results.
    """

    def __init__(
        self,
        repositories: Repositories,
        clock: Optional[Clock] = None,
        notifications: Optional[NotificationService] = None
    ):
        self.repositories = repositories
        self.clock = clock or utcnow
        self.notifications = notifications
        self.audit = AuditLogRecorder(repositories.audit_logs, self.clock)

    def _get_or_raise(self, repository: Any, entity_type: str, entity_id: str) -> Any:
        entity = repository.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity

    def _admin_recipients(self) -> List[NotificationRecipient]:
        recipients = [
            NotificationRecipient(email=user.email, name=user.name)
            for user in self.repositories.users.list_all(role=UserRole.ADMINISTRATOR)
            if user.active
        ]
        if not recipients and self.notifications is not None and self.notifications.admin_fallback:
            recipients.append(self.notifications.admin_fallback)
        return recipients

    def _notify(self, send: Callable[..., Any], *args: Any) -> None:
        """Run a notification after the write has been stored. Failures are logged, not raised."""
        if self.notifications is None:
            return
        try:
            send(*args)
        except Exception:
            logger.exception("Notification dispatch failed")
