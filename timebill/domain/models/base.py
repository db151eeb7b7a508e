"""
Base entity and domain exceptions.
This module contains the foundational classes for all domain entities.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from abc import ABC
from dataclasses import dataclass, field, fields
import uuid


def utcnow() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class _Unset:
    """Marker for patch fields that were not provided."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()


def to_primitive(value: Any) -> Any:
    """Convert a domain value into a JSON-friendly primitive."""
    if isinstance(value, BaseEntity):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {key: to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_primitive(item) for item in value]
    return value


@dataclass(kw_only=True)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides identity and timestamps shared by every entity.
    """

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def mark_as_updated(self, now: Optional[datetime] = None) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = now or utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        return {f.name: to_primitive(getattr(self, f.name)) for f in fields(self)}


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """
    Exception raised when input validation fails.
    Carries every failing field with its messages.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None
    ):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field
        if errors is not None:
            self.errors = {key: list(value) for key, value in errors.items()}
        elif field:
            self.errors = {field: [message]}
        else:
            self.errors = {}

    @classmethod
    def from_errors(cls, errors: Dict[str, List[str]]) -> "ValidationError":
        """Build a single exception reporting all field errors together."""
        return cls("Validation failed", errors=errors)


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "RESOURCE_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTRY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class ForbiddenError(DomainException):
    """Exception raised when the caller does not own the resource."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message, "AUTHORIZATION_DENIED")


class ModificationWindowExpiredError(DomainException):
    """Exception raised when the owner edits an entry after the edit window closed."""

    def __init__(self, window_hours: int = 24):
        message = (
            "Time entry can no longer be modified. "
            f"Edit window ({window_hours} hours) has expired."
        )
        super().__init__(message, "MODIFICATION_WINDOW_EXPIRED")
        self.window_hours = window_hours


class AuthenticationError(DomainException):
    """Exception raised when credentials are missing or wrong."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AUTHENTICATION_REQUIRED")


class InternalError(DomainException):
    """Exception raised for unexpected persistence or collaborator failures."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, "INTERNAL_ERROR")
