"""
Domain models package.
"""

from timebill.domain.models.base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    ForbiddenError,
    ModificationWindowExpiredError,
    AuthenticationError,
    InternalError,
    UNSET,
    utcnow,
)
from timebill.domain.models.user import User, UserRole
from timebill.domain.models.client import Client
from timebill.domain.models.service import Service
from timebill.domain.models.rate import Rate
from timebill.domain.models.time_entry import TimeEntry, TimeEntryPatch, TimeEntryStatus
from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.invoice import (
    AdditionalCharge,
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    LineItemType,
)
from timebill.domain.models.billing_rule import BillingRule, BillingRuleType
from timebill.domain.models.audit_log import AuditAction, AuditEntityType, AuditLogEntry

__all__ = [
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ForbiddenError",
    "ModificationWindowExpiredError",
    "AuthenticationError",
    "InternalError",
    "UNSET",
    "utcnow",
    "User",
    "UserRole",
    "Client",
    "Service",
    "Rate",
    "TimeEntry",
    "TimeEntryPatch",
    "TimeEntryStatus",
    "EmployeeAllocation",
    "AdditionalCharge",
    "Invoice",
    "InvoiceLineItem",
    "InvoiceStatus",
    "LineItemType",
    "BillingRule",
    "BillingRuleType",
    "AuditAction",
    "AuditEntityType",
    "AuditLogEntry",
]
