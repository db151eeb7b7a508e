"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Float, Date, ForeignKey, JSON, Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship

from timebill.infrastructure.db.database import Base


class UserModel(Base):
    """User accounts."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="employee")
    password_hash = Column(String(255), nullable=False, default="")
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class ClientModel(Base):
    """Billing counterparties."""
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=False)
    contact_phone = Column(String(50))
    address = Column(Text)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class ServiceModel(Base):
    """Billable work categories."""
    __tablename__ = "services"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class RateModel(Base):
    """Hourly rates per service, optionally per employee."""
    __tablename__ = "rates"

    id = Column(String(36), primary_key=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    employee_id = Column(String(36), ForeignKey("users.id"))
    hourly_rate = Column(Float, nullable=False)
    effective_from = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_rates_service_employee", "service_id", "employee_id"),
        CheckConstraint("hourly_rate > 0", name="ck_rates_positive"),
    )


class TimeEntryModel(Base):
    """Logged work."""
    __tablename__ = "time_entries"

    id = Column(String(36), primary_key=True)
    employee_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    activity_date = Column(Date, nullable=False)
    memo = Column(Text)
    rate = Column(Float, nullable=False)
    duration = Column(Float, nullable=False)
    billable = Column(Boolean, nullable=False, default=True)
    amount = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_time_entries_employee_date", "employee_id", "activity_date"),
        Index("ix_time_entries_client_date", "client_id", "activity_date"),
        CheckConstraint("duration > 0 AND duration <= 24", name="ck_time_entries_duration"),
    )


class EmployeeAllocationModel(Base):
    """Commission allocation history."""
    __tablename__ = "employee_allocations"

    id = Column(String(36), primary_key=True)
    employee_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    percentage = Column(Float, nullable=False)
    effective_from = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("percentage >= 0 AND percentage <= 100", name="ck_allocations_percentage"),
    )


class InvoiceModel(Base):
    """Issued invoices."""
    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True)
    invoice_number = Column(String(50), nullable=False)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    subtotal = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="draft")
    generated_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    line_items = relationship(
        "InvoiceLineItemModel",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLineItemModel.position",
    )

    __table_args__ = (
        UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),
    )


class InvoiceLineItemModel(Base):
    """Invoice lines; they live and die with their invoice."""
    __tablename__ = "invoice_line_items"

    id = Column(String(36), primary_key=True)
    invoice_id = Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False)
    time_entry_id = Column(String(36))
    position = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False)
    rate = Column(Float, nullable=False)
    amount = Column(Float, nullable=False)
    type = Column(String(30), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    invoice = relationship("InvoiceModel", back_populates="line_items")


class BillingRuleModel(Base):
    """Default charge templates."""
    __tablename__ = "billing_rules"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    default_amount = Column(Float, nullable=False)
    description = Column(Text)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class AuditLogModel(Base):
    """Append-only change log."""
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    action = Column(String(20), nullable=False)
    entity_type = Column(String(30), nullable=False)
    entity_id = Column(String(36), nullable=False)
    old_values = Column(JSON)
    new_values = Column(JSON)
    timestamp = Column(DateTime, nullable=False, index=True)
