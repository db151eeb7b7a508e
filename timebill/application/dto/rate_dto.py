"""
Rate and billing rule DTOs.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from timebill.application.dto.base_dto import BaseDTO, RequestDTO, ResponseDTO
from timebill.domain.models.billing_rule import BillingRule, BillingRuleType
from timebill.domain.models.rate import Rate


class CreateRateRequestDTO(RequestDTO):
    """DTO for a service default rate, or an employee override when employee_id is set."""

    service_id: str = Field(min_length=1, description="Service ID")
    employee_id: Optional[str] = Field(default=None, description="Employee ID for an override rate")
    hourly_rate: float = Field(description="Hourly rate")


class UpdateRateRequestDTO(RequestDTO):
    hourly_rate: float = Field(description="Hourly rate")


class RateResponseDTO(ResponseDTO):
    service_id: str
    employee_id: Optional[str] = None
    hourly_rate: float
    effective_from: datetime
    is_default: bool

    @classmethod
    def from_domain(cls, rate: Rate) -> "RateResponseDTO":
        return cls(
            id=rate.id,
            service_id=rate.service_id,
            employee_id=rate.employee_id,
            hourly_rate=rate.hourly_rate,
            effective_from=rate.effective_from,
            is_default=rate.is_default,
            created_at=rate.created_at,
            updated_at=rate.updated_at,
        )


class EffectiveRateResponseDTO(BaseDTO):
    service_id: str
    employee_id: Optional[str] = None
    hourly_rate: Optional[float] = Field(description="None when no rate applies")


class CreateBillingRuleRequestDTO(RequestDTO):
    name: str = Field(max_length=255, description="Rule name")
    type: BillingRuleType = Field(description="Charge category")
    default_amount: float = Field(description="Default charge amount")
    description: Optional[str] = Field(default=None, description="Line item text")


class UpdateBillingRuleRequestDTO(RequestDTO):
    name: Optional[str] = Field(default=None, max_length=255)
    type: Optional[BillingRuleType] = None
    default_amount: Optional[float] = None
    description: Optional[str] = None
    active: Optional[bool] = None


class BillingRuleResponseDTO(ResponseDTO):
    name: str
    type: BillingRuleType
    default_amount: float
    description: Optional[str] = None
    active: bool

    @classmethod
    def from_domain(cls, rule: BillingRule) -> "BillingRuleResponseDTO":
        return cls(
            id=rule.id,
            name=rule.name,
            type=rule.type,
            default_amount=rule.default_amount,
            description=rule.description,
            active=rule.active,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )
