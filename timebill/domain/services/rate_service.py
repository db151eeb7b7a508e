"""
Rate resolution.
An employee-specific rate always beats the service default.
"""

from typing import Iterable, Optional, Tuple

from timebill.domain.models.rate import Rate


def _latest(rates: Iterable[Rate]) -> Optional[Rate]:
    latest = None
    for rate in rates:
        if latest is None or rate.effective_from > latest.effective_from:
            latest = rate
    return latest


def _employee_and_default(
    rates: Iterable[Rate],
    service_id: str,
    employee_id: Optional[str]
) -> Tuple[Optional[Rate], Optional[Rate]]:
    rates = [rate for rate in rates if rate.service_id == service_id]
    employee_rate = None
    if employee_id is not None:
        employee_rate = _latest(rate for rate in rates if rate.employee_id == employee_id)
    return employee_rate, _latest(rate for rate in rates if rate.employee_id is None)


def find_effective_rate(
    rates: Iterable[Rate],
    service_id: str,
    employee_id: Optional[str] = None
) -> Optional[Rate]:
    """Return the Rate record that applies, or None."""
    employee_rate, default_rate = _employee_and_default(rates, service_id, employee_id)
    return employee_rate if employee_rate is not None else default_rate


def get_effective_rate(
    rates: Iterable[Rate],
    service_id: str,
    employee_id: Optional[str] = None
) -> Optional[float]:
    """
    Hourly rate for (service, employee).

    Lookup order is the employee's own rate for the service, then the
    service default. Returns None when neither exists.
    """
    employee_rate, default_rate = _employee_and_default(rates, service_id, employee_id)
    return resolve_rate(
        employee_rate.hourly_rate if employee_rate is not None else None,
        default_rate.hourly_rate if default_rate is not None else None,
    )


def resolve_rate(employee_rate: Optional[float], default_rate: Optional[float]) -> Optional[float]:
    """Pick the employee rate when there is one, otherwise the default."""
    if employee_rate is not None:
        return employee_rate
    return default_rate
