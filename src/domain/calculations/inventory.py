"""Medicine stock status rules"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Union

from src.domain.medicine import MedicineStatus
from src.domain.calculations.billing import to_decimal

DEFAULT_EXPIRING_SOON_DAYS = 30

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until_expiry(expiry_date: DateLike, today: Optional[date] = None) -> int:
    today = today or date.today()
    return (_as_date(expiry_date) - today).days


def is_expired(expiry_date: DateLike, today: Optional[date] = None) -> bool:
    return days_until_expiry(expiry_date, today) < 0


def is_expiring_soon(
    expiry_date: DateLike,
    today: Optional[date] = None,
    days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> bool:
    """Not yet expired, and expiring within ``days``"""
    remaining = days_until_expiry(expiry_date, today)
    return 0 <= remaining <= days


def calculate_medicine_status(
    quantity: int,
    min_threshold: int,
    expiry_date: DateLike,
    today: Optional[date] = None,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> MedicineStatus:
    """
    Classify stock into a display status

    Precedence, first match wins: expired, out_of_stock, expiring_soon,
    low_stock, available.
    """
    if is_expired(expiry_date, today):
        return MedicineStatus.EXPIRED
    if quantity == 0:
        return MedicineStatus.OUT_OF_STOCK
    if is_expiring_soon(expiry_date, today, expiring_soon_days):
        return MedicineStatus.EXPIRING_SOON
    if quantity <= min_threshold:
        return MedicineStatus.LOW_STOCK
    return MedicineStatus.AVAILABLE


def medicine_status(
    medicine: Any,
    today: Optional[date] = None,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> MedicineStatus:
    """calculate_medicine_status for an entity exposing the stock fields"""
    return calculate_medicine_status(
        quantity=medicine.quantity,
        min_threshold=medicine.min_threshold,
        expiry_date=medicine.expiry_date,
        today=today,
        expiring_soon_days=expiring_soon_days,
    )


def calculate_stock_value(quantity: int, unit_price: Any) -> Decimal:
    return Decimal(quantity) * to_decimal(unit_price)
