"""Patient and visit calculators"""

import math
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional


def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
    """Age in whole years; the birthday must have passed this year to count"""
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def calculate_length_of_stay(
    admission_date: datetime,
    discharge_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> int:
    """Days between admission and discharge (or now), rounded up"""
    end_date = discharge_date or now or datetime.utcnow()
    return math.ceil(abs(end_date - admission_date) / timedelta(days=1))


VITAL_RANGES = {
    "temperature": (90, 110, "Temperature must be between 90-110°F"),
    "heartRate": (30, 200, "Heart rate must be between 30-200 bpm"),
    "respiratoryRate": (8, 40, "Respiratory rate must be between 8-40 breaths/min"),
    "oxygenSaturation": (70, 100, "Oxygen saturation must be between 70-100%"),
}


def validate_vitals(vitals: Dict[str, Any]) -> Dict[str, str]:
    """Field name -> message for each reading outside its plausible range"""
    errors = {}
    for field, (low, high, message) in VITAL_RANGES.items():
        reading = vitals.get(field)
        if reading in (None, "", 0):
            continue
        try:
            value = float(reading)
        except (TypeError, ValueError):
            errors[field] = message
            continue
        if value < low or value > high:
            errors[field] = message
    return errors
