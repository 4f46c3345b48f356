"""Human-readable display codes

Database rows use UUID primary keys; these codes are what staff see on
screens and printed documents. Invoice numbers are sequential and are
allocated by the invoice repository (see ``format_invoice_number``).
"""

import random
import string
import time
from datetime import datetime
from typing import Optional

BASE36 = string.digits + string.ascii_lowercase


def _millis() -> int:
    return int(time.time() * 1000)


def _tail6() -> str:
    return str(_millis())[-6:]


def _rand_digits(width: int) -> str:
    return str(random.randrange(10 ** width)).zfill(width)


def _rand_base36(length: int) -> str:
    return "".join(random.choice(BASE36) for _ in range(length))


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


def generate_patient_id(now: Optional[datetime] = None) -> str:
    year = (now or datetime.utcnow()).year
    return f"PAT{year}{_rand_digits(4)}"


def generate_visit_id() -> str:
    return f"VIS-{to_base36(_millis())}-{_rand_base36(6)}".upper()


def generate_payment_id() -> str:
    return f"PAY-{_tail6()}-{_rand_digits(3)}"


def generate_medicine_id() -> str:
    return f"MED{_tail6()}{_rand_digits(3)}"


def generate_dispense_id() -> str:
    return f"DSP{_tail6()}{_rand_digits(3)}"


def generate_report_id() -> str:
    return f"RPT-{_millis()}-{_rand_base36(6)}".upper()


def generate_notification_id() -> str:
    return f"NOT-{_millis()}-{_rand_base36(9)}"


def format_invoice_number(year: int, sequence: int) -> str:
    """INV-2024-000042"""
    return f"INV-{year}-{sequence:06d}"
