"""Unit tests for medicine stock status"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from src.domain.calculations import (
    calculate_medicine_status,
    calculate_stock_value,
    days_until_expiry,
    is_expired,
    is_expiring_soon,
)
from src.domain.medicine import MedicineStatus

TODAY = date(2024, 6, 15)


class TestMedicineStatus:
    """Test status precedence: expired, out_of_stock, expiring_soon, low_stock, available"""

    def test_out_of_stock_with_future_expiry(self):
        status = calculate_medicine_status(0, 10, TODAY + timedelta(days=365), TODAY)

        assert status == MedicineStatus.OUT_OF_STOCK

    def test_expiring_soon_takes_precedence_over_low_stock(self):
        """
        Given: 100 units, threshold 50, expiring in 10 days, 30 day window
        When: Status is calculated
        Then: expiring_soon wins
        """
        status = calculate_medicine_status(100, 50, TODAY + timedelta(days=10), TODAY, 30)

        assert status == MedicineStatus.EXPIRING_SOON

    def test_expired_takes_precedence_over_out_of_stock(self):
        status = calculate_medicine_status(0, 10, TODAY - timedelta(days=1), TODAY)

        assert status == MedicineStatus.EXPIRED

    def test_low_stock_at_threshold(self):
        status = calculate_medicine_status(10, 10, TODAY + timedelta(days=365), TODAY)

        assert status == MedicineStatus.LOW_STOCK

    def test_available(self):
        status = calculate_medicine_status(11, 10, TODAY + timedelta(days=365), TODAY)

        assert status == MedicineStatus.AVAILABLE

    def test_expiring_today_is_expiring_soon_not_expired(self):
        status = calculate_medicine_status(100, 10, TODAY, TODAY)

        assert status == MedicineStatus.EXPIRING_SOON

    def test_window_is_configurable(self):
        expiry = TODAY + timedelta(days=45)

        assert calculate_medicine_status(100, 10, expiry, TODAY, 30) == MedicineStatus.AVAILABLE
        assert calculate_medicine_status(100, 10, expiry, TODAY, 60) == MedicineStatus.EXPIRING_SOON

    @pytest.mark.parametrize("quantity", [0, 5, 10, 500])
    @pytest.mark.parametrize("days", [-30, -1])
    def test_expired_always_wins(self, quantity, days):
        status = calculate_medicine_status(quantity, 10, TODAY + timedelta(days=days), TODAY)

        assert status == MedicineStatus.EXPIRED

    @pytest.mark.parametrize("days", [0, 15, 30])
    def test_out_of_stock_beats_expiring_soon(self, days):
        status = calculate_medicine_status(0, 10, TODAY + timedelta(days=days), TODAY)

        assert status == MedicineStatus.OUT_OF_STOCK


class TestExpiryHelpers:
    def test_days_until_expiry_accepts_datetime(self):
        assert days_until_expiry(datetime(2024, 6, 20, 8, 30), TODAY) == 5

    def test_is_expired(self):
        assert is_expired(TODAY - timedelta(days=1), TODAY) is True
        assert is_expired(TODAY, TODAY) is False

    def test_is_expiring_soon_excludes_expired(self):
        assert is_expiring_soon(TODAY - timedelta(days=1), TODAY) is False
        assert is_expiring_soon(TODAY + timedelta(days=30), TODAY, 30) is True
        assert is_expiring_soon(TODAY + timedelta(days=31), TODAY, 30) is False

    def test_stock_value(self):
        assert calculate_stock_value(40, "2.25") == Decimal("90.00")
