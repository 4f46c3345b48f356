"""Unit tests for DispenseMedicine and RestockMedicine use cases

Tests cover:
- Stock decrement and value refresh on dispense
- Insufficient stock and expired stock are rejected
- Restock adds units and refreshes batch details
- Rollback on repository failure
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.inventory.dispense_medicine import DispenseMedicine
from src.app.use_cases.inventory.dtos import DispenseCommandDTO, RestockCommandDTO
from src.app.use_cases.inventory.restock_medicine import RestockMedicine
from src.domain.medicine import Medicine, MedicineCategory, MedicineStatus
from src.domain.roles import Actor, UserRole

NOW = datetime(2024, 5, 10, 14, 0)
TODAY = NOW.date()
NURSE = Actor("NUR001", UserRole.NURSE)


def make_medicine(quantity=20, min_threshold=10, expiry_date=None, unit_price="2.50"):
    unit_price = Decimal(unit_price)
    return Medicine(
        id="med-1",
        medicine_id="MED123456789",
        name="Paracetamol 500mg",
        category=MedicineCategory.TABLET,
        manufacturer="Acme Pharma",
        batch_number="B-2291",
        quantity=quantity,
        min_threshold=min_threshold,
        unit_price=unit_price,
        total_value=Decimal(quantity) * unit_price,
        expiry_date=expiry_date or TODAY + timedelta(days=365),
        status=MedicineStatus.AVAILABLE,
        created_at=NOW - timedelta(days=30),
        updated_at=NOW - timedelta(days=30),
    )


@pytest.fixture
def mock_medicine_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda medicine: medicine)
    return repo


@pytest.fixture
def mock_dispense_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda dispense: dispense)
    return repo


@pytest.fixture
def dispense_use_case(mock_uow, mock_medicine_repo, mock_dispense_repo):
    return DispenseMedicine(
        uow=mock_uow,
        medicine_repo=mock_medicine_repo,
        dispense_repo=mock_dispense_repo,
        expiring_soon_days=30,
    )


def dispense_command(quantity):
    return DispenseCommandDTO(quantity=quantity, patient_id="PAT20240042", patient_name="Jane Doe")


@pytest.mark.asyncio
class TestDispenseMedicine:
    """Test dispensing"""

    async def test_dispense_decrements_stock(self, dispense_use_case, mock_medicine_repo, mock_uow):
        """
        Given: 20 tablets in stock at 2.50 with a threshold of 10
        When: 12 are dispensed
        Then: 8 remain, value is 20.00 and status becomes low_stock
        """
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(return_value=make_medicine())

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(12), NURSE, NOW)

        # Assert
        assert result.is_ok()
        medicine = result.value.medicine
        assert medicine.quantity == 8
        assert medicine.total_value == Decimal("20.00")
        assert medicine.status == MedicineStatus.LOW_STOCK.value
        mock_uow.commit.assert_called_once()

    async def test_dispense_record_priced_at_unit_price(self, dispense_use_case, mock_medicine_repo):
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(return_value=make_medicine())

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(4), NURSE, NOW)

        # Assert
        dispense = result.value.dispense
        assert dispense.dispense_id.startswith("DSP")
        assert dispense.quantity == 4
        assert dispense.unit_price == Decimal("2.50")
        assert dispense.total_amount == Decimal("10.00")
        assert dispense.dispensed_by == "NUR001"
        assert dispense.dispensed_date == NOW

    async def test_dispensing_everything_marks_out_of_stock(self, dispense_use_case, mock_medicine_repo):
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(return_value=make_medicine(quantity=5))

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(5), NURSE, NOW)

        # Assert
        assert result.value.medicine.quantity == 0
        assert result.value.medicine.status == MedicineStatus.OUT_OF_STOCK.value

    async def test_insufficient_stock_rejected(
        self, dispense_use_case, mock_medicine_repo, mock_dispense_repo, mock_uow
    ):
        """
        Given: 5 units in stock
        When: 10 are requested
        Then: INSUFFICIENT_STOCK and the stock is untouched
        """
        # Arrange
        medicine = make_medicine(quantity=5)
        mock_medicine_repo.get_by_id = AsyncMock(return_value=medicine)

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(10), NURSE, NOW)

        # Assert
        assert result.is_err()
        assert result.error.code == "INSUFFICIENT_STOCK"
        assert result.error.message == "Insufficient stock for Paracetamol 500mg: requested 10, available 5"
        assert medicine.quantity == 5
        mock_dispense_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_expired_medicine_rejected(self, dispense_use_case, mock_medicine_repo):
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(
            return_value=make_medicine(expiry_date=TODAY - timedelta(days=1))
        )

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(1), NURSE, NOW)

        # Assert
        assert result.is_err()
        assert result.error.code == "MEDICINE_EXPIRED"

    async def test_medicine_expiring_today_can_be_dispensed(self, dispense_use_case, mock_medicine_repo):
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(return_value=make_medicine(expiry_date=TODAY))

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(1), NURSE, NOW)

        # Assert
        assert result.is_ok()
        assert result.value.medicine.status == MedicineStatus.EXPIRING_SOON.value

    async def test_medicine_not_found(self, dispense_use_case, mock_medicine_repo):
        mock_medicine_repo.get_by_id = AsyncMock(return_value=None)

        result = await dispense_use_case.execute("missing", dispense_command(1), NURSE, NOW)

        assert result.error.code == "MEDICINE_NOT_FOUND"

    async def test_stock_update_failure_rolls_back(self, dispense_use_case, mock_medicine_repo, mock_uow):
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(return_value=make_medicine())
        mock_medicine_repo.update = AsyncMock(side_effect=Exception("Database error"))

        # Act
        result = await dispense_use_case.execute("med-1", dispense_command(1), NURSE, NOW)

        # Assert
        assert result.is_err()
        assert result.error.code == "DISPENSE_MEDICINE_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.fixture
def mock_restock_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda restock: restock)
    return repo


@pytest.mark.asyncio
class TestRestockMedicine:
    """Test restocking"""

    async def test_restock_adds_units_and_refreshes_batch(
        self, mock_uow, mock_medicine_repo, mock_restock_repo
    ):
        """
        Given: 3 units in stock
        When: 100 units of a new batch at 3.00 arrive
        Then: 103 units valued at 309.00 with the new batch and expiry
        """
        # Arrange
        mock_medicine_repo.get_by_id = AsyncMock(return_value=make_medicine(quantity=3))
        use_case = RestockMedicine(mock_uow, mock_medicine_repo, mock_restock_repo, 30)
        new_expiry = TODAY + timedelta(days=400)
        command = RestockCommandDTO(
            quantity=100,
            unit_price=Decimal("3.00"),
            batch_number="B-3001",
            expiry_date=new_expiry,
            vendor_name="MedSupply Co",
        )

        # Act
        result = await use_case.execute("med-1", command, Actor("ADM001", UserRole.ADMIN), TODAY)

        # Assert
        assert result.is_ok()
        medicine = result.value.medicine
        assert medicine.quantity == 103
        assert medicine.unit_price == Decimal("3.00")
        assert medicine.total_value == Decimal("309.00")
        assert medicine.batch_number == "B-3001"
        assert medicine.expiry_date == new_expiry
        assert medicine.purchase_date == TODAY
        assert medicine.vendor_name == "MedSupply Co"
        assert medicine.status == MedicineStatus.AVAILABLE.value
        assert result.value.restock.restocked_by == "ADM001"
        mock_restock_repo.create.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_restock_unknown_medicine(self, mock_uow, mock_medicine_repo, mock_restock_repo):
        mock_medicine_repo.get_by_id = AsyncMock(return_value=None)
        use_case = RestockMedicine(mock_uow, mock_medicine_repo, mock_restock_repo, 30)

        result = await use_case.execute(
            "missing",
            RestockCommandDTO(quantity=1, unit_price=Decimal("1"), expiry_date=date(2030, 1, 1)),
            today=TODAY,
        )

        assert result.error.code == "MEDICINE_NOT_FOUND"
        mock_restock_repo.create.assert_not_called()


def test_restock_quantity_must_be_positive():
    with pytest.raises(ValueError):
        RestockCommandDTO(quantity=0, unit_price=Decimal("1"), expiry_date=date(2030, 1, 1))
