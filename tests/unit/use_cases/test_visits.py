"""Unit tests for visit use cases"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.visits.create_visit import CreateVisit
from src.app.use_cases.visits.discharge_visit import DischargeVisit
from src.app.use_cases.visits.dtos import CreateVisitCommandDTO, DischargeVisitCommandDTO
from src.app.use_cases.visits.list_visits import ListVisits
from src.domain.roles import Actor, UserRole
from src.domain.visit import Visit, VisitStatus, VisitType

NOW = datetime(2024, 4, 10, 10, 0)
DOCTOR = Actor("DOC001", UserRole.DOCTOR)


def make_visit(visit_type=VisitType.IPD, status=VisitStatus.ACTIVE, admitted_days_ago=3.5, **overrides):
    admitted = NOW - timedelta(days=admitted_days_ago)
    fields = dict(
        id="vis-1",
        visit_id="VIS-LQ2X7K-8H3D9A",
        patient_id="PAT20240042",
        patient_name="Jane Doe",
        doctor_id="DOC001",
        doctor_name="Dr. Smith",
        visit_type=visit_type,
        status=status,
        visit_date=admitted,
        diagnosis="Suspected angina",
        admission_date=admitted if visit_type == VisitType.IPD else None,
    )
    fields.update(overrides)
    return Visit(**fields)


@pytest.fixture
def mock_visit_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda visit: visit)
    repo.update = AsyncMock(side_effect=lambda visit: visit)
    return repo


@pytest.mark.asyncio
class TestCreateVisit:
    """Test opening visits"""

    async def test_ipd_visit_admitted_on_visit_date(self, mock_uow, mock_visit_repo):
        # Arrange
        command = CreateVisitCommandDTO(
            patient_id="PAT20240042",
            patient_name="Jane Doe",
            doctor_id="DOC001",
            doctor_name="Dr. Smith",
            visit_type=VisitType.IPD,
            ward="Cardiology",
            bed_number="C-12",
        )

        # Act
        result = await CreateVisit(mock_uow, mock_visit_repo).execute(command, DOCTOR, NOW)

        # Assert
        assert result.is_ok()
        visit = result.value
        assert visit.visit_id.startswith("VIS-")
        assert visit.status == VisitStatus.ACTIVE.value
        assert visit.admission_date == NOW
        assert visit.ward == "Cardiology"
        assert visit.length_of_stay == 0
        mock_uow.commit.assert_called_once()

    async def test_opd_visit_has_no_admission(self, mock_uow, mock_visit_repo):
        # Arrange
        command = CreateVisitCommandDTO(
            patient_id="PAT20240042",
            patient_name="Jane Doe",
            doctor_id="DOC001",
            doctor_name="Dr. Smith",
            visit_type=VisitType.OPD,
            bed_number="C-12",
        )

        # Act
        result = await CreateVisit(mock_uow, mock_visit_repo).execute(command, DOCTOR, NOW)

        # Assert
        assert result.value.admission_date is None
        assert result.value.bed_number is None
        assert result.value.length_of_stay is None


@pytest.mark.asyncio
class TestDischargeVisit:
    """Test inpatient discharge"""

    async def test_discharge_records_summary(self, mock_uow, mock_visit_repo):
        """
        Given: An IPD visit admitted 3.5 days ago
        When: The patient is discharged now
        Then: Status is discharged and the length of stay rounds up to 4 days
        """
        # Arrange
        mock_visit_repo.get_by_id = AsyncMock(return_value=make_visit())
        command = DischargeVisitCommandDTO(
            final_diagnosis="Stable angina",
            medicines_at_discharge=["Aspirin 75mg"],
            follow_up_instructions="Review in 2 weeks",
        )

        # Act
        result = await DischargeVisit(mock_uow, mock_visit_repo).execute("vis-1", command, DOCTOR, NOW)

        # Assert
        assert result.is_ok()
        visit = result.value
        assert visit.status == VisitStatus.DISCHARGED.value
        assert visit.discharge_date == NOW
        assert visit.diagnosis == "Stable angina"
        assert visit.length_of_stay == 4
        assert visit.discharge_summary["lengthOfStay"] == 4
        assert visit.discharge_summary["medicinesAtDischarge"] == ["Aspirin 75mg"]
        assert visit.discharge_summary["dischargedBy"] == "DOC001"
        mock_uow.commit.assert_called_once()

    async def test_opd_visit_cannot_be_discharged(self, mock_uow, mock_visit_repo):
        # Arrange
        mock_visit_repo.get_by_id = AsyncMock(return_value=make_visit(VisitType.OPD))

        # Act
        result = await DischargeVisit(mock_uow, mock_visit_repo).execute(
            "vis-1", DischargeVisitCommandDTO(final_diagnosis="Flu"), DOCTOR, NOW
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_VISIT_TYPE"
        mock_visit_repo.update.assert_not_called()

    async def test_already_discharged(self, mock_uow, mock_visit_repo):
        mock_visit_repo.get_by_id = AsyncMock(return_value=make_visit(status=VisitStatus.DISCHARGED))

        result = await DischargeVisit(mock_uow, mock_visit_repo).execute(
            "vis-1", DischargeVisitCommandDTO(final_diagnosis="Flu"), DOCTOR, NOW
        )

        assert result.error.code == "INVALID_VISIT_STATUS"

    async def test_discharge_before_admission_rejected(self, mock_uow, mock_visit_repo):
        # Arrange
        mock_visit_repo.get_by_id = AsyncMock(return_value=make_visit())
        command = DischargeVisitCommandDTO(
            final_diagnosis="Stable angina",
            discharge_date=NOW - timedelta(days=10),
        )

        # Act
        result = await DischargeVisit(mock_uow, mock_visit_repo).execute("vis-1", command, DOCTOR, NOW)

        # Assert
        assert result.error.code == "INVALID_DISCHARGE_DATE"


@pytest.mark.asyncio
async def test_patient_sees_only_own_visits(mock_visit_repo):
    """
    Given: A patient caller
    When: Visits are listed
    Then: The repository is queried for that patient only
    """
    # Arrange
    mock_visit_repo.list_all = AsyncMock(return_value=[make_visit()])

    # Act
    result = await ListVisits(mock_visit_repo).execute(
        actor=Actor("PAT20240042", UserRole.PATIENT), now=NOW
    )

    # Assert
    mock_visit_repo.list_all.assert_called_once_with(patient_id="PAT20240042")
    assert result.value.total == 1


def test_implausible_vitals_rejected():
    with pytest.raises(ValueError):
        CreateVisitCommandDTO(
            patient_id="PAT20240042",
            patient_name="Jane Doe",
            doctor_id="DOC001",
            doctor_name="Dr. Smith",
            visit_type=VisitType.OPD,
            vitals={"heartRate": 250},
        )


def test_final_diagnosis_required():
    with pytest.raises(ValueError):
        DischargeVisitCommandDTO(final_diagnosis="")
