"""Unit tests for use-case error to HTTP status mapping"""

import pytest

from libs.result import Error
from src.api.error import ClientError, error_status, raise_for_error


@pytest.mark.parametrize(
    "code,expected",
    [
        ("PATIENT_NOT_FOUND", 404),
        ("INVOICE_NOT_FOUND", 404),
        ("PERMISSION_DENIED", 403),
        ("PATIENT_EMAIL_EXISTS", 409),
        ("INVOICE_HAS_PAYMENTS", 409),
        ("RECORD_PAYMENT_FAILED", 500),
        ("FILE_UPLOAD_FAILED", 500),
        ("INSUFFICIENT_STOCK", 400),
        ("PAYMENT_EXCEEDS_BALANCE", 400),
        ("INVOICE_FINALIZED", 400),
    ],
)
def test_error_status(code, expected):
    assert error_status(Error(code=code, message="x")) == expected


def test_raise_for_error_renders_body():
    # Arrange
    error = Error(code="INSUFFICIENT_STOCK", message="Not enough", reason="Dispensed quantity exceeds stock")

    # Act
    with pytest.raises(ClientError) as exc_info:
        raise_for_error(error)

    # Assert
    assert exc_info.value.status_code == 400
    assert exc_info.value.to_dict() == {
        "error": {
            "code": "INSUFFICIENT_STOCK",
            "message": "Not enough",
            "reason": "Dispensed quantity exceeds stock",
        }
    }


def test_reason_omitted_when_absent():
    body = ClientError(Error(code="PATIENT_NOT_FOUND", message="missing"), 404).to_dict()

    assert body == {"error": {"code": "PATIENT_NOT_FOUND", "message": "missing"}}
