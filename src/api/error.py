"""API error types

Use-case errors are raised as ClientError and rendered by the handlers in
``src.api.app`` as ``{"error": {"code", "message"}}``.
"""

from fastapi import status
from libs.result import Error

FORBIDDEN_CODES = {"PERMISSION_DENIED"}
CONFLICT_CODES = {"PATIENT_EMAIL_EXISTS", "INVOICE_HAS_PAYMENTS"}


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"code": self.error.code, "message": self.error.message}
        if self.error.reason:
            body["reason"] = self.error.reason
        return {"error": body}


def error_status(error: Error) -> int:
    """HTTP status for a use-case error code"""
    if error.code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if error.code in FORBIDDEN_CODES:
        return status.HTTP_403_FORBIDDEN
    if error.code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    if error.code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def raise_for_error(error: Error) -> None:
    raise ClientError(error, status_code=error_status(error))
