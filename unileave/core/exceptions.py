"""
Domain exceptions

Services raise these; main.py maps them to JSON error responses using the
status code each one carries.
"""
from fastapi import status


class LeaveManagementError(Exception):
    """Base class for every error the service layer raises on purpose."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(LeaveManagementError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(LeaveManagementError):
    """Unknown id."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(LeaveManagementError):
    """Leave request is no longer Pending."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(LeaveManagementError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StorageError(LeaveManagementError):
    """Constraint violation or failed transaction."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
