# app/core/exceptions.py
"""
Domain errors raised by the crud and utils layers.

Each error carries the HTTP status it maps to; app/main.py registers a single
handler that turns them into `{"detail": ...}` JSON responses.
"""
from fastapi import status


class ExpenseTrackerError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotAuthenticatedError(ExpenseTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class NotFoundError(ExpenseTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class DuplicatePaymentError(ExpenseTrackerError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Bill already paid for this month"


class ValidationError(ExpenseTrackerError):
    status_code = 422
    default_detail = "Invalid data"
