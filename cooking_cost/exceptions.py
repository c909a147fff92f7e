"""Application error taxonomy.

Services raise these; the handlers registered in main.py turn them into the
error envelope. Store errors are reclassified here so raw driver codes never
reach API callers.
"""
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError


class AppError(Exception):
    """Base class for errors with an HTTP status and a stable error code."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if error_code:
            self.error_code = error_code


class ValidationError(AppError):
    """Malformed or out-of-range input. Caller's fault, never retried."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(AppError):
    """A referenced entity id does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(AppError):
    """Referential-integrity or uniqueness violation."""

    status_code = 409
    error_code = "CONFLICT"


class InternalError(AppError):
    """Unexpected store or programming failure."""

    status_code = 500
    error_code = "INTERNAL_ERROR"


def classify_integrity_error(error: IntegrityError) -> AppError:
    """Map a database integrity error to the application taxonomy.

    PostgreSQL reports SQLSTATE codes (23505 unique, 23503 foreign key);
    SQLite only gives a message, so both are checked.
    """
    orig = getattr(error, "orig", None)
    pgcode = getattr(orig, "pgcode", None)
    text = str(orig if orig is not None else error).lower()

    if pgcode == "23505" or "unique" in text or "duplicate" in text:
        if "uk_ingredient" in text or "ingredients." in text:
            return ConflictError(
                "Ingredient already registered (name, store and unit must be unique)",
                error_code="DUPLICATE_ENTRY",
            )
        return ConflictError("Duplicate entry", error_code="DUPLICATE_ENTRY")
    if pgcode == "23503" or "foreign key" in text:
        return ConflictError("Operation violates a reference between records")
    if pgcode == "23502" or "not null" in text:
        return ValidationError("A required field is missing")
    return ValidationError("Data violates a database constraint")
