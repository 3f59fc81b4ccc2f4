"""
Catalog error taxonomy.

Entity access modules and the aggregate writer raise these; the HTTP layer maps
them to status codes and the dashboard client maps error codes back to them.
"""
from typing import Any, Dict, Optional


class CatalogError(Exception):
    """Base class for catalog errors."""
    code = "CATALOG_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Raised when a required field is missing or blank."""
    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(CatalogError):
    """Raised when a requested id does not exist."""
    code = "NOT_FOUND"
    status_code = 404


class DuplicateValueError(CatalogError):
    """Raised when a unique value (instructor email, tag name) is already taken."""
    code = "DUPLICATE_VALUE"
    status_code = 409


class ConflictError(CatalogError):
    """Raised when a course was changed by someone else since it was read."""
    code = "CONFLICT"
    status_code = 409


class StoreError(CatalogError):
    """Raised for any other backing-store failure."""
    code = "STORE_ERROR"
    status_code = 500


class DeletionBlockedError(CatalogError):
    """Raised client-side when a delete is refused before any request is sent."""
    code = "DELETION_BLOCKED"
    status_code = 409


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (ValidationError, NotFoundError, DuplicateValueError, ConflictError, StoreError, DeletionBlockedError)
}


def is_unique_violation(exc: Exception) -> bool:
    orig = getattr(exc, "orig", exc)
    text = str(orig).lower()
    return "unique" in text or "duplicate key" in text
