"""
Error Taxonomy

Every failure the API reports belongs to exactly one ErrorCategory. The
category decides the HTTP status; the message is the only text the caller
ever sees, so it must never contain database or driver details.

Usage:
    raise CatalogError(ErrorCategory.NOT_FOUND, "Author not found")
"""

from enum import StrEnum

from fastapi import status


class ErrorCategory(StrEnum):
    """Closed set of failure categories exposed over HTTP."""

    INVALID_IDENTIFIER = "InvalidIdentifier"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    INVALID_REFERENCE = "InvalidReference"
    NOT_FOUND = "NotFound"
    CONFLICT_DEPENDENCY = "ConflictDependency"
    INTERNAL_FAILURE = "InternalFailure"

    @property
    def status_code(self) -> int:
        """HTTP status code reported for this category."""
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorCategory.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.MISSING_REQUIRED_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.INVALID_REFERENCE: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.CONFLICT_DEPENDENCY: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.INTERNAL_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class CatalogError(Exception):
    """
    A classified, caller-safe failure.

    Attributes:
        category: Which ErrorCategory the failure belongs to
        message: Text returned to the caller as {"message": ...}
    """

    def __init__(self, category: ErrorCategory, message: str) -> None:
        super().__init__(message)
        self.category = category
        self.message = message

    @property
    def status_code(self) -> int:
        return self.category.status_code

    def to_dict(self) -> dict[str, str]:
        """Error body sent to the caller."""
        return {"message": self.message}

    def __repr__(self) -> str:
        return f"CatalogError({self.category.value}, {self.message!r})"
