"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

Schema Naming Convention:
- XxxPayload: Request body for create and full-replace update
- XxxResponse: Entity without relations (create/update responses)
- XxxWithYyyResponse: Entity with its direct relation (list/get responses)
"""

from library_catalog.schemas.author import (
    AuthorPayload,
    AuthorResponse,
    AuthorWithBooksResponse,
)
from library_catalog.schemas.book import (
    BookPayload,
    BookResponse,
    BookWithAuthorResponse,
)
from library_catalog.schemas.common import ErrorResponse, MessageResponse

# Resolve the forward reference from AuthorWithBooksResponse to BookResponse
AuthorWithBooksResponse.model_rebuild()

__all__ = [
    "AuthorPayload",
    "AuthorResponse",
    "AuthorWithBooksResponse",
    "BookPayload",
    "BookResponse",
    "BookWithAuthorResponse",
    "ErrorResponse",
    "MessageResponse",
]
