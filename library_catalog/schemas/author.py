"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

Request bodies are deliberately loose: ``name`` is accepted as any JSON
value so that a missing or blank name is reported by the validation layer
as a 400 with the catalog's own message, instead of FastAPI's generic
422 response.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from library_catalog.schemas.book import BookResponse


class AuthorPayload(BaseModel):
    """
    Request body for creating or replacing an author.

    PUT uses the same body as POST: updates replace every field.
    """

    name: Any = Field(
        default=None,
        description="Author's full name (required, trimmed)",
        examples=["George Orwell", "Jane Austen"],
    )

    model_config = ConfigDict(extra="ignore")


class AuthorResponse(BaseModel):
    """
    Author as returned by create and update.

    model_config with from_attributes=True allows creating this schema
    straight from the SQLAlchemy model instance.
    """

    id: int = Field(
        ...,
        description="Unique identifier assigned by the store",
        examples=[1, 42],
    )
    name: str = Field(
        ...,
        description="Author's full name",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"id": 1, "name": "George Orwell"},
        },
    )


class AuthorWithBooksResponse(AuthorResponse):
    """Author with the books that reference it, returned by list and get."""

    books: list["BookResponse"] = Field(
        default_factory=list,
        description="Books written by this author",
    )
