"""
Book Pydantic Schemas

The JSON field for the foreign key is ``authorId`` while the model
attribute is ``author_id``. Response schemas accept either name on input
(so they validate both ORM objects and API JSON) and always serialise
``authorId``.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from library_catalog.schemas.author import AuthorResponse


class BookPayload(BaseModel):
    """
    Request body for creating or replacing a book.

    Both fields are checked by the validation layer, not by Pydantic.
    """

    title: Any = Field(
        default=None,
        description="Book title (required, trimmed)",
        examples=["1984"],
    )
    author_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("authorId", "author_id"),
        description="ID of an existing author",
        examples=[1],
    )

    model_config = ConfigDict(extra="ignore")


class BookResponse(BaseModel):
    """Book as returned by create and update."""

    id: int = Field(
        ...,
        description="Unique identifier assigned by the store",
    )
    title: str = Field(
        ...,
        description="Book title",
    )
    author_id: int = Field(
        ...,
        validation_alias=AliasChoices("author_id", "authorId"),
        serialization_alias="authorId",
        description="ID of the book's author",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"id": 1, "title": "1984", "authorId": 1},
        },
    )


class BookWithAuthorResponse(BookResponse):
    """Book with its author resolved, returned by list and get."""

    author: AuthorResponse = Field(
        ...,
        description="The book's author",
    )
