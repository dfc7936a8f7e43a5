"""
Authors Router

CRUD endpoints for authors.

Every handler follows the same sequence:
1. Validate the identifier and body (no database access yet)
2. Run a single store operation inside store_errors()
3. Shape the response

List and get always include the author's books; create and update
return the bare author.
"""

from typing import List

from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from library_catalog.dependencies import DbSession
from library_catalog.models import Author
from library_catalog.schemas import (
    AuthorPayload,
    AuthorResponse,
    AuthorWithBooksResponse,
    ErrorResponse,
    MessageResponse,
)
from library_catalog.services.validation import (
    Entity,
    Operation,
    is_storable_id,
    not_found,
    parse_identifier,
    require_text,
    store_errors,
)

NAME_REQUIRED = "Author name is required"

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Internal failure"},
    },
)


# =============================================================================
# Queries
# =============================================================================
def list_authors_with_books(db: DbSession) -> List[Author]:
    """All authors in insertion order, each with its books loaded."""
    stmt = select(Author).options(selectinload(Author.books)).order_by(Author.id)
    return list(db.execute(stmt).scalars().all())


def get_author_with_books(db: DbSession, author_id: int) -> Author:
    """
    One author with its books loaded.

    Raises:
        NoResultFound: If no author has this ID
        CatalogError: NotFound for an ID too large to be stored
    """
    if not is_storable_id(author_id):
        raise not_found(Entity.AUTHOR)
    stmt = (
        select(Author)
        .options(selectinload(Author.books))
        .where(Author.id == author_id)
    )
    return db.execute(stmt).scalar_one()


def get_author(db: DbSession, author_id: int) -> Author:
    """One author without relations; raises NoResultFound if missing."""
    if not is_storable_id(author_id):
        raise not_found(Entity.AUTHOR)
    return db.execute(select(Author).where(Author.id == author_id)).scalar_one()


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=List[AuthorWithBooksResponse],
    summary="List all authors",
    description="Get every author together with their books.",
)
def list_authors(db: DbSession) -> List[AuthorWithBooksResponse]:
    """List all authors with their books."""
    with store_errors(db, Entity.AUTHOR, Operation.LIST):
        authors = list_authors_with_books(db)
        return [AuthorWithBooksResponse.model_validate(a) for a in authors]


@router.get(
    "/{author_id}",
    response_model=AuthorWithBooksResponse,
    responses={404: {"model": ErrorResponse, "description": "Author not found"}},
    summary="Get an author by ID",
)
def read_author(author_id: str, db: DbSession) -> AuthorWithBooksResponse:
    """Get a single author with their books."""
    parsed_id = parse_identifier(author_id, Entity.AUTHOR)

    with store_errors(db, Entity.AUTHOR, Operation.GET):
        author = get_author_with_books(db, parsed_id)
        return AuthorWithBooksResponse.model_validate(author)


@router.post(
    "",
    response_model=AuthorResponse,
    summary="Create a new author",
)
def create_author(
    db: DbSession,
    payload: AuthorPayload | None = None,
) -> AuthorResponse:
    """Create an author; the store assigns the ID."""
    name = require_text((payload or AuthorPayload()).name, NAME_REQUIRED)

    with store_errors(db, Entity.AUTHOR, Operation.CREATE):
        author = Author(name=name)
        db.add(author)
        db.commit()
        db.refresh(author)
        return AuthorResponse.model_validate(author)


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={404: {"model": ErrorResponse, "description": "Author not found"}},
    summary="Replace an author",
    description="Replace every field of an existing author (no partial update).",
)
def update_author(
    author_id: str,
    db: DbSession,
    payload: AuthorPayload | None = None,
) -> AuthorResponse:
    """Update an existing author."""
    parsed_id = parse_identifier(author_id, Entity.AUTHOR)
    name = require_text((payload or AuthorPayload()).name, NAME_REQUIRED)

    with store_errors(db, Entity.AUTHOR, Operation.UPDATE):
        author = get_author(db, parsed_id)
        author.name = name
        db.commit()
        db.refresh(author)
        return AuthorResponse.model_validate(author)


@router.delete(
    "/{author_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Author not found"}},
    summary="Delete an author",
    description="Delete an author. Fails while any book still references the author.",
)
def delete_author(author_id: str, db: DbSession) -> MessageResponse:
    """Delete an author that has no books."""
    parsed_id = parse_identifier(author_id, Entity.AUTHOR)

    with store_errors(db, Entity.AUTHOR, Operation.DELETE):
        author = get_author(db, parsed_id)
        db.delete(author)
        db.commit()

    return MessageResponse(message="Author deleted successfully")
