"""
Books Router

CRUD endpoints for books. Same validate → store → respond sequence as the
authors router.

The existence of the referenced author is never checked here: the
foreign key on books.author_id rejects unknown authors and the error
mapping turns that into InvalidReference. Book handlers therefore touch
only the books table.
"""

from typing import List, Tuple

from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from library_catalog.dependencies import DbSession
from library_catalog.models import Book
from library_catalog.schemas import (
    BookPayload,
    BookResponse,
    BookWithAuthorResponse,
    ErrorResponse,
    MessageResponse,
)
from library_catalog.services.validation import (
    Entity,
    Operation,
    invalid_reference,
    is_storable_id,
    not_found,
    parse_identifier,
    parse_reference,
    require_text,
    store_errors,
)

TITLE_REQUIRED = "Book title is required"
AUTHOR_ID_REQUIRED = "Valid author ID is required"

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Internal failure"},
    },
)


# =============================================================================
# Queries
# =============================================================================
def list_books_with_author(db: DbSession) -> List[Book]:
    """All books in insertion order, each with its author loaded."""
    stmt = select(Book).options(selectinload(Book.author)).order_by(Book.id)
    return list(db.execute(stmt).scalars().all())


def get_book_with_author(db: DbSession, book_id: int) -> Book:
    """
    One book with its author loaded.

    Raises:
        NoResultFound: If no book has this ID
        CatalogError: NotFound for an ID too large to be stored
    """
    if not is_storable_id(book_id):
        raise not_found(Entity.BOOK)
    stmt = (
        select(Book)
        .options(selectinload(Book.author))
        .where(Book.id == book_id)
    )
    return db.execute(stmt).scalar_one()


def get_book(db: DbSession, book_id: int) -> Book:
    """One book without relations; raises NoResultFound if missing."""
    if not is_storable_id(book_id):
        raise not_found(Entity.BOOK)
    return db.execute(select(Book).where(Book.id == book_id)).scalar_one()


def validate_payload(payload: BookPayload | None) -> Tuple[str, int]:
    """Validate a book body in field order: title, then authorId."""
    payload = payload or BookPayload()
    title = require_text(payload.title, TITLE_REQUIRED)
    author_id = parse_reference(payload.author_id, AUTHOR_ID_REQUIRED)
    return title, author_id


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=List[BookWithAuthorResponse],
    summary="List all books",
    description="Get every book together with its author.",
)
def list_books(db: DbSession) -> List[BookWithAuthorResponse]:
    """List all books with their authors."""
    with store_errors(db, Entity.BOOK, Operation.LIST):
        books = list_books_with_author(db)
        return [BookWithAuthorResponse.model_validate(b) for b in books]


@router.get(
    "/{book_id}",
    response_model=BookWithAuthorResponse,
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
    summary="Get a book by ID",
)
def read_book(book_id: str, db: DbSession) -> BookWithAuthorResponse:
    """Get a single book with its author."""
    parsed_id = parse_identifier(book_id, Entity.BOOK)

    with store_errors(db, Entity.BOOK, Operation.GET):
        book = get_book_with_author(db, parsed_id)
        return BookWithAuthorResponse.model_validate(book)


@router.post(
    "",
    response_model=BookResponse,
    summary="Create a new book",
)
def create_book(
    db: DbSession,
    payload: BookPayload | None = None,
) -> BookResponse:
    """Create a book for an existing author."""
    title, author_id = validate_payload(payload)

    with store_errors(db, Entity.BOOK, Operation.CREATE):
        if not is_storable_id(author_id):
            raise invalid_reference(Entity.BOOK)
        book = Book(title=title, author_id=author_id)
        db.add(book)
        db.commit()
        db.refresh(book)
        return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
    summary="Replace a book",
    description="Replace the title and author of an existing book (no partial update).",
)
def update_book(
    book_id: str,
    db: DbSession,
    payload: BookPayload | None = None,
) -> BookResponse:
    """Update an existing book."""
    parsed_id = parse_identifier(book_id, Entity.BOOK)
    title, author_id = validate_payload(payload)

    with store_errors(db, Entity.BOOK, Operation.UPDATE):
        book = get_book(db, parsed_id)
        if not is_storable_id(author_id):
            raise invalid_reference(Entity.BOOK)
        book.title = title
        book.author_id = author_id
        db.commit()
        db.refresh(book)
        return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
    summary="Delete a book",
)
def delete_book(book_id: str, db: DbSession) -> MessageResponse:
    """Delete a book. Nothing references books, so no dependency check."""
    parsed_id = parse_identifier(book_id, Entity.BOOK)

    with store_errors(db, Entity.BOOK, Operation.DELETE):
        book = get_book(db, parsed_id)
        db.delete(book)
        db.commit()

    return MessageResponse(message="Book deleted successfully")
