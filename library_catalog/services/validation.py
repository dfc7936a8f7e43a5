"""
Request Validation and Store Error Mapping

This module is the boundary between the HTTP routes and the entity store.

1. Validation
   - Runs before any database call
   - Identifiers must parse to a positive integer
   - Names and titles must contain something other than whitespace and
     are stored trimmed

2. Error Mapping
   - Every exception escaping a store call is turned into exactly one
     CatalogError (see library_catalog.errors)
   - Foreign key violations mean "unknown author" on writes and
     "still referenced" on deletes
   - Anything unrecognised becomes InternalFailure, is logged with its
     traceback and is reported with a generic message only

Usage:
    author_id = parse_identifier(raw_id, Entity.AUTHOR)
    name = require_text(payload.name, "Author name is required")

    with store_errors(db, Entity.AUTHOR, Operation.UPDATE):
        ...
"""

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from typing import Any

from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.orm import Session

from library_catalog.errors import CatalogError, ErrorCategory

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# PostgreSQL SQLSTATE for foreign_key_violation
_PG_FOREIGN_KEY_VIOLATION = "23503"

# Id columns are Integer, which PostgreSQL stores in 32 bits
MAX_STORED_ID = 2**31 - 1


class Entity(StrEnum):
    """Entities exposed by the API."""

    AUTHOR = "author"
    BOOK = "book"

    @property
    def label(self) -> str:
        """Capitalised name used at the start of messages."""
        return self.value.capitalize()


class Operation(StrEnum):
    """Store operations performed by the route handlers."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Entity a write may reference through a foreign key
_REFERENCES = {
    Entity.BOOK: Entity.AUTHOR,
}

# Rows that can block deleting an entity
_DEPENDENTS = {
    Entity.AUTHOR: "books",
}


# =============================================================================
# Field Validation
# =============================================================================
def _to_positive_int(raw: Any) -> int | None:
    """Return raw as a positive int, or None if it is not one."""
    # bool is a subclass of int, but true/false are not identifiers
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str) and _INTEGER_PATTERN.fullmatch(raw.strip()):
        value = int(raw.strip())
    else:
        return None
    return value if value > 0 else None


def parse_identifier(raw: Any, entity: Entity) -> int:
    """
    Validate an entity identifier.

    Args:
        raw: The identifier as received (path segment or JSON value)
        entity: Entity the identifier belongs to, used in the message

    Returns:
        The identifier as a positive integer

    Raises:
        CatalogError: InvalidIdentifier if raw is not a positive integer
    """
    value = _to_positive_int(raw)
    if value is None:
        raise CatalogError(
            ErrorCategory.INVALID_IDENTIFIER,
            f"Invalid {entity} ID",
        )
    return value


def require_text(value: Any, message: str) -> str:
    """
    Validate a required name or title.

    Returns:
        The value with surrounding whitespace removed

    Raises:
        CatalogError: MissingRequiredField if value is absent, not a
            string, or blank after trimming
    """
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(ErrorCategory.MISSING_REQUIRED_FIELD, message)
    return value.strip()


def parse_reference(raw: Any, message: str) -> int:
    """
    Validate a foreign key field such as a book's authorId.

    Only the shape is checked here; whether the referenced row exists is
    left to the database.

    Raises:
        CatalogError: MissingRequiredField if raw is absent,
            InvalidIdentifier if it is not a positive integer
    """
    if raw is None:
        raise CatalogError(ErrorCategory.MISSING_REQUIRED_FIELD, message)
    value = _to_positive_int(raw)
    if value is None:
        raise CatalogError(ErrorCategory.INVALID_IDENTIFIER, message)
    return value


def is_storable_id(value: int) -> bool:
    """Whether an id fits the id columns; larger ids cannot match any row."""
    return value <= MAX_STORED_ID


# =============================================================================
# Store Error Mapping
# =============================================================================
def not_found(entity: Entity) -> CatalogError:
    return CatalogError(ErrorCategory.NOT_FOUND, f"{entity.label} not found")


def invalid_reference(entity: Entity) -> CatalogError:
    """Error for a write naming a row of another entity that does not exist."""
    referenced = _REFERENCES.get(entity)
    message = f"Invalid {referenced} ID" if referenced else "Invalid reference"
    return CatalogError(ErrorCategory.INVALID_REFERENCE, message)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """
    Check whether an IntegrityError was caused by a foreign key.

    PostgreSQL drivers expose the SQLSTATE code; SQLite only reports
    "FOREIGN KEY constraint failed" in the message.
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _PG_FOREIGN_KEY_VIOLATION:
        return True
    return "foreign key" in str(orig).lower()


def _failure_message(entity: Entity, operation: Operation) -> str:
    if operation is Operation.LIST:
        return f"Failed to fetch {entity}s"
    if operation is Operation.GET:
        return f"Failed to fetch {entity}"
    return f"Failed to {operation} {entity}"


def classify_store_error(
    exc: BaseException,
    entity: Entity,
    operation: Operation,
) -> CatalogError:
    """
    Map any exception raised around a store call to a CatalogError.

    The mapping is total: unknown exceptions become InternalFailure.

    Args:
        exc: The exception that escaped the store call
        entity: Entity the handler was working on
        operation: What the handler was doing

    Returns:
        The CatalogError to report to the caller
    """
    if isinstance(exc, CatalogError):
        return exc

    if isinstance(exc, NoResultFound):
        logger.info(f"{entity.label} not found during {operation}")
        return not_found(entity)

    if isinstance(exc, IntegrityError) and is_foreign_key_violation(exc):
        if operation is Operation.DELETE:
            dependents = _DEPENDENTS.get(entity)
            logger.warning(f"Refused to delete {entity} still referenced by {dependents or 'other rows'}")
            if dependents:
                message = (
                    f"Cannot delete {entity}. "
                    f"This {entity} has {dependents} associated with them."
                )
            else:
                message = f"Cannot delete {entity}. Other records depend on it."
            return CatalogError(ErrorCategory.CONFLICT_DEPENDENCY, message)

        if operation in (Operation.CREATE, Operation.UPDATE):
            referenced = _REFERENCES.get(entity)
            logger.warning(f"Rejected {entity} {operation} with unknown {referenced or 'reference'}")
            return invalid_reference(entity)

    logger.error(
        f"Unexpected store failure during {entity} {operation}: {exc!r}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return CatalogError(
        ErrorCategory.INTERNAL_FAILURE,
        _failure_message(entity, operation),
    )


@contextmanager
def store_errors(db: Session, entity: Entity, operation: Operation) -> Iterator[None]:
    """
    Classify every failure raised inside the block.

    On any exception the session is rolled back, so it stays usable, and
    the classified CatalogError is raised in place of the original.

    Usage:
        with store_errors(db, Entity.BOOK, Operation.CREATE):
            db.add(book)
            db.commit()
    """
    try:
        yield
    except CatalogError:
        db.rollback()
        raise
    except Exception as exc:
        db.rollback()
        raise classify_store_error(exc, entity, operation) from exc
