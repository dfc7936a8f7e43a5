"""
Author Model

Represents an author in the catalog.

SQLAlchemy 2.0 Features Used:
- mapped_column(): New way to define columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Define relationships between models
- back_populates: Two-way relationship binding
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from library_catalog.models.book import Book


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Relationships:
    - books: One-to-Many, the books that reference this author

    Names are not unique: two authors may share a name.

    Example:
        author = Author(name="George Orwell")
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    # Assigned by the database on insert, never changed afterwards
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author's full name, trimmed and never blank"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # Author does not own its books. passive_deletes="all" stops the ORM
    # from loading the books and nulling their author_id when an author is
    # deleted, so the database foreign key rejects the delete instead.
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
        passive_deletes="all",
        order_by="Book.id",
    )

    def __repr__(self) -> str:
        """
        Developer-friendly string representation.

            >>> Author(id=1, name="George Orwell")
            Author(id=1, name='George Orwell')
        """
        return f"Author(id={self.id}, name='{self.name}')"
