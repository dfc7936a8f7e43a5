"""
Book Model

Every book belongs to exactly one author. The foreign key from
``books.author_id`` to ``authors.id`` is the catalog's only relational
invariant and is enforced by the database:

- inserting or updating a book with an unknown author fails
- deleting an author that still has books fails (ON DELETE RESTRICT)
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.database import Base

if TYPE_CHECKING:
    from library_catalog.models.author import Author


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required, trimmed, never blank)
    - author_id: ID of the author who wrote the book

    Relationships:
    - author: Many-to-One, resolved for read responses only

    Example:
        book = Book(title="1984", author_id=orwell.id)
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Book title, trimmed and never blank"
    )

    # -------------------------------------------------------------------------
    # Foreign Keys
    # -------------------------------------------------------------------------
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="RESTRICT"),
        index=True,
        nullable=False,
        comment="Author who wrote the book"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation."""
        return f"Book(id={self.id}, title='{self.title}', author_id={self.author_id})"
