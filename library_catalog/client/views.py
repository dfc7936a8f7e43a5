"""
Catalog List Views

Headless state holders for the two catalog lists. They keep the same
state a UI component would (form fields, edit mode, loading flag, last
error) and run the same flows against the API, without rendering
anything.

Composition:
    CatalogPage owns the API client, the event bus and the shared list
    of authors. AuthorListView edits authors and publishes
    authorUpdated; BookListView owns the book list and re-fetches it
    whenever authorUpdated is published.

Errors from the API never escape a view: they are stored in ``error``
for display until dismiss_error() or the next attempt clears them.
Nothing is retried.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from library_catalog.client.api import ApiClient, ApiError, Author, Book
from library_catalog.client.events import CatalogEvent, EventBus

logger = logging.getLogger(__name__)

AuthorsGetter = Callable[[], list[Author]]


def form_id(value: str) -> int:
    """
    Convert a form field holding an ID into an int.

    Blank or non-numeric input becomes 0, which the API rejects with its
    own message.
    """
    value = value.strip()
    return int(value) if value.isdecimal() else 0


class AuthorListView:
    """State and actions of the author list."""

    def __init__(
        self,
        api: ApiClient,
        bus: EventBus,
        get_authors: AuthorsGetter,
        refresh_authors: Callable[[], Awaitable[None]],
    ) -> None:
        self._api = api
        self._bus = bus
        self._get_authors = get_authors
        self._refresh_authors = refresh_authors

        self.name = ""
        self.submitting = False
        self.edit_id: int | None = None
        self.edit_name = ""
        self.error: str | None = None

    @property
    def authors(self) -> list[Author]:
        return self._get_authors()

    async def submit(self) -> None:
        """Create an author from the form field."""
        self.submitting = True
        self.error = None
        try:
            await self._api.create_author(self.name)
            self.name = ""
            await self._refresh_authors()
        except ApiError as exc:
            self.error = exc.message
        finally:
            self.submitting = False

    async def delete(self, author_id: int) -> None:
        """Delete an author and tell the other views."""
        try:
            await self._api.delete_author(author_id)
            await self._refresh_authors()
            self._bus.publish(CatalogEvent.AUTHOR_UPDATED, {"id": author_id})
        except ApiError as exc:
            self.error = exc.message

    def start_edit(self, author: Author) -> None:
        self.edit_id = author.id
        self.edit_name = author.name

    def cancel_edit(self) -> None:
        self.edit_id = None
        self.edit_name = ""

    async def save_edit(self, author_id: int) -> None:
        """Save the edited name and tell the other views."""
        try:
            await self._api.update_author(author_id, self.edit_name)
            await self._refresh_authors()
            self._bus.publish(CatalogEvent.AUTHOR_UPDATED, {"id": author_id})
            self.cancel_edit()
        except ApiError as exc:
            self.error = exc.message

    def dismiss_error(self) -> None:
        self.error = None


class BookListView:
    """State and actions of the book list."""

    def __init__(self, api: ApiClient, bus: EventBus, get_authors: AuthorsGetter) -> None:
        self._api = api
        self._bus = bus
        self._get_authors = get_authors
        self._pending: set[asyncio.Task] = set()

        self.books: list[Book] = []
        self.loading = True
        self.error: str | None = None

        self.title = ""
        self.author_id = ""
        self.submitting = False

        self.edit_id: int | None = None
        self.edit_title = ""
        self.edit_author_id = ""

    @property
    def authors(self) -> list[Author]:
        """Choices for the author selector."""
        return self._get_authors()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    async def mount(self) -> None:
        """Start listening for author changes and load the books."""
        self._bus.subscribe(CatalogEvent.AUTHOR_UPDATED, self._on_author_updated)
        await self.fetch_books()

    def unmount(self) -> None:
        self._bus.unsubscribe(CatalogEvent.AUTHOR_UPDATED, self._on_author_updated)

    def _on_author_updated(self, payload: Any = None) -> None:
        # Bus handlers are synchronous; the re-fetch runs as its own task
        task = asyncio.get_running_loop().create_task(self.fetch_books())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def settle(self) -> None:
        """Wait for re-fetches triggered by events to finish."""
        while self._pending:
            await asyncio.gather(*self._pending)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------
    async def fetch_books(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.books = await self._api.get_books()
        except ApiError as exc:
            self.error = exc.message
        finally:
            self.loading = False

    async def submit(self) -> None:
        """Create a book from the form fields."""
        self.submitting = True
        self.error = None
        try:
            await self._api.create_book(self.title, form_id(self.author_id))
            self.title = ""
            self.author_id = ""
            await self.fetch_books()
        except ApiError as exc:
            self.error = exc.message
        finally:
            self.submitting = False

    async def delete(self, book_id: int) -> None:
        try:
            await self._api.delete_book(book_id)
            await self.fetch_books()
        except ApiError as exc:
            self.error = exc.message

    def start_edit(self, book: Book) -> None:
        self.edit_id = book.id
        self.edit_title = book.title
        self.edit_author_id = str(book.author_id)

    def cancel_edit(self) -> None:
        self.edit_id = None
        self.edit_title = ""
        self.edit_author_id = ""

    async def save_edit(self, book_id: int) -> None:
        try:
            await self._api.update_book(book_id, self.edit_title, form_id(self.edit_author_id))
            await self.fetch_books()
            self.cancel_edit()
        except ApiError as exc:
            self.error = exc.message

    def dismiss_error(self) -> None:
        self.error = None


class CatalogPage:
    """
    Composition root of the client.

    Owns the event bus (a new one unless injected) and the author list
    shared by both views.
    """

    def __init__(self, api: ApiClient, bus: EventBus | None = None) -> None:
        self.api = api
        self.bus = bus or EventBus()
        self.authors: list[Author] = []

        self.author_list = AuthorListView(api, self.bus, self._current_authors, self.refresh_authors)
        self.book_list = BookListView(api, self.bus, self._current_authors)

    def _current_authors(self) -> list[Author]:
        return self.authors

    async def refresh_authors(self) -> None:
        """Reload the shared author list; failures keep the old list."""
        try:
            self.authors = await self.api.get_authors()
        except ApiError as exc:
            logger.error(f"Failed to fetch authors: {exc.message}")

    async def mount(self) -> None:
        await self.refresh_authors()
        await self.book_list.mount()

    def unmount(self) -> None:
        self.book_list.unmount()
