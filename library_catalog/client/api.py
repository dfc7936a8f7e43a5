"""
Catalog API Client

Async HTTP client for the catalog API, built on httpx.

Every call goes through ApiClient.request():
- sends Content-Type: application/json, merged with caller headers
- sends exactly one request: no retries, no timeout, no caching
- on a non-2xx response raises ApiError with the server's "message",
  or "Request failed" when the body has none
- on success returns the decoded JSON body

The typed helpers (get_authors, create_book, ...) validate the JSON into
the Author and Book models below.

Usage:
    async with ApiClient() as api:
        author = await api.create_author("Ursula K. Le Guin")
        await api.create_book("The Dispossessed", author.id)
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from library_catalog.config import get_settings
from library_catalog.schemas import AuthorResponse, BookResponse

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Request failed"

AUTHORS_ENDPOINT = "/authors"
BOOKS_ENDPOINT = "/books"


# =============================================================================
# Client-side Models
# =============================================================================
class Author(AuthorResponse):
    """An author; books are present on list and get responses only."""

    books: list[BookResponse] | None = None


class Book(BookResponse):
    """A book; author is present on list and get responses only."""

    author: AuthorResponse | None = None


_authors_adapter = TypeAdapter(list[Author])
_books_adapter = TypeAdapter(list[Book])


class ApiError(Exception):
    """
    A failed API call.

    Attributes:
        message: Text suitable for showing to the user
        status_code: HTTP status, or None if no response was received
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_message(response: httpx.Response) -> str:
    """Extract the "message" of an error response, or the default text."""
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE

    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return message if isinstance(message, str) else str(message)
    return DEFAULT_ERROR_MESSAGE


class ApiClient:
    """
    Thin async wrapper around the catalog HTTP API.

    Args:
        base_url: API root; defaults to the API_BASE_URL setting
        transport: Optional httpx transport (MockTransport, ASGITransport)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=None,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def request(self, endpoint: str, method: str = "GET", **options: Any) -> Any:
        """
        Send one request and return the decoded JSON body.

        Args:
            endpoint: Path relative to the base URL, e.g. "/authors/3"
            method: HTTP method
            **options: Passed to httpx (json=..., params=..., headers=...)

        Raises:
            ApiError: On a non-2xx response or when no response arrived
        """
        headers = {"Content-Type": "application/json", **options.pop("headers", {})}

        try:
            response = await self._client.request(method, endpoint, headers=headers, **options)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {endpoint} failed: {exc!r}")
            raise ApiError(DEFAULT_ERROR_MESSAGE) from exc

        if not response.is_success:
            message = error_message(response)
            logger.debug(f"{method} {endpoint} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code)

        if not response.content:
            return None
        return response.json()

    # -------------------------------------------------------------------------
    # Authors
    # -------------------------------------------------------------------------
    async def get_authors(self) -> list[Author]:
        return _authors_adapter.validate_python(await self.request(AUTHORS_ENDPOINT))

    async def get_author(self, author_id: int) -> Author:
        return Author.model_validate(await self.request(f"{AUTHORS_ENDPOINT}/{author_id}"))

    async def create_author(self, name: str) -> Author:
        data = await self.request(AUTHORS_ENDPOINT, "POST", json={"name": name})
        return Author.model_validate(data)

    async def update_author(self, author_id: int, name: str) -> Author:
        data = await self.request(f"{AUTHORS_ENDPOINT}/{author_id}", "PUT", json={"name": name})
        return Author.model_validate(data)

    async def delete_author(self, author_id: int) -> None:
        await self.request(f"{AUTHORS_ENDPOINT}/{author_id}", "DELETE")

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------
    async def get_books(self) -> list[Book]:
        return _books_adapter.validate_python(await self.request(BOOKS_ENDPOINT))

    async def get_book(self, book_id: int) -> Book:
        return Book.model_validate(await self.request(f"{BOOKS_ENDPOINT}/{book_id}"))

    async def create_book(self, title: str, author_id: int) -> Book:
        data = await self.request(
            BOOKS_ENDPOINT,
            "POST",
            json={"title": title, "authorId": author_id},
        )
        return Book.model_validate(data)

    async def update_book(self, book_id: int, title: str, author_id: int) -> Book:
        data = await self.request(
            f"{BOOKS_ENDPOINT}/{book_id}",
            "PUT",
            json={"title": title, "authorId": author_id},
        )
        return Book.model_validate(data)

    async def delete_book(self, book_id: int) -> None:
        await self.request(f"{BOOKS_ENDPOINT}/{book_id}", "DELETE")
