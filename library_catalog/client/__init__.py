"""
Catalog Client Package

- api.py: async HTTP client for the catalog API
- events.py: in-process event bus shared by the list views
- views.py: headless author and book list views
"""

from library_catalog.client.api import ApiClient, ApiError, Author, Book
from library_catalog.client.events import CatalogEvent, EventBus
from library_catalog.client.views import AuthorListView, BookListView, CatalogPage

__all__ = [
    "ApiClient",
    "ApiError",
    "Author",
    "Book",
    "CatalogEvent",
    "EventBus",
    "AuthorListView",
    "BookListView",
    "CatalogPage",
]
