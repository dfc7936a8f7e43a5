"""
API Routers Package

Router Structure:
- authors.py: /authors/* endpoints
- books.py: /books/* endpoints

Each router is imported and registered in main.py.
"""

from library_catalog.routers.authors import router as authors_router
from library_catalog.routers.books import router as books_router

__all__ = [
    "authors_router",
    "books_router",
]
