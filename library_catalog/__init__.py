"""
Library Catalog Package

A REST backend for authors and books plus the client used to drive it.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine and session management
- errors.py: Error categories reported by the API
- main.py: FastAPI application factory
- dependencies.py: Dependency injection aliases
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Validation and store error mapping
- client/: HTTP client, event bus and list views
"""

__version__ = "0.1.0"
