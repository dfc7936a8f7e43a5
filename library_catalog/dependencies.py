"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

Instead of writing:
  def list_books(db: Session = Depends(get_db)):

You can write:
  def list_books(db: DbSession):
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from library_catalog.database import get_db

DbSession = Annotated[Session, Depends(get_db)]
