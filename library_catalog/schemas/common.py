"""Schemas shared by every router."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation returned by delete endpoints."""

    message: str = Field(..., examples=["Author deleted successfully"])


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str = Field(..., examples=["Author not found"])
