"""Common Pydantic schemas shared across the API."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class PageMeta(BaseModel):
    """Cursor pagination metadata."""

    limit: int
    next_cursor: UUID | None = None
