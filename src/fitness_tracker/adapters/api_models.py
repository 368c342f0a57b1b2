"""Pydantic models for remote API responses."""

from typing import Any

from pydantic import BaseModel


class ApiEnvelope(BaseModel):
    """One operation result returned by the API controller."""

    success: bool = True
    message: str | None = None
    errors: list[str] | None = None
    data: Any = None
