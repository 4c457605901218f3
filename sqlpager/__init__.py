"""Chainable pagination for SQLModel / SQLAlchemy queries."""

from sqlpager.exceptions import (
    AppException,
    CountSkippedError,
    SessionRequiredError,
    ZeroPerPageOperation,
)
from sqlpager.models.base import BaseModel
from sqlpager.settings import configure, settings
from sqlpager.storage.pagination import PageSpec, PaginatedQuery

__all__ = [
    "AppException",
    "BaseModel",
    "CountSkippedError",
    "PageSpec",
    "PaginatedQuery",
    "SessionRequiredError",
    "ZeroPerPageOperation",
    "configure",
    "settings",
]
