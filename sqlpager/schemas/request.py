from typing import Any

from pydantic import BaseModel, Field, field_validator
from typing_extensions import Annotated

from sqlpager.storage.pagination.calculator import (
    normalize_page,
    normalize_per_page,
)


class PageParams(BaseModel):
    """
    Page parameters taken from a request.

    Raw values are normalized instead of rejected: junk or non-positive
    pages become 1, junk or negative per-page values become None (use the
    model default).

    Attributes:
        page: Page number to retrieve (starts from 1).
        per_page: Number of items per page, or None for the default.
    """

    page: Annotated[int, Field(ge=1)] = 1
    per_page: Annotated[int | None, Field(ge=0)] = None

    @field_validator("page", mode="before")
    @classmethod
    def _normalize_page(cls, value: Any) -> int:
        return normalize_page(value)

    @field_validator("per_page", mode="before")
    @classmethod
    def _normalize_per_page(cls, value: Any) -> int | None:
        return normalize_per_page(value)
