"""
Type-safe filter schemas for paginated queries.

Subclass BaseFilter per model to whitelist filterable fields; the facade
``get_paginated_results`` accepts either a filter schema or a plain dict.
"""

from typing import Any

from pydantic import BaseModel


class BaseFilter(BaseModel):  # type: ignore[misc]
    """
    Base class for all filter schemas.

    Example:
        >>> class UserFilters(BaseFilter):
        ...     name: str | None = None
        ...     age: int | None = None
        >>> UserFilters(name="user0").to_dict()
        {'name': 'user0'}
    """

    def to_dict(self) -> dict[str, Any]:
        """Convert filter schema to dictionary, excluding None values."""
        return {k: v for k, v in self.model_dump().items() if v is not None}

    model_config = {
        "extra": "forbid",  # Reject unexpected fields
    }
