"""
Base model for paginated tables.

This module provides the BaseModel class that SQLModel table models
inherit from to gain pagination. It includes SQLAlchemy's AsyncAttrs mixin
for lazy-loaded relationships in async contexts, per-model pagination
settings, and the page entry point.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sqlpager.logging import logger
from sqlpager.settings import settings

if TYPE_CHECKING:
    from sqlpager.storage.pagination.query import PaginatedQuery


@dataclass
class ModelPagination:
    """Per-model overrides; None falls back to the global settings."""

    default_per_page: int | None = None
    max_per_page: int | None = None
    max_pages: int | None = None


def _page(
    cls: type["BaseModel"],
    num: Any = None,
    *,
    session: AsyncSession | None = None,
) -> "PaginatedQuery[Any]":
    """
    Start a pagination chain for this model.

    Args:
        num: Page number. Missing, junk or values below 1 mean page 1.
        session: Optional session bound to the returned query.

    Returns:
        A PaginatedQuery over ``select(cls)`` positioned on ``num``.
    """
    from sqlpager.storage.pagination.query import PaginatedQuery

    return PaginatedQuery(cls, session=session).page(num)


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all paginated tables.

    Every subclass receives a classmethod named after
    ``settings.PAGE_METHOD_NAME`` (``page`` by default) when the class is
    created, so renaming the entry point affects classes defined afterwards.

    Example:
        ```python
        class User(BaseModel, table=True):
            id: int | None = Field(default=None, primary_key=True)
            name: str

        User.paginates_per(10)

        async with async_session() as session:
            users = await User.page(2, session=session).per(5).all()
        ```
    """

    __pagination__: ClassVar[ModelPagination]

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        # Own config per class; subclasses do not share the parent's
        type.__setattr__(cls, "__pagination__", ModelPagination())
        type.__setattr__(cls, settings.PAGE_METHOD_NAME, classmethod(_page))

    @classmethod
    def paginates_per(cls, value: int | None) -> None:
        """Set the default per-page for this model (None restores global)."""
        cls.__pagination__.default_per_page = value

    @classmethod
    def max_paginates_per(cls, value: int | None) -> None:
        """Cap per-page for this model (None restores global)."""
        cls.__pagination__.max_per_page = value

    @classmethod
    def max_pages_per(cls, value: int | None) -> None:
        """Cap total pages for this model (None restores global)."""
        cls.__pagination__.max_pages = value

    @classmethod
    def default_per_page(cls) -> int:
        value = cls.__pagination__.default_per_page
        return value if value is not None else settings.DEFAULT_PER_PAGE

    @classmethod
    def max_per_page(cls) -> int | None:
        value = cls.__pagination__.max_per_page
        return value if value is not None else settings.MAX_PER_PAGE

    @classmethod
    def max_pages(cls) -> int | None:
        value = cls.__pagination__.max_pages
        return value if value is not None else settings.MAX_PAGES

    @classmethod
    def reset_pagination(cls) -> None:
        """Drop every per-model override."""
        logger.debug(f"Resetting pagination settings of {cls.__name__}")
        type.__setattr__(cls, "__pagination__", ModelPagination())
