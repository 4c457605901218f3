from typing import Any, AsyncIterator, Callable, Type

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import Select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import selectinload, sessionmaker
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from sqlpager.logging import logger
from sqlpager.schemas.generic_typing import GenericSQLModelType
from sqlpager.schemas.response import MetadataModel
from sqlpager.settings import settings
from sqlpager.storage.pagination.query import PaginatedQuery

ApplyFilters = Callable[
    [Select[Any], Type[GenericSQLModelType], dict[str, Any]], Select[Any]
]

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
)
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get an asynchronous session from the session factory.

    Commits when the consumer finishes and rolls back on database errors.

    Yields:
        AsyncSession: An asynchronous SQLModel session.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise


def convert_filters(
    filters: dict[str, Any] | PydanticBaseModel | None,
) -> dict[str, Any] | None:
    """
    Convert a Pydantic filter model to a dict or pass dict filters through.

    Args:
        filters: A dict, a Pydantic model (BaseFilter or any other), or None.

    Returns:
        Dictionary of filters with None values excluded, or None.
    """
    if filters is None:
        return None

    if isinstance(filters, PydanticBaseModel):
        if hasattr(filters, "to_dict"):
            return filters.to_dict()
        return {k: v for k, v in filters.model_dump().items() if v is not None}

    return filters


def default_apply_filters(
    query: Select[Any],
    model: Type[GenericSQLModelType],
    filters: dict[str, Any],
) -> Select[Any]:
    """
    Apply default filters to a SQLModel query.

    String filters use case-insensitive ILIKE pattern matching with wildcards.
    Lists and tuples become IN clauses; other types use exact equality.

    Args:
        query: The query to apply filters to.
        model: The SQLModel class being queried.
        filters: Attribute names mapped to filter values.

    Returns:
        The query with the filters applied.

    Raises:
        ValueError: If a filter key is not an attribute of the model.
    """
    for key, value in filters.items():
        if not hasattr(model, key):
            raise ValueError(
                f"Invalid filter: {key} is not an attribute of {model.__name__}"
            )
        attr = getattr(model, key)
        if isinstance(value, (list, tuple)):
            query = query.where(attr.in_(value))
        elif isinstance(value, str):
            query = query.where(attr.ilike(f"%{value}%"))
        else:
            query = query.where(attr == value)
    return query


def build_query(
    model: Type[GenericSQLModelType],
    filter_dict: dict[str, Any] | None = None,
    apply_filters: ApplyFilters | None = None,
    eager_load: list[str] | None = None,
) -> Select[Any]:
    """
    Build a Select with filters and eager loading applied.

    Unknown relationship names in ``eager_load`` are logged and skipped.
    """
    query: Select[Any] = select(model)

    for relationship in eager_load or []:
        if hasattr(model, relationship):
            query = query.options(selectinload(getattr(model, relationship)))
        else:
            logger.warning(
                f"Relationship '{relationship}' not found on {model.__name__}"
            )

    if filter_dict:
        query = (apply_filters or default_apply_filters)(
            query, model, filter_dict
        )

    return query


async def get_paginated_results(
    model: Type[GenericSQLModelType],
    page: Any = 1,
    per_page: Any = None,
    *,
    filters: dict[str, Any] | PydanticBaseModel | None = None,
    apply_filters: ApplyFilters | None = None,
    eager_load: list[str] | None = None,
    order_by: Any = None,
    skip_count: bool = False,
    session: AsyncSession | None = None,
) -> tuple[list[GenericSQLModelType], MetadataModel]:
    """
    Get one page of a model's rows together with pagination metadata.

    Args:
        model: The SQLModel class to query.
        page: The page number; junk or values below 1 mean page 1.
        per_page: Rows per page; None, junk or negative values use the
            model's default. Capped by the model's max per page.
        filters: Filters as a dict or a Pydantic filter schema.
        apply_filters: Custom filter function; defaults to
            ``default_apply_filters``.
        eager_load: Relationship names to load with selectinload.
        order_by: Ordering clause; defaults to the model's primary key.
        skip_count: Skip the COUNT query. total and pages are reported as 0.
        session: Session to use; a new one is opened when omitted.

    Returns:
        A tuple of the page's rows and a MetadataModel.

    Raises:
        ZeroPerPageOperation: If per_page is 0.
        ValueError: If a filter names an unknown attribute.
    """
    statement = build_query(
        model, convert_filters(filters), apply_filters, eager_load
    )
    if order_by is None and hasattr(model, "id"):
        order_by = model.id
    if order_by is not None:
        statement = statement.order_by(order_by)

    query = PaginatedQuery(model, statement).page(page).per(per_page)
    if skip_count:
        query = query.without_count()

    if session is not None:
        items = await query.all(session)
        return items, await query.metadata(session)

    async with async_session() as s:
        items = await query.all(s)
        return items, await query.metadata(s)
