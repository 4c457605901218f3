"""
Error handler decorator for HTTP endpoints that paginate.

Converts AppException instances (ZeroPerPageOperation, CountSkippedError,
...) into FastAPI HTTPExceptions so endpoints need no try/except blocks.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from sqlpager.exceptions import AppException
from sqlpager.logging import logger


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints to convert AppException to HTTPException.

    Example:
        ```python
        @router.get("/users")
        @handle_http_errors
        async def list_users(params: PageParamsDep, session: SessionDep):
            items, meta = await get_paginated_results(
                User, params.page, params.per_page, session=session
            )
            return PaginatedResponseModel(items=items, meta=meta)
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AppException as ex:
            logger.warning(
                f"AppException in {func.__name__}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            raise HTTPException(
                status_code=ex.http_status,
                detail=ex.message,
            )
        except SQLAlchemyError as ex:
            logger.error(
                f"Database error in {func.__name__}: {ex}",
                exc_info=True,
            )
            raise HTTPException(
                status_code=500,
                detail="Database error occurred",
            )

    return wrapper
