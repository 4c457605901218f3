"""
Pagination for SQLModel queries.

``calculator`` holds the pure page arithmetic over an immutable
``PageSpec``; ``query`` wraps a Select into a chainable ``PaginatedQuery``
that defers counting and fetching to an AsyncSession.

Example:
    Starting from a model (classmethod installed by sqlpager's BaseModel):
    ```python
    users = await User.page(2, session=session).per(10).all()
    ```

    Starting from any Select:
    ```python
    from sqlmodel import select
    from sqlpager.storage.pagination import PaginatedQuery

    query = PaginatedQuery(User, select(User).where(User.age > 3), session)
    items = await query.page(3).all()
    meta = await query.page(3).metadata()
    ```
"""

from sqlpager.storage.pagination.calculator import PageSpec
from sqlpager.storage.pagination.query import PaginatedQuery, spec_for_model

__all__ = [
    "PageSpec",
    "PaginatedQuery",
    "spec_for_model",
]
