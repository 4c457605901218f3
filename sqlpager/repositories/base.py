"""
Base repository with common CRUD operations and pagination.

Repositories own a session, so the paginated queries they hand out are
already bound and can be awaited directly.

Example:
    ```python
    from sqlpager.repositories.base import BaseRepository


    class UserRepository(BaseRepository[User]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, User)

        def adults(self) -> PaginatedQuery[User]:
            return self.paginate(select(User).where(User.age >= 18))


    users = await UserRepository(session).page(2).per(10).all()
    ```
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from sqlpager.logging import logger
from sqlpager.storage.pagination.query import PaginatedQuery

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository providing common operations for one model type.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class this repository manages.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> T | None:
        return await self.session.get(self.model, id)

    async def get_all(self, **filters: Any) -> list[T]:
        """
        Get all entities matching the provided filters.

        Args:
            **filters: Field name and value pairs; None values are ignored.

        Raises:
            SQLAlchemyError: If database query fails.
        """
        try:
            stmt = select(self.model)
            for key, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(self.model, key) == value)
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model.__name__}: {e}")
            raise

    async def create(self, entity: T) -> T:
        """
        Create new entity in database.

        Raises:
            SQLAlchemyError: If database operation fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise

    def paginate(self, statement: Select[Any] | None = None) -> PaginatedQuery[T]:
        """Session-bound paginated query over ``statement`` (all rows if None)."""
        return PaginatedQuery(self.model, statement, session=self.session)

    def page(self, num: Any = None) -> PaginatedQuery[T]:
        return self.paginate().page(num)
