"""
Chainable pagination over SQLAlchemy Select statements.

``PaginatedQuery`` wraps a ``Select`` together with a ``PageSpec``. Chaining
(``page``, ``per``, ``padding``, ``where``, ...) never touches the database
and always returns a new query, so a shared base query can be narrowed
independently by concurrent requests. Counting and fetching happen when the
awaitable accessors are awaited.
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from sqlpager.exceptions import CountSkippedError, SessionRequiredError
from sqlpager.logging import logger
from sqlpager.schemas.response import MetadataModel
from sqlpager.settings import settings
from sqlpager.storage.pagination import calculator
from sqlpager.storage.pagination.calculator import PageSpec

T = TypeVar("T")


def spec_for_model(model: Any) -> PageSpec:
    """
    Initial page spec for a model.

    Models deriving from sqlpager's BaseModel contribute their own defaults
    and caps; anything else uses the global settings.
    """
    default_per_page = getattr(model, "default_per_page", None)
    if callable(default_per_page):
        return PageSpec(
            default_per_page=model.default_per_page(),
            model_max_per_page=model.max_per_page(),
            model_max_pages=model.max_pages(),
        )
    return PageSpec(
        default_per_page=settings.DEFAULT_PER_PAGE,
        model_max_per_page=settings.MAX_PER_PAGE,
        model_max_pages=settings.MAX_PAGES,
    )


class PaginatedQuery(Generic[T]):
    """
    A lazily evaluated, paginated query.

    Attributes:
        model: The SQLModel class being queried.
        statement: The wrapped Select without the pagination window.
        session: Session used by the awaitable accessors, if bound.
        spec: The page spec of this chain step.

    Example:
        ```python
        from sqlmodel import select

        query = PaginatedQuery(User, session=session).page(2).per(10)
        users = await query.all()
        print(f"Page {query.current_page} of {await query.total_pages()}")

        # Narrowing drops the memoized count
        admins = query.where(User.is_admin)
        await admins.total_count()
        ```
    """

    def __init__(
        self,
        model: Type[T],
        statement: Select[Any] | None = None,
        session: AsyncSession | None = None,
        spec: PageSpec | None = None,
    ):
        self.model = model
        self.statement = statement if statement is not None else select(model)
        self.session = session
        self.spec = spec if spec is not None else spec_for_model(model)
        self._total_count: int | None = None
        self._records: list[T] | None = None
        self._has_more: bool | None = None

    def __repr__(self) -> str:
        return (
            f"<PaginatedQuery {getattr(self.model, '__name__', self.model)} "
            f"page={self.spec.current_page} "
            f"per_page={self.spec.effective_per_page}>"
        )

    def _clone(
        self,
        *,
        statement: Select[Any] | None = None,
        spec: PageSpec | None = None,
    ) -> "PaginatedQuery[T]":
        return type(self)(
            self.model,
            statement=statement if statement is not None else self.statement,
            session=self.session,
            spec=spec if spec is not None else self.spec,
        )

    # ------------------------------------------------------------------
    # Pagination chain
    # ------------------------------------------------------------------

    def page(self, num: Any = None) -> "PaginatedQuery[T]":
        return self._clone(spec=self.spec.with_page(num))

    def per(self, num: Any) -> "PaginatedQuery[T]":
        """
        Set the number of records per page.

        None, negative numbers and non-numeric strings keep the current
        per-page (the model default unless set before). Zero is kept and
        makes the page arithmetic raise ZeroPerPageOperation.
        """
        spec = self.spec.with_per(num)
        if spec is self.spec and num is not None:
            logger.debug(f"Ignoring per-page value {num!r}, using default")
        return self._clone(spec=spec)

    def padding(self, num: Any) -> "PaginatedQuery[T]":
        return self._clone(spec=self.spec.with_padding(num))

    def max_per_page(self, num: int | None) -> "PaginatedQuery[T]":
        """Cap per-page for this chain; None restores the model cap."""
        return self._clone(spec=self.spec.with_max_per_page(num))

    def max_pages(self, num: int | None) -> "PaginatedQuery[T]":
        """Cap total pages for this chain; None restores the model cap."""
        return self._clone(spec=self.spec.with_max_pages(num))

    def without_count(self) -> "PaginatedQuery[T]":
        """Never issue COUNT; detect the last page from fetched rows."""
        return self._clone(spec=self.spec.with_count_skipped())

    def bind(self, session: AsyncSession) -> "PaginatedQuery[T]":
        clone = self._clone()
        clone.session = session
        return clone

    # ------------------------------------------------------------------
    # Select delegation
    # ------------------------------------------------------------------

    def where(self, *criteria: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.where(*criteria))

    def filter_by(self, **kwargs: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.filter_by(**kwargs))

    def order_by(self, *clauses: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.order_by(*clauses))

    def group_by(self, *clauses: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.group_by(*clauses))

    def having(self, *criteria: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.having(*criteria))

    def join(self, target: Any, *args: Any, **kwargs: Any) -> "PaginatedQuery[T]":
        return self._clone(
            statement=self.statement.join(target, *args, **kwargs)
        )

    def outerjoin(
        self, target: Any, *args: Any, **kwargs: Any
    ) -> "PaginatedQuery[T]":
        return self._clone(
            statement=self.statement.outerjoin(target, *args, **kwargs)
        )

    def options(self, *options: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.options(*options))

    def distinct(self, *expr: Any) -> "PaginatedQuery[T]":
        return self._clone(statement=self.statement.distinct(*expr))

    # ------------------------------------------------------------------
    # Page arithmetic (no database access)
    # ------------------------------------------------------------------

    @property
    def limit_value(self) -> int:
        return calculator.limit(self.spec)

    @property
    def offset_value(self) -> int:
        return calculator.offset(self.spec)

    @property
    def padding_value(self) -> int:
        return self.spec.padding

    @property
    def current_page(self) -> int:
        return calculator.current_page(self.spec)

    @property
    def is_first_page(self) -> bool:
        return calculator.is_first_page(self.spec)

    def to_statement(self) -> Select[Any]:
        """The wrapped statement with the pagination window applied."""
        offset, limit = calculator.window(self.spec)
        if self.spec.without_count and limit > 0:
            # One extra row tells whether another page exists
            limit += 1
        return self.statement.offset(offset).limit(limit)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _session(self, session: AsyncSession | None) -> AsyncSession:
        session = session if session is not None else self.session
        if session is None:
            raise SessionRequiredError(
                f"{self!r} has no session; bind one or pass session="
            )
        return session

    async def all(self, session: AsyncSession | None = None) -> list[T]:
        """
        Fetch the records of the current page.

        The records are memoized on this query instance.

        Raises:
            SessionRequiredError: If no session is bound or given.
            SQLAlchemyError: If the database query fails.
        """
        if self._records is not None:
            return self._records

        db = self._session(session)
        try:
            result = await db.exec(self.to_statement())
            records = list(result.all())
        except SQLAlchemyError as ex:
            logger.error(f"Error fetching page of {self!r}: {ex}")
            raise

        per_page = self.spec.effective_per_page
        if self.spec.without_count:
            self._has_more = per_page > 0 and len(records) > per_page
            records = records[:per_page]

        self._records = records
        return records

    async def first(self, session: AsyncSession | None = None) -> T | None:
        records = await self.all(session)
        return records[0] if records else None

    async def count(self, session: AsyncSession | None = None) -> int:
        """Number of records in the current window (not the total)."""
        if self._records is not None:
            return len(self._records)

        offset, limit = calculator.window(self.spec)
        windowed = self.statement.offset(offset).limit(limit)
        count_query = select(func.count()).select_from(windowed.subquery())
        return await self._scalar(count_query, session)

    async def _scalar(
        self, query: Select[Any], session: AsyncSession | None
    ) -> int:
        db = self._session(session)
        try:
            result = await db.exec(query)
            return int(result.one())
        except SQLAlchemyError as ex:
            logger.error(f"Error counting {self!r}: {ex}")
            raise

    def _deduced_total_count(self) -> int | None:
        """Total count derivable from already loaded records, if any."""
        records = self._records
        per_page = self.spec.effective_per_page
        if records is None or per_page == 0:
            return None
        page = self.spec.current_page
        if page == 1 and self.spec.padding == 0 and not records:
            return 0
        if records and len(records) < per_page:
            return (page - 1) * per_page + self.spec.padding + len(records)
        return None

    async def total_count(self, session: AsyncSession | None = None) -> int:
        """
        Total number of rows matched by the wrapped statement.

        ORDER BY, LIMIT and OFFSET are stripped and the remaining statement
        is counted as a subquery, so grouped statements count groups. The
        result is memoized until the query is cloned.

        Raises:
            CountSkippedError: If the chain used ``without_count()``.
            SessionRequiredError: If no session is bound or given.
        """
        if self.spec.without_count:
            raise CountSkippedError(
                "total_count is unavailable on a query built with without_count()"
            )
        if self._total_count is not None:
            return self._total_count

        deduced = self._deduced_total_count()
        if deduced is not None:
            self._total_count = deduced
            return deduced

        counted = self.statement.order_by(None).limit(None).offset(None)
        cap = self.spec.pages_cap
        per_page = self.spec.effective_per_page
        if cap is not None and per_page > 0:
            counted = counted.limit(cap * per_page)

        count_query = select(func.count()).select_from(counted.subquery())
        logger.debug(f"Counting rows for {self!r}")
        self._total_count = await self._scalar(count_query, session)
        return self._total_count

    async def total_pages(self, session: AsyncSession | None = None) -> int:
        if self.spec.without_count:
            raise CountSkippedError(
                "total_pages is unavailable on a query built with without_count()"
            )
        # Check per-page before hitting the database
        calculator.limit(self.spec)
        return calculator.total_pages(
            self.spec, await self.total_count(session)
        )

    async def is_last_page(self, session: AsyncSession | None = None) -> bool:
        if self.spec.without_count:
            await self.all(session)
            return not self._has_more
        return calculator.is_last_page(
            self.spec, await self.total_pages(session)
        )

    async def is_out_of_range(
        self, session: AsyncSession | None = None
    ) -> bool:
        if self.spec.without_count:
            records = await self.all(session)
            return not records
        return calculator.is_out_of_range(
            self.spec, await self.total_pages(session)
        )

    async def next_page(
        self, session: AsyncSession | None = None
    ) -> int | None:
        if self.spec.without_count:
            if await self.is_last_page(session) or await self.is_out_of_range(
                session
            ):
                return None
            return self.current_page + 1
        return calculator.next_page(self.spec, await self.total_pages(session))

    async def prev_page(
        self, session: AsyncSession | None = None
    ) -> int | None:
        if self.is_first_page or await self.is_out_of_range(session):
            return None
        return calculator.prev_page(self.spec)

    async def metadata(
        self, session: AsyncSession | None = None
    ) -> MetadataModel:
        """
        Pagination metadata of this query.

        With ``without_count()`` the total and pages are reported as 0.
        """
        if self.spec.without_count:
            total = 0
            pages = 0
        else:
            total = await self.total_count(session)
            pages = await self.total_pages(session)
        return MetadataModel(
            page=self.current_page,
            per_page=self.limit_value,
            total=total,
            pages=pages,
            next_page=await self.next_page(session),
            prev_page=await self.prev_page(session),
            is_first_page=self.is_first_page,
            is_last_page=await self.is_last_page(session),
        )
