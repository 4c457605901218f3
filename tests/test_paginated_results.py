"""
Tests for the get_paginated_results facade and filter helpers.
"""

import pytest
from sqlalchemy import Select
from sqlmodel import select

from sqlpager.exceptions import ZeroPerPageOperation
from sqlpager.schemas.filters import BaseFilter
from sqlpager.storage.db import (
    build_query,
    convert_filters,
    default_apply_filters,
    get_paginated_results,
)
from tests.mocks.models import User


class UserFilters(BaseFilter):
    name: str | None = None
    age: int | None = None


class TestGetPaginatedResults:
    """Tests for get_paginated_results function."""

    @pytest.mark.asyncio
    async def test_first_page(self, seeded_session):
        items, meta = await get_paginated_results(
            User, page=1, per_page=10, session=seeded_session
        )

        assert [u.name for u in items][:2] == ["user001", "user002"]
        assert meta.page == 1
        assert meta.per_page == 10
        assert meta.total == 100
        assert meta.pages == 10
        assert meta.is_first_page is True

    @pytest.mark.asyncio
    async def test_default_per_page(self, seeded_session):
        items, meta = await get_paginated_results(User, session=seeded_session)

        assert len(items) == 25
        assert meta.pages == 4

    @pytest.mark.asyncio
    async def test_raw_query_string_values(self, seeded_session):
        items, meta = await get_paginated_results(
            User, page="abc", per_page="-5", session=seeded_session
        )

        assert meta.page == 1
        assert meta.per_page == 25

    @pytest.mark.asyncio
    async def test_with_dict_filters(self, seeded_session):
        items, meta = await get_paginated_results(
            User, per_page=5, filters={"age": 3}, session=seeded_session
        )

        assert meta.total == 10
        assert meta.pages == 2
        assert items[0].name == "user030"

    @pytest.mark.asyncio
    async def test_with_filter_schema(self, seeded_session):
        items, meta = await get_paginated_results(
            User, filters=UserFilters(name="user09"), session=seeded_session
        )

        # user090..user099
        assert meta.total == 10

    @pytest.mark.asyncio
    async def test_last_page_partial(self, seeded_session):
        items, meta = await get_paginated_results(
            User, page=4, per_page=30, session=seeded_session
        )

        assert len(items) == 10
        assert meta.is_last_page is True
        assert meta.next_page is None

    @pytest.mark.asyncio
    async def test_empty_results(self, seeded_session):
        items, meta = await get_paginated_results(
            User, filters={"name": "nobody"}, session=seeded_session
        )

        assert items == []
        assert meta.total == 0
        assert meta.pages == 0

    @pytest.mark.asyncio
    async def test_skip_count(self, seeded_session):
        items, meta = await get_paginated_results(
            User, page=1, per_page=10, skip_count=True, session=seeded_session
        )

        assert len(items) == 10
        assert meta.total == 0
        assert meta.pages == 0
        assert meta.next_page == 2

    @pytest.mark.asyncio
    async def test_custom_filter_function(self, seeded_session):
        def only_teens(query, model, filters):
            return query.where(model.age == filters["decade"])

        _, meta = await get_paginated_results(
            User,
            filters={"decade": 1},
            apply_filters=only_teens,
            session=seeded_session,
        )

        assert meta.total == 10

    @pytest.mark.asyncio
    async def test_zero_per_page(self, seeded_session):
        with pytest.raises(ZeroPerPageOperation):
            await get_paginated_results(User, per_page=0, session=seeded_session)


class TestDefaultApplyFilters:
    """Tests for default_apply_filters function."""

    def test_filter_by_string_ilike(self):
        query = default_apply_filters(select(User), User, {"name": "john"})

        assert isinstance(query, Select)
        assert "LIKE" in str(query)

    def test_filter_by_exact_match(self):
        query = default_apply_filters(select(User), User, {"age": 25})

        assert "users.age = " in str(query)

    def test_filter_by_list_in_clause(self):
        query = default_apply_filters(select(User), User, {"age": [1, 2]})

        assert "users.age IN" in str(query)

    def test_filter_with_invalid_attribute(self):
        with pytest.raises(ValueError) as exc_info:
            default_apply_filters(select(User), User, {"invalid_field": "value"})

        assert "Invalid filter" in str(exc_info.value)
        assert "invalid_field" in str(exc_info.value)


class TestQueryHelpers:
    def test_convert_filter_schema(self):
        assert convert_filters(UserFilters(name="john")) == {"name": "john"}

    def test_convert_dict_passthrough(self):
        assert convert_filters({"age": 1}) == {"age": 1}
        assert convert_filters(None) is None

    def test_build_query_skips_unknown_relationship(self):
        query = build_query(User, None, None, ["missing"])

        assert isinstance(query, Select)
