"""
Tests for BaseRepository and its session-bound pagination.
"""

import pytest
from sqlmodel import select

from sqlpager.repositories.base import BaseRepository
from tests.mocks.models import User


@pytest.fixture
def repo(seeded_session):
    return BaseRepository(seeded_session, User)


class TestBaseRepository:
    @pytest.mark.asyncio
    async def test_page_is_bound(self, repo):
        query = repo.page(2).per(10)

        assert (await query.first()).name == "user011"
        assert await query.total_pages() == 10

    @pytest.mark.asyncio
    async def test_paginate_statement(self, repo):
        query = repo.paginate(select(User).where(User.age == 10)).page(1)

        # only user100 has age 10
        assert [u.name for u in await query.all()] == ["user100"]
        assert await query.is_last_page() is True

    @pytest.mark.asyncio
    async def test_get_all_with_filters(self, repo):
        users = await repo.get_all(age=0, name=None)

        assert len(users) == 9

    @pytest.mark.asyncio
    async def test_create_and_get(self, repo):
        user = await repo.create(User(name="user101", age=10))

        assert (await repo.get_by_id(user.id)).name == "user101"
        assert await repo.page(1).per(10).total_pages() == 11
