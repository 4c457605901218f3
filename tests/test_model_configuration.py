"""
Tests for per-model and global pagination configuration.
"""

import pytest
from pydantic import ValidationError

from sqlpager.models.base import BaseModel
from sqlpager.settings import configure, settings
from tests.mocks.models import Device, User


class TestPageMethodName:
    """The entry point name is read when a model class is created."""

    def test_configured_name(self):
        configure(PAGE_METHOD_NAME="paginated_page")

        class Article(BaseModel):
            title: str = ""

        assert hasattr(Article, "paginated_page")
        assert not hasattr(Article, "page")
        assert callable(Article.paginated_page)

    def test_default_name(self):
        class Note(BaseModel):
            body: str = ""

        assert hasattr(Note, "page")

    def test_existing_models_keep_their_name(self):
        configure(PAGE_METHOD_NAME="paged")

        assert hasattr(User, "page")
        assert not hasattr(User, "paged")

    def test_invalid_name_rejected(self):
        with pytest.raises(ValidationError):
            configure(PAGE_METHOD_NAME="not a name")


class TestModelSettings:
    """Tests for paginates_per / max_paginates_per / max_pages_per."""

    def test_defaults_come_from_settings(self):
        assert User.default_per_page() == settings.DEFAULT_PER_PAGE == 25
        assert User.max_per_page() is None
        assert User.max_pages() is None

    def test_model_overrides(self):
        User.paginates_per(10)
        User.max_paginates_per(50)
        User.max_pages_per(3)

        assert User.default_per_page() == 10
        assert User.max_per_page() == 50
        assert User.max_pages() == 3

    def test_overrides_are_per_model(self):
        User.paginates_per(10)

        assert Device.default_per_page() == 25

    def test_none_restores_global(self):
        User.paginates_per(10)
        User.paginates_per(None)

        assert User.default_per_page() == 25

    def test_global_settings_change(self):
        configure(DEFAULT_PER_PAGE=30, MAX_PAGES=2)

        assert User.page(1).limit_value == 30
        assert User.max_pages() == 2

    def test_unknown_setting(self):
        with pytest.raises(AttributeError):
            configure(NOT_A_SETTING=1)

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            configure(DEFAULT_PER_PAGE=0)
