"""Settings for sqlpager, overridable through environment variables."""

import os
from enum import Enum
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""

    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):  # type: ignore[misc]
    """
    Main settings class.

    Pagination defaults apply to every model that does not configure its
    own values via ``paginates_per`` / ``max_paginates_per`` /
    ``max_pages_per``.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True, validate_assignment=True
    )

    ENV: Environment = Environment.DEV

    # Pagination defaults
    DEFAULT_PER_PAGE: int = Field(default=25, ge=1)
    MAX_PER_PAGE: int | None = Field(default=None, ge=1)
    MAX_PAGES: int | None = Field(default=None, ge=1)

    # Name of the classmethod installed on models (User.page(2))
    PAGE_METHOD_NAME: str = Field(
        default="page", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$"
    )

    # Query string parameter names read by the FastAPI dependency
    PARAM_NAME: str = "page"
    PER_PAGE_PARAM_NAME: str = "per_page"

    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    DB_ECHO: bool = False

    # Logging settings
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    LOG_LEVEL: str = "INFO"
    LOG_CONSOLE_FORMAT: Literal["human", "json"] = "human"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize settings with environment-specific defaults."""
        super().__init__(**kwargs)
        self._apply_environment_defaults()

    def _apply_environment_defaults(self) -> None:
        """Apply environment-specific logging defaults."""
        if self.ENV == Environment.PRODUCTION:
            if os.getenv("LOG_CONSOLE_FORMAT") is None:
                self.LOG_CONSOLE_FORMAT = "json"
            if os.getenv("LOG_LEVEL") is None:
                self.LOG_LEVEL = "WARNING"

        elif self.ENV == Environment.STAGING:
            if os.getenv("LOG_CONSOLE_FORMAT") is None:
                self.LOG_CONSOLE_FORMAT = "json"
            if os.getenv("LOG_LEVEL") is None:
                self.LOG_LEVEL = "INFO"

        else:  # Environment.DEV
            if os.getenv("LOG_CONSOLE_FORMAT") is None:
                self.LOG_CONSOLE_FORMAT = "human"
            if os.getenv("LOG_LEVEL") is None:
                self.LOG_LEVEL = "DEBUG"


settings = Settings()


def configure(**overrides: Any) -> Settings:
    """
    Update global pagination settings at runtime.

    Values are validated the same way environment variables are, so
    ``configure(DEFAULT_PER_PAGE=0)`` raises a pydantic ValidationError.

    Args:
        **overrides: Setting names and their new values.

    Returns:
        The updated module-level settings instance.

    Raises:
        AttributeError: If a name is not a known setting.

    Example:
        >>> configure(PAGE_METHOD_NAME="paginated_page")
        >>> class Post(BaseModel): ...
        >>> hasattr(Post, "paginated_page")
        True
    """
    for name, value in overrides.items():
        if name not in Settings.model_fields:
            raise AttributeError(f"Unknown setting: {name}")
        setattr(settings, name, value)
    return settings
