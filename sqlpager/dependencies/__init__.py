"""FastAPI dependencies for paginated endpoints."""

from sqlpager.dependencies.pagination import PageParamsDep, page_params

__all__ = ["PageParamsDep", "page_params"]
