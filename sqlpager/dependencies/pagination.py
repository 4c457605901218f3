"""FastAPI dependency reading page parameters from the query string."""

from typing import Annotated

from fastapi import Depends, Request

from sqlpager.schemas.request import PageParams
from sqlpager.settings import settings


def page_params(request: Request) -> PageParams:
    """
    Read the page and per-page query parameters.

    Parameter names come from ``settings.PARAM_NAME`` and
    ``settings.PER_PAGE_PARAM_NAME``. Values are normalized rather than
    validated, so ``?page=abc&per_page=-1`` means page 1 with the default
    per-page instead of a 422 response.
    """
    query = request.query_params
    return PageParams(
        page=query.get(settings.PARAM_NAME),
        per_page=query.get(settings.PER_PAGE_PARAM_NAME),
    )


PageParamsDep = Annotated[PageParams, Depends(page_params)]
