"""
Page arithmetic over an immutable page specification.

Everything here is pure: a ``PageSpec`` describes a window (page number,
per-page, padding and caps) and the functions derive offsets, limits and
page metadata from it. ``PaginatedQuery`` keeps one spec per chain step and
hands it to these functions.

Example:
    ```python
    from sqlpager.storage.pagination.calculator import PageSpec, offset, total_pages

    spec = PageSpec(default_per_page=25).with_page(3).with_per(10)
    offset(spec)  # 20
    total_pages(spec, 95)  # 10
    ```
"""

import math
import re
from dataclasses import dataclass, replace
from typing import Any

from sqlpager.constants import FIRST_PAGE
from sqlpager.exceptions import ZeroPerPageOperation

_LEADING_DIGIT = re.compile(r"^\d")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def to_int(value: Any) -> int:
    """
    Loose integer coercion.

    Integers and floats are truncated, strings are read up to the first
    non-digit character ("12abc" is 12) and anything unreadable is 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else int(value)
    match = _LEADING_INT.match(str(value)) if value is not None else None
    return int(match.group()) if match else 0


def normalize_page(value: Any) -> int:
    """Page number for a raw input; missing, junk and values below 1 mean 1."""
    return max(to_int(value), FIRST_PAGE)


def normalize_per_page(value: Any) -> int | None:
    """
    Per-page for a raw input.

    Returns None (use the default) for None, negative numbers and values
    that do not start with a digit. Zero is returned as is.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if value < 0:
            return None
        number = to_int(value)
    elif _LEADING_DIGIT.match(str(value)):
        number = to_int(value)
    else:
        return None
    return number if number >= 0 else None


@dataclass(frozen=True)
class PageSpec:
    """
    Immutable description of a pagination window.

    Attributes:
        current_page: Requested page, already clamped to >= 1.
        per_page: Explicit per-page from ``per()``; None means default.
        padding: Extra rows skipped on top of the page offset.
        max_per_page: Chain-level cap from ``max_per_page()``.
        max_pages: Chain-level cap from ``max_pages()``.
        default_per_page: Model default the chain started from.
        model_max_per_page: Model cap used when no chain-level cap is set.
        model_max_pages: Model cap used when no chain-level cap is set.
        without_count: Never issue COUNT for this window.
    """

    current_page: int = FIRST_PAGE
    per_page: int | None = None
    padding: int = 0
    max_per_page: int | None = None
    max_pages: int | None = None
    default_per_page: int = 25
    model_max_per_page: int | None = None
    model_max_pages: int | None = None
    without_count: bool = False

    def with_page(self, value: Any) -> "PageSpec":
        return replace(self, current_page=normalize_page(value))

    def with_per(self, value: Any) -> "PageSpec":
        per_page = normalize_per_page(value)
        if per_page is None:
            # per(None) / per(-1) / per("aho") keep whatever was there
            return self
        return replace(self, per_page=per_page)

    def with_padding(self, value: Any) -> "PageSpec":
        return replace(self, padding=max(to_int(value), 0))

    def with_max_per_page(self, value: int | None) -> "PageSpec":
        return replace(
            self, max_per_page=None if value is None else to_int(value)
        )

    def with_max_pages(self, value: int | None) -> "PageSpec":
        return replace(
            self, max_pages=None if value is None else to_int(value)
        )

    def with_count_skipped(self) -> "PageSpec":
        return replace(self, without_count=True)

    @property
    def per_page_cap(self) -> int | None:
        if self.max_per_page is not None:
            return self.max_per_page
        return self.model_max_per_page

    @property
    def pages_cap(self) -> int | None:
        cap = self.max_pages if self.max_pages is not None else self.model_max_pages
        return cap if cap is not None and cap > 0 else None

    @property
    def effective_per_page(self) -> int:
        """Per-page after the default fallback and the max-per-page clamp."""
        requested = (
            self.per_page if self.per_page is not None else self.default_per_page
        )
        if requested == 0:
            return 0
        cap = self.per_page_cap
        if cap is not None and cap < requested:
            return cap
        return requested


def _require_per_page(spec: PageSpec, what: str) -> int:
    per_page = spec.effective_per_page
    if per_page == 0:
        raise ZeroPerPageOperation(
            f"{what} was incalculable. Perhaps you called .per(0)?"
        )
    return per_page


def limit(spec: PageSpec) -> int:
    return _require_per_page(spec, "Limit")


def offset(spec: PageSpec) -> int:
    per_page = _require_per_page(spec, "Offset")
    return (spec.current_page - 1) * per_page + spec.padding


def current_page(spec: PageSpec) -> int:
    _require_per_page(spec, "Current page")
    return spec.current_page


def window(spec: PageSpec) -> tuple[int, int]:
    """
    Raw (offset, limit) for the execution boundary.

    Unlike ``offset``/``limit`` this never raises: a zero per-page yields a
    zero limit, so the fetch simply returns nothing.
    """
    per_page = spec.effective_per_page
    return (spec.current_page - 1) * per_page + spec.padding, per_page


def total_pages(spec: PageSpec, total_count: int) -> int:
    """
    Number of pages for ``total_count`` rows.

    Padding rows are not part of any page, so they are subtracted from the
    count first. The result is clamped to the max pages cap when set.
    """
    per_page = _require_per_page(spec, "The number of total pages")
    count_without_padding = max(total_count - spec.padding, 0)
    pages = math.ceil(count_without_padding / per_page)
    cap = spec.pages_cap
    if cap is not None and cap < pages:
        return cap
    return pages


def is_first_page(spec: PageSpec) -> bool:
    return current_page(spec) == FIRST_PAGE


def is_last_page(spec: PageSpec, pages: int) -> bool:
    return current_page(spec) == pages


def is_out_of_range(spec: PageSpec, pages: int) -> bool:
    return current_page(spec) > pages


def next_page(spec: PageSpec, pages: int) -> int | None:
    page = current_page(spec)
    return page + 1 if page < pages else None


def prev_page(spec: PageSpec) -> int | None:
    page = current_page(spec)
    return page - 1 if page > FIRST_PAGE else None
