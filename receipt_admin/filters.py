# receipt_admin/filters.py
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

from .config import DEFAULT_PAGE_SIZE, PAGE_SIZES

# python field -> query parameter
QUERY_KEYS = {
    "start_date": "startDate",
    "end_date": "endDate",
    "user": "user",
    "page": "page",
    "limit": "limit",
}
TEXT_FIELDS = ("start_date", "end_date", "user")


@dataclass(frozen=True)
class FilterState:
    start_date: str = ""
    end_date: str = ""
    user: str = ""
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def with_field(self, field: str, value: Any) -> "FilterState":
        """Return a copy with one field changed; non-page changes go back to page 1."""
        if field not in QUERY_KEYS:
            raise KeyError(f"unknown filter field: {field}")

        if field == "page":
            return replace(self, page=int(value))
        if field == "limit":
            limit = int(value)
            if limit not in PAGE_SIZES:
                raise ValueError(f"limit must be one of {PAGE_SIZES}, got {limit}")
            return replace(self, limit=limit, page=1)
        return replace(self, **{field: "" if value is None else str(value), "page": 1})

    def query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for field, key in QUERY_KEYS.items():
            value = str(getattr(self, field))
            if value != "":
                params[key] = value
        return params

    def export_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for field in TEXT_FIELDS:
            value = getattr(self, field)
            if value:
                params[QUERY_KEYS[field]] = value
        return params


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def previous_page(page: int) -> int:
    return max(1, page - 1)


def next_page(page: int, pages: int) -> int:
    return min(max(pages, 1), page + 1)


def page_bounds(page: int, limit: int, total: int) -> Tuple[int, int]:
    """1-based first/last row numbers shown on a page."""
    if total <= 0:
        return 0, 0
    return (page - 1) * limit + 1, min(page * limit, total)
