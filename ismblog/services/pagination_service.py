"""Listing pagination over an in-memory, already sorted post list."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ismblog.exceptions import PageOutOfRangeError
from ismblog.schemas.pagination import PaginationResult

DEFAULT_PER_PAGE = 5
DEFAULT_PAGE = 1

_PAGE_PATTERN = re.compile(r"[+-]?[0-9]+")

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """The posts visible on one listing page plus its metadata."""

    items: list[T]
    pagination: PaginationResult


def parse_page_param(raw: str | None) -> int:
    """Parse the ``page`` query parameter.

    Missing or non-integer input (anything but optionally signed ASCII
    digits) folds to the first page instead of failing.
    """
    if raw is None:
        return DEFAULT_PAGE
    value = raw.strip()
    if not _PAGE_PATTERN.fullmatch(value):
        return DEFAULT_PAGE
    return int(value)


def count_pages(total: int, per_page: int) -> int:
    """Number of pages needed for ``total`` items; 0 for an empty list."""
    return math.ceil(total / per_page)


def is_valid_page(page: int, total_pages: int) -> bool:
    """An empty listing accepts any positive page so it never redirects to itself."""
    return page >= 1 and (total_pages == 0 or page <= total_pages)


def paginate(
    items: Sequence[T], page: int, per_page: int = DEFAULT_PER_PAGE
) -> Page[T]:
    """Slice ``items`` for ``page``.

    Raises PageOutOfRangeError for pages outside ``[1, total_pages]``;
    callers redirect to ``PageOutOfRangeError.redirect_page``.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    total = len(items)
    total_pages = count_pages(total, per_page)
    if not is_valid_page(page, total_pages):
        raise PageOutOfRangeError(page, total_pages)

    start = (page - 1) * per_page
    visible = list(items[start : start + per_page])

    return Page(
        items=visible,
        pagination=PaginationResult(
            current_page=page,
            total_pages=total_pages,
            total_posts=total,
            per_page=per_page,
            has_prev_page=page > 1,
            has_next_page=page < total_pages,
            prev_page=page - 1,
            next_page=page + 1,
        ),
    )
