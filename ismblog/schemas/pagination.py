"""Pagination schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PaginationResult(BaseModel):
    """Pagination metadata for the post listing.

    ``prev_page`` and ``next_page`` are always filled in; check
    ``has_prev_page`` / ``has_next_page`` before linking to them.
    """

    current_page: int
    total_pages: int = Field(ge=0)
    total_posts: int = Field(ge=0)
    per_page: int = Field(ge=1)
    has_prev_page: bool
    has_next_page: bool
    prev_page: int
    next_page: int
