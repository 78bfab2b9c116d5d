"""Application-level exception types.

Convention:
- ``PageOutOfRangeError`` is a control-flow signal, not a failure. The global
  handler in ``ismblog/main.py`` turns it into a redirect to the first listing
  page.
- ``PostNotFoundError`` is raised for unknown slugs; unknown paths surface as
  Starlette's ``HTTPException(404)``. Both are rendered as ``404.html``.
"""

from __future__ import annotations


class PageOutOfRangeError(Exception):
    """Raised when a requested listing page is outside ``[1, total_pages]``."""

    redirect_page = 1

    def __init__(self, requested_page: int, total_pages: int) -> None:
        super().__init__(
            f"Page {requested_page} is out of range (total pages: {total_pages})"
        )
        self.requested_page = requested_page
        self.total_pages = total_pages


class PostNotFoundError(Exception):
    """Raised when no post exists for the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Post not found: {slug}")
        self.slug = slug
