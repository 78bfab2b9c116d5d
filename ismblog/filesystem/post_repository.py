"""Posts directory scanner."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import yaml

from ismblog.filesystem.frontmatter import PostData, parse_post
from ismblog.services.datetime_service import now_utc

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"


@dataclass
class LoadResult:
    """Outcome of a posts directory scan.

    A failed scan carries no posts and the error message, so callers can tell
    an empty blog apart from an unreadable one.
    """

    posts: list[PostData] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def discover_posts(posts_dir: Path) -> list[Path]:
    """List markdown files directly under ``posts_dir`` in filename order.

    Raises OSError if the directory cannot be listed.
    """
    return sorted(
        entry
        for entry in posts_dir.iterdir()
        if entry.suffix == POST_SUFFIX and entry.is_file()
    )


def sort_posts(posts: list[PostData]) -> list[PostData]:
    """Sort newest first; equal dates keep their input order."""
    return sorted(posts, key=lambda post: post.date, reverse=True)


def _warn_duplicate_slugs(posts: list[PostData]) -> None:
    counts = Counter(post.slug for post in posts)
    for slug, count in counts.items():
        if count > 1:
            logger.warning("Slug %r is used by %d posts; the newest one is served", slug, count)


@dataclass
class PostRepository:
    """Loads posts from a flat directory of markdown files.

    Nothing is cached: every call reads the directory again.
    """

    posts_dir: Path
    default_tz: str = "UTC"

    def scan_posts(self) -> list[PostData]:
        """Read and parse every post, newest first.

        Raises OSError, UnicodeDecodeError or yaml.YAMLError on the first
        unreadable file.
        """
        loaded_at = now_utc()
        posts: list[PostData] = []
        for post_path in discover_posts(self.posts_dir):
            raw_content = post_path.read_text(encoding="utf-8-sig")
            posts.append(
                parse_post(
                    raw_content,
                    slug=post_path.name.removesuffix(POST_SUFFIX),
                    default_tz=self.default_tz,
                    loaded_at=loaded_at,
                )
            )
        _warn_duplicate_slugs(posts)
        return sort_posts(posts)

    async def load_posts(self) -> LoadResult:
        """Load all posts without blocking the event loop.

        Read errors are logged and reported through ``LoadResult.error``;
        a single bad file empties the whole result.
        """
        try:
            posts = await asyncio.to_thread(self.scan_posts)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            logger.exception("Failed to load posts from %s", self.posts_dir)
            return LoadResult(error=f"{type(exc).__name__}: {exc}")
        logger.debug("Loaded %d posts from %s", len(posts), self.posts_dir)
        return LoadResult(posts=posts)

    async def find_post(self, slug: str) -> PostData | None:
        """Return the post with ``slug``, or None if there is no such post."""
        result = await self.load_posts()
        for post in result.posts:
            if post.slug == slug:
                return post
        return None
