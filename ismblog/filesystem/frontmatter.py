"""YAML front matter parser for blog posts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

import frontmatter

from ismblog.services.datetime_service import now_utc, parse_datetime

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
EXCERPT_LENGTH = 150
EXCERPT_MARKER = "..."


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """Return the first ``length`` characters of ``content`` plus a marker.

    Truncation counts code points: no word-boundary handling, and a grapheme
    cluster (emoji with modifiers, combining marks) may be cut in half.
    """
    return content[:length] + EXCERPT_MARKER


@dataclass(frozen=True)
class PostData:
    """A parsed blog post."""

    slug: str
    title: str
    date: datetime
    content: str

    @property
    def excerpt(self) -> str:
        return make_excerpt(self.content)


def parse_title(raw_title: object | None) -> str:
    """Resolve the front matter title.

    Only a missing or null title falls back to the default; an explicit
    empty string is kept.
    """
    if raw_title is None:
        return DEFAULT_TITLE
    if not isinstance(raw_title, str):
        return str(raw_title)
    return raw_title


def parse_date(
    raw_date: object | None,
    *,
    loaded_at: datetime,
    default_tz: str = "UTC",
    slug: str = "",
) -> datetime:
    """Resolve the front matter date, falling back to ``loaded_at``."""
    if raw_date is None:
        return loaded_at
    value = raw_date if isinstance(raw_date, (date, str)) else str(raw_date)
    try:
        return parse_datetime(value, default_tz=default_tz)
    except (ValueError, OverflowError):
        logger.warning("Unparseable date %r in post %r, using load time", raw_date, slug)
        return loaded_at


def parse_post(
    raw_content: str,
    slug: str,
    *,
    default_tz: str = "UTC",
    loaded_at: datetime | None = None,
) -> PostData:
    """Parse a markdown file with optional YAML front matter into PostData.

    Raises ``yaml.YAMLError`` when the front matter block is not valid YAML.
    """
    post = frontmatter.loads(raw_content)
    if loaded_at is None:
        loaded_at = now_utc()

    return PostData(
        slug=slug,
        title=parse_title(post.get("title")),
        date=parse_date(post.get("date"), loaded_at=loaded_at, default_tz=default_tz, slug=slug),
        content=post.content,
    )
