"""Shared test fixtures for ism-blog."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from ismblog.config import Settings
from ismblog.main import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path


def write_post(
    posts_dir: Path,
    slug: str,
    body: str = "Body text.\n",
    *,
    title: str | None = None,
    date: str | None = None,
) -> Path:
    """Write ``posts_dir/<slug>.md`` with optional front matter."""
    header_lines: list[str] = []
    if title is not None:
        header_lines.append(f"title: {title}")
    if date is not None:
        header_lines.append(f"date: {date}")
    text = body
    if header_lines:
        text = "---\n" + "\n".join(header_lines) + "\n---\n" + body
    path = posts_dir / f"{slug}.md"
    path.write_text(text, encoding="utf-8")
    return path


@asynccontextmanager
async def create_test_client(settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client for an app built from ``settings``."""
    app = create_app(settings)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def tmp_posts_dir(tmp_path: Path) -> Path:
    """Create an empty temporary posts directory."""
    posts = tmp_path / "posts"
    posts.mkdir()
    return posts


@pytest.fixture
def test_settings(tmp_posts_dir: Path) -> Settings:
    """Create development settings pointing at the temporary posts directory."""
    return Settings(
        _env_file=None,
        debug=True,
        posts_dir=tmp_posts_dir,
    )


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the development app."""
    async with create_test_client(test_settings) as ac:
        yield ac
