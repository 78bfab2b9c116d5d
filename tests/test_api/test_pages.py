"""Tests for the HTML listing and post pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ismblog.config import Settings
from tests.conftest import create_test_client, write_post

if TYPE_CHECKING:
    from pathlib import Path

    from httpx import AsyncClient


def _write_week(posts_dir: Path) -> None:
    """Seven posts dated Jan 1 through Jan 7."""
    for day in range(1, 8):
        write_post(
            posts_dir,
            f"day-{day}",
            f"Entry for day {day}.\n",
            title=f"Day {day}",
            date=f"2026-01-0{day}",
        )


class TestListing:
    async def test_first_page_shows_newest_five(
        self, client: AsyncClient, tmp_posts_dir: Path
    ) -> None:
        _write_week(tmp_posts_dir)
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        for day in (7, 6, 5, 4, 3):
            assert f'href="/post/day-{day}"' in resp.text
        assert 'href="/post/day-2"' not in resp.text
        assert 'href="/?page=2"' in resp.text

    async def test_second_page_shows_two_oldest(
        self, client: AsyncClient, tmp_posts_dir: Path
    ) -> None:
        _write_week(tmp_posts_dir)
        resp = await client.get("/", params={"page": 2})
        assert resp.status_code == 200
        assert 'href="/post/day-2"' in resp.text
        assert 'href="/post/day-1"' in resp.text
        assert 'href="/post/day-3"' not in resp.text
        assert 'href="/?page=1"' in resp.text
        assert 'href="/?page=3"' not in resp.text

    async def test_listing_order(self, client: AsyncClient, tmp_posts_dir: Path) -> None:
        _write_week(tmp_posts_dir)
        resp = await client.get("/")
        assert resp.text.index("day-7") < resp.text.index("day-6") < resp.text.index("day-3")

    async def test_excerpt_rendered(self, client: AsyncClient, tmp_posts_dir: Path) -> None:
        write_post(tmp_posts_dir, "long", "x" * 300, title="Long", date="2026-01-01")
        resp = await client.get("/")
        assert "x" * 150 + "..." in resp.text
        assert "x" * 151 not in resp.text

    async def test_title_is_escaped(self, client: AsyncClient, tmp_posts_dir: Path) -> None:
        write_post(tmp_posts_dir, "xss", title='"<b>bold</b>"', date="2026-01-01")
        resp = await client.get("/")
        assert "<b>bold</b>" not in resp.text
        assert "&lt;b&gt;bold&lt;/b&gt;" in resp.text

    @pytest.mark.parametrize("page", ["0", "-1", "3", "99"])
    async def test_out_of_range_redirects(
        self, client: AsyncClient, tmp_posts_dir: Path, page: str
    ) -> None:
        _write_week(tmp_posts_dir)
        resp = await client.get("/", params={"page": page})
        assert resp.status_code == 302
        assert resp.headers["location"] == "/?page=1"

    @pytest.mark.parametrize("page", ["abc", "", "1.5", "1_0", "\uff12"])
    async def test_non_numeric_page_defaults_to_first(
        self, client: AsyncClient, tmp_posts_dir: Path, page: str
    ) -> None:
        _write_week(tmp_posts_dir)
        resp = await client.get("/", params={"page": page})
        assert resp.status_code == 200
        assert 'href="/post/day-7"' in resp.text

    async def test_empty_blog_never_redirects(self, client: AsyncClient) -> None:
        resp = await client.get("/", params={"page": 3})
        assert resp.status_code == 200
        assert "まだ記事がありません" in resp.text

    async def test_site_title_rendered(self, client: AsyncClient) -> None:
        resp = await client.get("/")
        assert "<title>ism魂</title>" in resp.text

    async def test_custom_page_size(self, tmp_posts_dir: Path) -> None:
        _write_week(tmp_posts_dir)
        settings = Settings(_env_file=None, posts_dir=tmp_posts_dir, per_page=3)
        async with create_test_client(settings) as ac:
            resp = await ac.get("/", params={"page": 3})
        assert resp.status_code == 200
        assert 'href="/post/day-1"' in resp.text
        assert 'href="/post/day-2"' not in resp.text

    async def test_unreadable_posts_render_as_empty(self, tmp_path: Path) -> None:
        settings = Settings(_env_file=None, posts_dir=tmp_path / "missing")
        async with create_test_client(settings) as ac:
            resp = await ac.get("/")
        assert resp.status_code == 200
        assert "まだ記事がありません" in resp.text


class TestPostPage:
    async def test_post_rendered(self, client: AsyncClient, tmp_posts_dir: Path) -> None:
        write_post(
            tmp_posts_dir,
            "walk",
            "## By the river\n\nIt was **sunny**.\n",
            title="Walk",
            date="2026-01-07",
        )
        resp = await client.get("/post/walk")
        assert resp.status_code == 200
        assert "<title>Walk - ism魂</title>" in resp.text
        assert "<h2>By the river</h2>" in resp.text
        assert "<strong>sunny</strong>" in resp.text
        assert "2026-01-07" in resp.text

    async def test_post_without_frontmatter(self, client: AsyncClient, tmp_posts_dir: Path) -> None:
        write_post(tmp_posts_dir, "bare", "Plain body.\n")
        resp = await client.get("/post/bare")
        assert resp.status_code == 200
        assert "Untitled - ism魂" in resp.text

    async def test_unknown_slug_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/post/does-not-exist")
        assert resp.status_code == 404
        assert "記事が見つかりません" in resp.text

    async def test_script_in_body_is_stripped(
        self, client: AsyncClient, tmp_posts_dir: Path
    ) -> None:
        write_post(tmp_posts_dir, "evil", "Hi\n\n<script>alert(1)</script>\n", title="Evil")
        resp = await client.get("/post/evil")
        assert resp.status_code == 200
        assert "<script>alert(1)</script>" not in resp.text


class TestNotFound:
    async def test_unknown_path_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/no/such/page")
        assert resp.status_code == 404
        assert resp.headers["content-type"].startswith("text/html")
        assert "ページが見つかりません" in resp.text

    async def test_unknown_api_path_is_json_404(self, client: AsyncClient) -> None:
        resp = await client.get("/api/nothing")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Not Found"}

    async def test_method_not_allowed_is_not_rendered_as_404(self, client: AsyncClient) -> None:
        resp = await client.post("/")
        assert resp.status_code == 405


class TestStatic:
    async def test_stylesheet_served(self, client: AsyncClient) -> None:
        resp = await client.get("/static/style.css")
        assert resp.status_code == 200
        assert "text/css" in resp.headers["content-type"]

    async def test_missing_static_file_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/static/missing.css")
        assert resp.status_code == 404
