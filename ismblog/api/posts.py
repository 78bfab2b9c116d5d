"""HTML views: post listing and single post pages."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ismblog.api.deps import get_post_repository, get_settings, get_templates
from ismblog.config import Settings
from ismblog.exceptions import PostNotFoundError
from ismblog.filesystem.post_repository import PostRepository
from ismblog.rendering.markdown_renderer import render_markdown
from ismblog.services.pagination_service import paginate, parse_page_param

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


@router.get("/", response_class=HTMLResponse)
async def list_posts_page(
    request: Request,
    repository: Annotated[PostRepository, Depends(get_post_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
    page: Annotated[str | None, Query()] = None,
) -> HTMLResponse:
    """Paginated post listing, newest first."""
    result = await repository.load_posts()
    if result.failed:
        logger.debug("Rendering empty listing after load failure: %s", result.error)

    listing = paginate(result.posts, parse_page_param(page), per_page=settings.per_page)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.site_title,
            "description": settings.site_description,
            "posts": listing.items,
            "pagination": listing.pagination,
        },
    )


@router.get("/post/{slug}", response_class=HTMLResponse)
async def post_page(
    request: Request,
    slug: str,
    repository: Annotated[PostRepository, Depends(get_post_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
) -> HTMLResponse:
    """Single post with its markdown body rendered to HTML."""
    post = await repository.find_post(slug)
    if post is None:
        raise PostNotFoundError(slug)

    return templates.TemplateResponse(
        request,
        "post.html",
        {
            "title": f"{post.title} - {settings.site_title}",
            "post": post,
            "html_content": render_markdown(post.content),
        },
    )
