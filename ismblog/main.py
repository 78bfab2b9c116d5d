"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from ismblog import __version__
from ismblog.api.health import router as health_router
from ismblog.api.posts import router as posts_router
from ismblog.config import Settings
from ismblog.exceptions import PageOutOfRangeError, PostNotFoundError
from ismblog.filesystem.post_repository import PostRepository
from ismblog.middleware.https_redirect import HTTPSRedirectMiddleware
from ismblog.services.datetime_service import format_display, format_iso

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

PAGE_NOT_FOUND_TITLE = "ページが見つかりません"
POST_NOT_FOUND_TITLE = "記事が見つかりません"


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)


def create_templates(settings: Settings) -> Jinja2Templates:
    """Create the Jinja2 renderer with the site-wide filters and globals."""
    templates = Jinja2Templates(directory=str(settings.templates_dir))
    templates.env.filters["display_date"] = format_display
    templates.env.filters["iso_date"] = format_iso
    templates.env.globals["site_title"] = settings.site_title
    templates.env.globals["site_description"] = settings.site_description
    return templates


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    _configure_logging(settings.debug)
    logger.info(
        "Starting ism-blog (environment=%s, posts_dir=%s)",
        settings.environment,
        settings.posts_dir,
    )
    if not settings.posts_dir.is_dir():
        logger.warning(
            "Posts directory %s does not exist; listing will be empty", settings.posts_dir
        )

    yield

    logger.info("ism-blog stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()
    settings.validate_runtime()

    app = FastAPI(
        title="ism-blog",
        description="A small markdown blog",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.post_repository = PostRepository(
        posts_dir=settings.posts_dir, default_tz=settings.timezone
    )
    templates = create_templates(settings)
    app.state.templates = templates

    if settings.enforce_https:
        app.add_middleware(HTTPSRedirectMiddleware)

    app.include_router(health_router)
    app.include_router(posts_router)

    static_dir = settings.static_dir
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    else:
        logger.warning("Static directory %s not found; /static is disabled", static_dir)

    @app.exception_handler(PageOutOfRangeError)
    async def page_out_of_range_handler(
        request: Request, exc: PageOutOfRangeError
    ) -> RedirectResponse:
        logger.info("Redirecting %s: %s", request.url, exc)
        return RedirectResponse(url=f"/?page={exc.redirect_page}", status_code=302)

    @app.exception_handler(PostNotFoundError)
    async def post_not_found_handler(request: Request, exc: PostNotFoundError) -> Response:
        logger.info("%s", exc)
        return templates.TemplateResponse(
            request, "404.html", {"title": POST_NOT_FOUND_TITLE}, status_code=404
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code != 404 or request.url.path.startswith("/api/"):
            return await http_exception_handler(request, exc)
        return templates.TemplateResponse(
            request, "404.html", {"title": PAGE_NOT_FOUND_TITLE}, status_code=404
        )

    return app


app = create_app()


def cli_entry() -> None:
    """CLI entry point for running the server."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "ismblog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        proxy_headers=settings.enforce_https,
        forwarded_allow_ips="*" if settings.enforce_https else None,
    )
