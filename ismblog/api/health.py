"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ismblog import __version__
from ismblog.api.deps import get_post_repository
from ismblog.filesystem.post_repository import PostRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    posts: str
    post_count: int


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    repository: Annotated[PostRepository, Depends(get_post_repository)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    result = await repository.load_posts()
    if result.failed:
        logger.debug("Health check could not load posts: %s", result.error)

    return HealthResponse(
        status="degraded" if result.failed else "ok",
        version=__version__,
        posts="error" if result.failed else "ok",
        post_count=len(result.posts),
    )
