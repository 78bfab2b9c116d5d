"""Shared API dependencies: settings, post repository, templates."""

from __future__ import annotations

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ismblog.config import Settings
from ismblog.filesystem.post_repository import PostRepository


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_post_repository(request: Request) -> PostRepository:
    """Get the post repository from app state."""
    repository: PostRepository = request.app.state.post_repository
    return repository


def get_templates(request: Request) -> Jinja2Templates:
    """Get the template renderer from app state."""
    templates: Jinja2Templates = request.app.state.templates
    return templates
