"""FastAPI dependency injection — wires infrastructure to application layer.

Collaborators are created once by ``create_app`` and stored on
``app.state``; the providers below read them back per request.
"""

from fastapi import Depends, Request

from blogkit.config import Settings
from blogkit.application.interfaces import (
    AuthService,
    BlogRepository,
    JwtService,
    TagRepository,
)
from blogkit.application.services import BlogService, TagService


def get_app_settings(request: Request) -> Settings:
    """The Settings instance the running app was built with."""
    return request.app.state.settings


def get_blog_repository(request: Request) -> BlogRepository:
    return request.app.state.blog_repository


def get_tag_repository(request: Request) -> TagRepository:
    return request.app.state.tag_repository


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_jwt_service(request: Request) -> JwtService:
    return request.app.state.jwt_service


def get_blog_service(
    repository: BlogRepository = Depends(get_blog_repository),
    settings: Settings = Depends(get_app_settings),
) -> BlogService:
    """Provides a BlogService bound to the configured repository."""
    return BlogService(
        repository,
        words_per_minute=settings.reading_words_per_minute,
        slug_max_length=settings.slug_max_length,
        max_page_size=settings.max_page_size,
    )


def get_tag_service(
    repository: TagRepository = Depends(get_tag_repository),
) -> TagService:
    """Provides a TagService bound to the configured repository."""
    return TagService(repository)
