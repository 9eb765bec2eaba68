"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogkit.config import Settings, get_settings
from blogkit.application.interfaces import (
    AuthService,
    BlogRepository,
    JwtService,
    TagRepository,
)
from blogkit.infrastructure.auth import JoseJwtService, SettingsAuthService
from blogkit.infrastructure.database import (
    create_engine,
    create_schema,
    create_session_factory,
)
from blogkit.infrastructure.database.repositories import (
    SQLAlchemyBlogRepository,
    SQLAlchemyTagRepository,
)
from blogkit.infrastructure.logging.log_config import setup_logging
from blogkit.infrastructure.memory import (
    InMemoryBlogRepository,
    InMemoryBlogStore,
    InMemoryTagRepository,
)
from blogkit.presentation.api.error_handlers import register_error_handlers
from blogkit.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables when backed by a database."""
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await create_schema(engine)
        logger.info("Database schema ready")

    yield

    # Shutdown
    if engine is not None:
        await engine.dispose()


def _wire_repositories(
    app: FastAPI,
    settings: Settings,
    blog_repository: BlogRepository | None,
    tag_repository: TagRepository | None,
) -> None:
    app.state.engine = None
    if blog_repository is not None and tag_repository is not None:
        app.state.blog_repository = blog_repository
        app.state.tag_repository = tag_repository
        return

    if settings.repository_backend == "sqlalchemy":
        engine = create_engine(settings.database_url, echo=settings.log_level_sql == "DEBUG")
        session_factory = create_session_factory(engine)
        app.state.engine = engine
        app.state.blog_repository = blog_repository or SQLAlchemyBlogRepository(session_factory)
        app.state.tag_repository = tag_repository or SQLAlchemyTagRepository(session_factory)
    else:
        store = InMemoryBlogStore()
        app.state.blog_repository = blog_repository or InMemoryBlogRepository(store)
        app.state.tag_repository = tag_repository or InMemoryTagRepository(store)

    logger.info("Using '%s' repository backend", settings.repository_backend)


def create_app(
    settings: Settings | None = None,
    *,
    blog_repository: BlogRepository | None = None,
    tag_repository: TagRepository | None = None,
    auth_service: AuthService | None = None,
    jwt_service: JwtService | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    Collaborators that are not passed in are built from ``settings``.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    if settings.uses_default_secrets:
        logger.warning(
            "Running with the built-in JWT secret or admin password; set them before deploying"
        )

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    _wire_repositories(app, settings, blog_repository, tag_repository)

    jwt_service = jwt_service or JoseJwtService(
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expire_minutes=settings.access_token_expire_minutes,
    )
    app.state.jwt_service = jwt_service
    app.state.auth_service = auth_service or SettingsAuthService(
        jwt_service,
        admin_username=settings.admin_username,
        admin_password=settings.admin_password.get_secret_value(),
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blogkit.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
