"""Shared fixtures for the HTTP-level tests."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from blogkit.config import Settings
from blogkit.domain.entities import UserInfo
from blogkit.infrastructure.memory import (
    InMemoryBlogRepository,
    InMemoryBlogStore,
    InMemoryTagRepository,
)
from blogkit.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        repository_backend="memory",
        jwt_secret_key="integration-secret",
        admin_username="admin",
        admin_password="s3cret",
        log_level="WARNING",
    )


@pytest.fixture
def store() -> InMemoryBlogStore:
    return InMemoryBlogStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryBlogStore) -> FastAPI:
    return create_app(
        settings,
        blog_repository=InMemoryBlogRepository(store),
        tag_repository=InMemoryTagRepository(store),
    )


@pytest_asyncio.fixture
async def client(app: FastAPI):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def admin_headers(app: FastAPI) -> dict[str, str]:
    token = app.state.jwt_service.generate_token(UserInfo(username="admin", is_admin=True))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(app: FastAPI) -> dict[str, str]:
    token = app.state.jwt_service.generate_token(UserInfo(username="reader"))
    return {"Authorization": f"Bearer {token}"}
