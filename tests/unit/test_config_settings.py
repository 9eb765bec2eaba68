"""Unit tests for application settings configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from blogkit.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_defaults(monkeypatch):
    monkeypatch.delenv("BLOGKIT_REPOSITORY_BACKEND", raising=False)
    settings = Settings(_env_file=None)

    assert settings.repository_backend == "memory"
    assert settings.jwt_algorithm == "HS256"
    assert settings.default_page_size == 10
    assert settings.reading_words_per_minute == 200


def test_environment_variables_use_blogkit_prefix(monkeypatch):
    monkeypatch.setenv("BLOGKIT_MAX_PAGE_SIZE", "25")
    monkeypatch.setenv("BLOGKIT_JWT_SECRET_KEY", "from-env")
    monkeypatch.setenv("MAX_PAGE_SIZE", "999")

    settings = Settings(_env_file=None)

    assert settings.max_page_size == 25
    assert settings.jwt_secret_key.get_secret_value() == "from-env"


def test_secrets_are_masked_in_repr():
    settings = Settings(_env_file=None, admin_password="top-secret")
    assert "top-secret" not in repr(settings)


@pytest.mark.parametrize(
    "overrides, missing",
    [
        ({}, "jwt_secret_key, admin_password"),
        ({"admin_password": "s3cret"}, "jwt_secret_key"),
        ({"jwt_secret_key": "real-secret"}, "admin_password"),
    ],
)
def test_default_secrets_are_rejected_outside_development(monkeypatch, overrides, missing):
    monkeypatch.delenv("BLOGKIT_JWT_SECRET_KEY", raising=False)
    monkeypatch.delenv("BLOGKIT_ADMIN_PASSWORD", raising=False)

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None, app_env="production", **overrides)

    assert f"{missing} must be set" in str(exc_info.value)


def test_explicit_secrets_are_accepted_outside_development():
    settings = Settings(
        _env_file=None,
        app_env="production",
        jwt_secret_key="real-secret",
        admin_password="s3cret",
    )

    assert settings.uses_default_secrets is False


def test_development_keeps_the_default_secrets(monkeypatch):
    monkeypatch.delenv("BLOGKIT_JWT_SECRET_KEY", raising=False)
    monkeypatch.delenv("BLOGKIT_ADMIN_PASSWORD", raising=False)

    settings = Settings(_env_file=None, app_env="development")

    assert settings.uses_default_secrets is True
