"""Unit tests for the python-jose JwtService adapter."""

from datetime import timedelta

import pytest

from blogkit.domain.entities import UserInfo
from blogkit.infrastructure.auth import JoseJwtService


@pytest.fixture
def jwt_service() -> JoseJwtService:
    return JoseJwtService("unit-test-secret", issuer="blogkit", audience="blogkit-admin")


def test_token_round_trip_keeps_admin_flag(jwt_service: JoseJwtService):
    token = jwt_service.generate_token(UserInfo(username="alice", is_admin=True))

    assert jwt_service.validate_token(token) == UserInfo(username="alice", is_admin=True)


def test_non_admin_token(jwt_service: JoseJwtService):
    token = jwt_service.generate_token(UserInfo(username="bob"))

    user = jwt_service.validate_token(token)

    assert user is not None
    assert user.is_admin is False


def test_tokens_are_unique_per_issue(jwt_service: JoseJwtService):
    user = UserInfo(username="alice", is_admin=True)
    assert jwt_service.generate_token(user) != jwt_service.generate_token(user)


def test_expired_token_is_rejected_but_still_readable(jwt_service: JoseJwtService):
    token = jwt_service.generate_token(
        UserInfo(username="alice", is_admin=True), expires_delta=timedelta(minutes=-5)
    )

    assert jwt_service.validate_token(token) is None
    assert jwt_service.get_user_from_token(token) == UserInfo(username="alice", is_admin=True)


def test_token_signed_with_other_secret_is_rejected(jwt_service: JoseJwtService):
    forged = JoseJwtService("another-secret").generate_token(UserInfo("mallory", True))
    assert jwt_service.validate_token(forged) is None


def test_token_for_other_audience_is_rejected(jwt_service: JoseJwtService):
    other = JoseJwtService("unit-test-secret", audience="someone-else")
    token = other.generate_token(UserInfo("alice", True))
    assert jwt_service.validate_token(token) is None


def test_token_from_other_issuer_is_rejected(jwt_service: JoseJwtService):
    other = JoseJwtService("unit-test-secret", issuer="elsewhere")
    token = other.generate_token(UserInfo("alice", True))
    assert jwt_service.validate_token(token) is None


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_garbage_tokens_yield_none(jwt_service: JoseJwtService, token: str):
    assert jwt_service.validate_token(token) is None
    assert jwt_service.get_user_from_token(token) is None


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        JoseJwtService("")
