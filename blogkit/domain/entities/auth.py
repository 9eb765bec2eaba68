"""Authentication value objects — stateless, request/response only."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserInfo:
    username: str
    is_admin: bool = False


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str


@dataclass(frozen=True)
class LoginResponse:
    token: str
    user_info: UserInfo
