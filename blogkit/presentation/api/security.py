"""Bearer-token authentication and the admin authorization dependency."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blogkit.application.interfaces import JwtService
from blogkit.domain.entities import UserInfo
from blogkit.domain.exceptions import AuthenticationError, AuthorizationError
from blogkit.infrastructure.dependencies import get_jwt_service

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_service: JwtService = Depends(get_jwt_service),
) -> UserInfo:
    """Resolve the caller from the ``Authorization: Bearer`` header."""
    if credentials is None:
        raise AuthenticationError()
    user = jwt_service.validate_token(credentials.credentials)
    if user is None:
        raise AuthenticationError()
    return user


async def require_admin(user: UserInfo = Depends(get_current_user)) -> UserInfo:
    if not user.is_admin:
        raise AuthorizationError()
    return user
