"""AuthService adapter with a single admin account taken from settings."""

import logging
import secrets

from blogkit.application.interfaces import AuthService, JwtService
from blogkit.domain.entities import LoginRequest, LoginResponse, UserInfo

logger = logging.getLogger(__name__)


class SettingsAuthService(AuthService):
    """Authenticates the configured admin user and issues tokens for it.

    Hosts with a real user store supply their own ``AuthService``.
    """

    def __init__(self, jwt_service: JwtService, admin_username: str, admin_password: str):
        self._jwt_service = jwt_service
        self._admin_username = admin_username
        self._admin_password = admin_password

    async def authenticate(self, request: LoginRequest) -> LoginResponse | None:
        username_ok = secrets.compare_digest(
            request.username.encode("utf-8"), self._admin_username.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            request.password.encode("utf-8"), self._admin_password.encode("utf-8")
        )
        if not (username_ok and password_ok):
            logger.warning("Failed login attempt for user '%s'", request.username)
            return None

        user = UserInfo(username=self._admin_username, is_admin=True)
        logger.info("User '%s' logged in", user.username)
        return LoginResponse(token=self._jwt_service.generate_token(user), user_info=user)

    async def is_admin(self, username: str) -> bool:
        return username == self._admin_username

    async def get_user(self, username: str) -> UserInfo | None:
        if username != self._admin_username:
            return None
        return UserInfo(username=username, is_admin=True)
