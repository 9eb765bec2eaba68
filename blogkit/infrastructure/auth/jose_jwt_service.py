"""JwtService adapter built on python-jose."""

import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import JWTError, jwt

from blogkit.application.interfaces import JwtService
from blogkit.domain.entities import UserInfo

logger = logging.getLogger(__name__)

_ADMIN_ROLE = "admin"


class JoseJwtService(JwtService):
    """Issues and verifies HMAC-signed access tokens.

    Tokens carry ``sub``, ``admin``, ``role``, ``iat``, ``exp``, ``iss``,
    ``aud`` and a random ``jti``. Validation checks the signature, expiry,
    issuer and audience.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        issuer: str = "blogkit",
        audience: str = "blogkit-admin",
        expire_minutes: int = 60,
    ):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience
        self._expire_minutes = expire_minutes

    def generate_token(self, user: UserInfo, expires_delta: timedelta | None = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self._expire_minutes))
        claims = {
            "sub": user.username,
            "admin": user.is_admin,
            "role": _ADMIN_ROLE if user.is_admin else "user",
            "jti": str(uuid4()),
            "iat": now,
            "exp": expire,
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def validate_token(self, token: str) -> UserInfo | None:
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
            )
        except JWTError as exc:
            logger.debug("Rejected token: %s", exc)
            return None
        return _user_from_claims(payload)

    def get_user_from_token(self, token: str) -> UserInfo | None:
        if not token:
            return None
        try:
            payload = jwt.get_unverified_claims(token)
        except JWTError:
            return None
        return _user_from_claims(payload)


def _user_from_claims(payload: dict) -> UserInfo | None:
    username = payload.get("sub")
    if not username:
        return None
    is_admin = payload.get("admin") is True or payload.get("role") == _ADMIN_ROLE
    return UserInfo(username=username, is_admin=is_admin)
