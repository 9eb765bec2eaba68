"""Abstract interface (port) for credential checks."""

from abc import ABC, abstractmethod

from blogkit.domain.entities import LoginRequest, LoginResponse, UserInfo


class AuthService(ABC):
    """Port for user authentication — supplied by the host application."""

    @abstractmethod
    async def authenticate(self, request: LoginRequest) -> LoginResponse | None:
        """Exchange credentials for a token. None when they are invalid."""
        ...

    @abstractmethod
    async def is_admin(self, username: str) -> bool:
        ...

    @abstractmethod
    async def get_user(self, username: str) -> UserInfo | None:
        ...
