"""Abstract interface (port) for token issuance and validation."""

from abc import ABC, abstractmethod

from blogkit.domain.entities import UserInfo


class JwtService(ABC):
    """Port for JWT operations — implemented in the infrastructure layer."""

    @abstractmethod
    def generate_token(self, user: UserInfo) -> str:
        """Issue a signed token for the given user."""
        ...

    @abstractmethod
    def validate_token(self, token: str) -> UserInfo | None:
        """Verify signature, expiry and audience. None if the token is invalid."""
        ...

    @abstractmethod
    def get_user_from_token(self, token: str) -> UserInfo | None:
        """Read the user claims without verifying the token."""
        ...
