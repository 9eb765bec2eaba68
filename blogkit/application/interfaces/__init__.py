from .auth_service import AuthService
from .blog_repository import BlogRepository
from .jwt_service import JwtService
from .tag_repository import TagRepository

__all__ = [
    "AuthService",
    "BlogRepository",
    "JwtService",
    "TagRepository",
]
