from .auth import LoginRequest, LoginResponse, UserInfo
from .blog_post import BlogPost, BlogSummary
from .pagination import PaginatedResult
from .tag import Tag

__all__ = [
    "BlogPost",
    "BlogSummary",
    "LoginRequest",
    "LoginResponse",
    "PaginatedResult",
    "Tag",
    "UserInfo",
]
