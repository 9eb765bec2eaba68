from .auth import LoginRequestSchema, LoginResponseSchema, UserInfoResponse
from .blog import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    BlogSummaryResponse,
    FeatureResponse,
    ReadingTimeResponse,
    SlugResponse,
)
from .pagination import PaginatedResponse
from .tag import TagCreate, TagIdsRequest, TagResponse, TagUpdate

__all__ = [
    "BlogPostCreate",
    "BlogPostResponse",
    "BlogPostUpdate",
    "BlogSummaryResponse",
    "FeatureResponse",
    "LoginRequestSchema",
    "LoginResponseSchema",
    "PaginatedResponse",
    "ReadingTimeResponse",
    "SlugResponse",
    "TagCreate",
    "TagIdsRequest",
    "TagResponse",
    "TagUpdate",
    "UserInfoResponse",
]
