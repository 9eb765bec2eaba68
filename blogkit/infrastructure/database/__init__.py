from .base import Base
from .session import create_engine, create_schema, create_session_factory, get_async_url
from .models import BlogPostModel, PostTagModel, TagModel

__all__ = [
    "Base",
    "create_engine",
    "create_schema",
    "create_session_factory",
    "get_async_url",
    "BlogPostModel",
    "PostTagModel",
    "TagModel",
]
