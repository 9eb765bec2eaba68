from .blog_repository import SQLAlchemyBlogRepository
from .tag_repository import SQLAlchemyTagRepository

__all__ = [
    "SQLAlchemyBlogRepository",
    "SQLAlchemyTagRepository",
]
