from .blog_service import BlogService
from .content_tools import ReadingTime
from .tag_service import TagService

__all__ = [
    "BlogService",
    "ReadingTime",
    "TagService",
]
