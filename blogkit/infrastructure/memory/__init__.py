from .blog_repository import InMemoryBlogRepository
from .store import InMemoryBlogStore
from .tag_repository import InMemoryTagRepository

__all__ = [
    "InMemoryBlogRepository",
    "InMemoryBlogStore",
    "InMemoryTagRepository",
]
