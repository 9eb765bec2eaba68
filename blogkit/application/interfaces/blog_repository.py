"""Abstract repository interface (port) for BlogPost persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from blogkit.domain.entities import BlogPost, PaginatedResult


class BlogRepository(ABC):
    """Port for blog post persistence — implemented in the infrastructure layer.

    Query contract shared by every implementation:

    * ``search_term`` is a case-insensitive substring match on title or content.
    * ``author`` is a case-insensitive equality match.
    * ``tag`` matches a tag id or a tag name (case-insensitive).
    * ``is_featured=None`` disables the featured filter.
    * ``sort_by`` accepts createdAt, updatedAt, title, author and viewCount in
      camel or snake case; anything else sorts by createdAt.
    """

    @abstractmethod
    async def get_by_id(self, post_id: str) -> BlogPost | None:
        """Retrieve a single post by its ID."""
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> BlogPost | None:
        """Retrieve a single post by its slug."""
        ...

    @abstractmethod
    async def get_posts(
        self,
        page: int = 1,
        page_size: int = 10,
        author: str | None = None,
        tag: str | None = None,
        search_term: str | None = None,
        is_featured: bool | None = None,
        sort_by: str | None = "createdAt",
        sort_order: str | None = "desc",
    ) -> PaginatedResult[BlogPost]:
        """Retrieve a filtered, sorted page of posts."""
        ...

    @abstractmethod
    async def get_featured_posts(self, limit: int = 5) -> list[BlogPost]:
        """Retrieve featured posts, newest first."""
        ...

    @abstractmethod
    async def get_recent_posts(self, limit: int = 5) -> list[BlogPost]:
        """Retrieve the most recently created posts."""
        ...

    @abstractmethod
    async def get_posts_by_author(
        self, author: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        ...

    @abstractmethod
    async def get_posts_by_tag(
        self, tag_id: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        ...

    @abstractmethod
    async def search_posts(
        self, search_term: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        ...

    @abstractmethod
    async def create(self, post: BlogPost) -> BlogPost:
        """Persist a new post (and its tag associations) and return it."""
        ...

    @abstractmethod
    async def update(self, post: BlogPost) -> BlogPost | None:
        """Overwrite the mutable fields of an existing post.

        ``created_at`` and ``view_count`` are never written. Returns None when
        the post does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, post_id: str) -> bool:
        """Delete a post. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def increment_view_count(self, post_id: str) -> int | None:
        """Atomically add one to the view count and return the new value.

        Returns None when the post does not exist.
        """
        ...

    @abstractmethod
    async def set_featured(
        self, post_id: str, is_featured: bool, updated_at: datetime
    ) -> bool:
        """Patch only the featured flag and updated_at. False if not found."""
        ...

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether a slug is taken by a post other than ``exclude_id``."""
        ...
