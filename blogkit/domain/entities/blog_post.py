"""Domain entities for blog posts and their listing projection."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from .tag import Tag


@dataclass
class BlogPost:
    """Core domain entity representing a blog post.

    Content may be markdown, HTML or plain text. ``view_count`` only moves
    through the repository's atomic increment, never through ``update``.
    """

    title: str
    content: str = ""
    author: str = ""
    excerpt: str | None = None
    slug: str | None = None
    tags: list[Tag] = field(default_factory=list)
    is_featured: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    view_count: int = 0

    @property
    def tag_ids(self) -> list[str]:
        return [tag.id for tag in self.tags]

    def touch(self) -> None:
        """Refresh the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)


@dataclass
class BlogSummary:
    """Lightweight, read-only projection of a post for listing pages."""

    id: str
    title: str
    author: str
    tags: list[Tag]
    is_featured: bool
    publish_date: datetime

    @classmethod
    def from_post(cls, post: BlogPost) -> "BlogSummary":
        return cls(
            id=post.id,
            title=post.title,
            author=post.author,
            tags=list(post.tags),
            is_featured=post.is_featured,
            publish_date=post.created_at,
        )
