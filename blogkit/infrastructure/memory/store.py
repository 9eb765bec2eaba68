"""Shared in-process state for the in-memory repositories."""

from dataclasses import dataclass, field

from blogkit.domain.entities import BlogPost, Tag


@dataclass
class InMemoryBlogStore:
    """Posts, tags and the ordered post → tag-id association.

    Both in-memory repositories share one store so that post counts and
    post tags stay consistent. Entities are stored without their derived
    fields (``BlogPost.tags`` and ``Tag.post_count``); repositories fill
    those in on every read.
    """

    posts: dict[str, BlogPost] = field(default_factory=dict)
    tags: dict[str, Tag] = field(default_factory=dict)
    post_tags: dict[str, list[str]] = field(default_factory=dict)

    def post_count(self, tag_id: str) -> int:
        return sum(1 for tag_ids in self.post_tags.values() if tag_id in tag_ids)

    def tag_view(self, tag_id: str) -> Tag | None:
        """Return a detached copy of a tag with its post count filled in."""
        stored = self.tags.get(tag_id)
        if stored is None:
            return None
        return Tag(
            id=stored.id,
            name=stored.name,
            color=stored.color,
            created_at=stored.created_at,
            updated_at=stored.updated_at,
            post_count=self.post_count(tag_id),
        )

    def post_view(self, post_id: str) -> BlogPost | None:
        """Return a detached copy of a post with its tags resolved."""
        stored = self.posts.get(post_id)
        if stored is None:
            return None
        tags = [self.tag_view(tid) for tid in self.post_tags.get(post_id, [])]
        return BlogPost(
            id=stored.id,
            title=stored.title,
            content=stored.content,
            author=stored.author,
            excerpt=stored.excerpt,
            slug=stored.slug,
            tags=[t for t in tags if t is not None],
            is_featured=stored.is_featured,
            created_at=stored.created_at,
            updated_at=stored.updated_at,
            view_count=stored.view_count,
        )
