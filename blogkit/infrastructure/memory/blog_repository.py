"""In-memory BlogRepository — reference implementation for tests and demos."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

from blogkit.application.interfaces import BlogRepository
from blogkit.domain.entities import BlogPost, PaginatedResult
from blogkit.domain.exceptions import ConflictError
from blogkit.infrastructure.memory.store import InMemoryBlogStore

_SORT_KEYS: dict[str, Callable[[BlogPost], Any]] = {
    "createdat": lambda p: p.created_at,
    "updatedat": lambda p: p.updated_at,
    "title": lambda p: p.title.lower(),
    "author": lambda p: p.author.lower(),
    "viewcount": lambda p: p.view_count,
}


def _sort_key(sort_by: str | None) -> Callable[[BlogPost], Any]:
    normalized = (sort_by or "").replace("_", "").lower()
    return _SORT_KEYS.get(normalized, _SORT_KEYS["createdat"])


def _matches(
    post: BlogPost,
    author: str | None,
    tag: str | None,
    search_term: str | None,
    is_featured: bool | None,
) -> bool:
    if author and post.author.lower() != author.strip().lower():
        return False
    if is_featured is not None and post.is_featured != is_featured:
        return False
    if search_term and search_term.strip():
        term = search_term.strip().lower()
        if term not in post.title.lower() and term not in post.content.lower():
            return False
    if tag and tag.strip():
        needle = tag.strip()
        if not any(t.id == needle or t.name.lower() == needle.lower() for t in post.tags):
            return False
    return True


class InMemoryBlogRepository(BlogRepository):
    """Implements the BlogRepository port over an ``InMemoryBlogStore``.

    Every returned post is a detached copy. Single-field writes
    (view count, featured flag) run without an ``await`` between read and
    write, so they are atomic on the event loop.
    """

    def __init__(self, store: InMemoryBlogStore | None = None):
        self._store = store or InMemoryBlogStore()

    @property
    def store(self) -> InMemoryBlogStore:
        return self._store

    def _all_views(self) -> list[BlogPost]:
        views = (self._store.post_view(pid) for pid in list(self._store.posts))
        return [v for v in views if v is not None]

    def _known_tag_ids(self, post: BlogPost) -> list[str]:
        return list(dict.fromkeys(tid for tid in post.tag_ids if tid in self._store.tags))

    # ── Queries ──────────────────────────────────────────────────────

    async def get_by_id(self, post_id: str) -> BlogPost | None:
        return self._store.post_view(post_id)

    async def get_by_slug(self, slug: str) -> BlogPost | None:
        for stored in self._store.posts.values():
            if stored.slug == slug:
                return self._store.post_view(stored.id)
        return None

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
        posts = [
            p
            for p in self._all_views()
            if _matches(p, author, tag, search_term, is_featured)
        ]
        descending = (sort_order or "desc").lower() != "asc"
        posts.sort(key=_sort_key(sort_by), reverse=descending)
        return PaginatedResult.from_sequence(posts, page, page_size)

    async def get_featured_posts(self, limit: int = 5) -> list[BlogPost]:
        posts = [p for p in self._all_views() if p.is_featured]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[:limit]

    async def get_recent_posts(self, limit: int = 5) -> list[BlogPost]:
        posts = self._all_views()
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[:limit]

    async def get_posts_by_author(
        self, author: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        return await self.get_posts(page=page, page_size=page_size, author=author)

    async def get_posts_by_tag(
        self, tag_id: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        return await self.get_posts(page=page, page_size=page_size, tag=tag_id)

    async def search_posts(
        self, search_term: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        return await self.get_posts(page=page, page_size=page_size, search_term=search_term)

    def _slug_taken(self, slug: str | None, exclude_id: str | None) -> bool:
        return slug is not None and any(
            p.slug == slug and p.id != exclude_id for p in self._store.posts.values()
        )

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        return self._slug_taken(slug, exclude_id)

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, post: BlogPost) -> BlogPost:
        if self._slug_taken(post.slug, post.id):
            raise ConflictError("BlogPost", "slug", post.slug)
        self._store.posts[post.id] = replace(post, tags=[])
        self._store.post_tags[post.id] = self._known_tag_ids(post)
        return self._store.post_view(post.id)

    async def update(self, post: BlogPost) -> BlogPost | None:
        stored = self._store.posts.get(post.id)
        if stored is None:
            return None
        if self._slug_taken(post.slug, post.id):
            raise ConflictError("BlogPost", "slug", post.slug)
        stored.title = post.title
        stored.content = post.content
        stored.author = post.author
        stored.excerpt = post.excerpt
        stored.slug = post.slug
        stored.is_featured = post.is_featured
        stored.updated_at = post.updated_at
        self._store.post_tags[post.id] = self._known_tag_ids(post)
        return self._store.post_view(post.id)

    async def delete(self, post_id: str) -> bool:
        if self._store.posts.pop(post_id, None) is None:
            return False
        self._store.post_tags.pop(post_id, None)
        return True

    async def increment_view_count(self, post_id: str) -> int | None:
        stored = self._store.posts.get(post_id)
        if stored is None:
            return None
        stored.view_count += 1
        return stored.view_count

    async def set_featured(
        self, post_id: str, is_featured: bool, updated_at: datetime
    ) -> bool:
        stored = self._store.posts.get(post_id)
        if stored is None:
            return False
        stored.is_featured = is_featured
        stored.updated_at = updated_at
        return True
