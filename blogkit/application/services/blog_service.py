"""Application service (use case) for BlogPost operations."""

import logging
from datetime import datetime, timezone

from blogkit.application.interfaces import BlogRepository
from blogkit.application.services.content_tools import (
    ReadingTime,
    estimate_reading_time,
    slugify,
    with_suffix,
)
from blogkit.domain.entities import BlogPost, PaginatedResult
from blogkit.domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_FALLBACK_SLUG = "post"


class BlogService:
    """Orchestrates blog post business logic. Depends on the repository port (DI).

    Owns timestamps, required-field checks, slug derivation and reading-time
    estimation. View counts and the featured flag are changed through the
    repository's single-field primitives, never by read-modify-write.
    """

    def __init__(
        self,
        repository: BlogRepository,
        *,
        words_per_minute: int = 200,
        slug_max_length: int = 80,
        max_page_size: int = 100,
    ):
        self._repository = repository
        self._words_per_minute = words_per_minute
        self._slug_max_length = slug_max_length
        self._max_page_size = max_page_size

    # ── Read operations ──────────────────────────────────────────────

    async def get_post_by_id(
        self, post_id: str, increment_view_count: bool = False
    ) -> BlogPost | None:
        if not post_id or not post_id.strip():
            return None
        post = await self._repository.get_by_id(post_id)
        if post is not None and increment_view_count:
            await self._count_view(post)
        return post

    async def get_post_by_slug(
        self, slug: str, increment_view_count: bool = False
    ) -> BlogPost | None:
        if not slug or not slug.strip():
            return None
        post = await self._repository.get_by_slug(slug.strip().lower())
        if post is not None and increment_view_count:
            await self._count_view(post)
        return post

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
        page, page_size = self._clamp(page, page_size)
        return await self._repository.get_posts(
            page=page,
            page_size=page_size,
            author=author,
            tag=tag,
            search_term=search_term,
            is_featured=is_featured,
            sort_by=sort_by or "createdAt",
            sort_order=sort_order or "desc",
        )

    async def get_featured_posts(self, limit: int = 5) -> list[BlogPost]:
        return await self._repository.get_featured_posts(max(limit, 0))

    async def get_recent_posts(self, limit: int = 5) -> list[BlogPost]:
        return await self._repository.get_recent_posts(max(limit, 0))

    async def get_posts_by_author(
        self, author: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        page, page_size = self._clamp(page, page_size)
        return await self._repository.get_posts_by_author(author, page, page_size)

    async def get_posts_by_tag(
        self, tag_id: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        page, page_size = self._clamp(page, page_size)
        return await self._repository.get_posts_by_tag(tag_id, page, page_size)

    async def search_posts(
        self, search_term: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        page, page_size = self._clamp(page, page_size)
        return await self._repository.search_posts(search_term, page, page_size)

    # ── Write operations ─────────────────────────────────────────────

    async def create_post(self, post: BlogPost) -> BlogPost:
        if not post.title or not post.title.strip():
            raise ValidationError("title", "Post title is required")

        requested = post.slug
        post.slug = await self._resolve_slug(requested, post.title, post.id)

        now = datetime.now(timezone.utc)
        post.created_at = now
        post.updated_at = now
        post.view_count = 0

        try:
            created = await self._repository.create(post)
        except ConflictError:
            if requested and requested.strip():
                raise
            # Another writer took the generated slug first; pick the next free one
            logger.warning("Slug '%s' was taken concurrently, regenerating", post.slug)
            post.slug = await self.generate_slug(post.title, post.id)
            created = await self._repository.create(post)
        logger.info("Created post '%s' (%s)", created.title, created.id)
        return created

    async def update_post(self, post: BlogPost) -> BlogPost:
        if not post.id or not post.id.strip():
            raise ValidationError("id", "Post ID is required")
        if not post.title or not post.title.strip():
            raise ValidationError("title", "Post title is required")

        if post.slug:
            post.slug = await self._resolve_slug(post.slug, post.title, post.id)
        else:
            # Keep the published URL stable when the caller omits the slug
            existing = await self._repository.get_by_id(post.id)
            if existing is None:
                raise NotFoundError("BlogPost", post.id)
            post.slug = existing.slug or await self.generate_slug(post.title, post.id)

        post.touch()
        updated = await self._repository.update(post)
        if updated is None:
            raise NotFoundError("BlogPost", post.id)
        logger.info("Updated post '%s' (%s)", updated.title, updated.id)
        return updated

    async def delete_post(self, post_id: str) -> bool:
        if not post_id or not post_id.strip():
            return False
        deleted = await self._repository.delete(post_id)
        if deleted:
            logger.info("Deleted post %s", post_id)
        return deleted

    async def set_featured(self, post_id: str, is_featured: bool) -> bool:
        """Feature or unfeature a post. False when the post does not exist."""
        if not post_id or not post_id.strip():
            return False
        updated = await self._repository.set_featured(
            post_id, is_featured, datetime.now(timezone.utc)
        )
        if updated:
            logger.info("Post %s %s", post_id, "featured" if is_featured else "unfeatured")
        return updated

    # ── Derived values ───────────────────────────────────────────────

    async def generate_slug(self, title: str, exclude_id: str | None = None) -> str:
        """Derive a slug from ``title`` that no other post uses.

        Collisions get a numeric suffix: ``hello-world``, ``hello-world-2``, ...
        """
        base = slugify(title or "", self._slug_max_length) or _FALLBACK_SLUG
        candidate = base
        suffix = 2
        while await self._repository.slug_exists(candidate, exclude_id):
            candidate = with_suffix(base, suffix, self._slug_max_length)
            suffix += 1
        return candidate

    def calculate_reading_time(self, content: str) -> ReadingTime:
        if not content or not content.strip():
            raise ValidationError("content", "Content is required")
        return estimate_reading_time(content, self._words_per_minute)

    # ── Helpers ──────────────────────────────────────────────────────

    async def _count_view(self, post: BlogPost) -> None:
        new_count = await self._repository.increment_view_count(post.id)
        if new_count is not None:
            post.view_count = new_count

    async def _resolve_slug(self, requested: str | None, title: str, post_id: str) -> str:
        if not requested or not requested.strip():
            return await self.generate_slug(title, post_id)

        slug = slugify(requested, self._slug_max_length)
        if not slug:
            raise ValidationError("slug", "Slug must contain at least one letter or digit")
        if await self._repository.slug_exists(slug, post_id):
            raise ConflictError("BlogPost", "slug", slug)
        return slug

    def _clamp(self, page: int, page_size: int) -> tuple[int, int]:
        return max(page, 1), min(max(page_size, 1), self._max_page_size)
