"""Application service (use case) for Tag operations."""

import logging
from datetime import datetime, timezone

from blogkit.application.interfaces import TagRepository
from blogkit.domain.entities import PaginatedResult, Tag
from blogkit.domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TagService:
    """Orchestrates tag business logic. Depends on the repository port (DI).

    Adds the rules the repository does not own: required fields, name
    uniqueness (case-insensitive) and timestamp management.
    """

    def __init__(self, repository: TagRepository):
        self._repository = repository

    # ── Read operations ──────────────────────────────────────────────

    async def get_tags_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        search_term: str | None = None,
    ) -> PaginatedResult[Tag]:
        return await self._repository.get_tags_paginated(
            page=page, page_size=page_size, search_term=search_term
        )

    async def get_tag_by_id(self, tag_id: str) -> Tag | None:
        if _is_blank(tag_id):
            return None
        return await self._repository.get_by_id(tag_id)

    async def get_tag_by_name(self, name: str) -> Tag | None:
        if _is_blank(name):
            return None
        return await self._repository.get_by_name(name.strip())

    async def tag_exists(self, tag_id: str) -> bool:
        if _is_blank(tag_id):
            return False
        return await self._repository.id_exists(tag_id)

    async def tag_name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        if _is_blank(name):
            return False
        return await self._repository.name_exists(name.strip(), exclude_id)

    async def get_tags_with_post_count(self) -> list[Tag]:
        return await self._repository.get_tags_with_post_count()

    async def get_popular_tags(self, limit: int = 10) -> list[Tag]:
        """Most used tags first; ties broken by name."""
        tags = await self._repository.get_tags_with_post_count()
        tags.sort(key=lambda t: (-t.post_count, t.name.lower()))
        return tags[: max(limit, 0)]

    async def get_tags_by_post(self, post_id: str) -> list[Tag]:
        if _is_blank(post_id):
            return []
        return await self._repository.get_tags_by_post(post_id)

    # ── Write operations ─────────────────────────────────────────────

    async def create_tag(self, tag: Tag) -> Tag:
        if _is_blank(tag.name):
            raise ValidationError("name", "Tag name is required")
        tag.name = tag.name.strip()

        if await self._repository.name_exists(tag.name):
            logger.info("Rejected duplicate tag name '%s'", tag.name)
            raise ConflictError("Tag", "name", tag.name)

        now = datetime.now(timezone.utc)
        tag.created_at = now
        tag.updated_at = now

        created = await self._repository.create(tag)
        logger.info("Created tag '%s' (%s)", created.name, created.id)
        return created

    async def update_tag(self, tag: Tag) -> Tag:
        if _is_blank(tag.id):
            raise ValidationError("id", "Tag ID is required")
        if _is_blank(tag.name):
            raise ValidationError("name", "Tag name is required")
        tag.name = tag.name.strip()

        if not await self._repository.id_exists(tag.id):
            raise NotFoundError("Tag", tag.id)

        if await self._repository.name_exists(tag.name, tag.id):
            logger.info("Rejected rename of tag %s to taken name '%s'", tag.id, tag.name)
            raise ConflictError("Tag", "name", tag.name)

        tag.touch()
        updated = await self._repository.update(tag)
        if updated is None:
            raise NotFoundError("Tag", tag.id)
        logger.info("Updated tag '%s' (%s)", updated.name, updated.id)
        return updated

    async def delete_tag(self, tag_id: str) -> bool:
        if _is_blank(tag_id):
            return False
        deleted = await self._repository.delete(tag_id)
        if deleted:
            logger.info("Deleted tag %s", tag_id)
        return deleted

    # ── Post association ─────────────────────────────────────────────

    async def add_tags_to_post(self, post_id: str, tag_ids: list[str]) -> bool:
        if _is_blank(post_id):
            return False
        return await self._repository.add_tags_to_post(post_id, _unique(tag_ids))

    async def remove_tags_from_post(self, post_id: str, tag_ids: list[str]) -> bool:
        if _is_blank(post_id):
            return False
        return await self._repository.remove_tags_from_post(post_id, _unique(tag_ids))


def _unique(ids: list[str]) -> list[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(i for i in ids if i and i.strip()))
