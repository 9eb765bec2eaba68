"""In-memory TagRepository — reference implementation for tests and demos."""

from dataclasses import replace

from blogkit.application.interfaces import TagRepository
from blogkit.domain.entities import PaginatedResult, Tag
from blogkit.domain.exceptions import ConflictError
from blogkit.infrastructure.memory.store import InMemoryBlogStore


class InMemoryTagRepository(TagRepository):
    """Implements the TagRepository port over an ``InMemoryBlogStore``."""

    def __init__(self, store: InMemoryBlogStore | None = None):
        self._store = store or InMemoryBlogStore()

    @property
    def store(self) -> InMemoryBlogStore:
        return self._store

    def _sorted_views(self) -> list[Tag]:
        views = [self._store.tag_view(tid) for tid in list(self._store.tags)]
        return sorted((v for v in views if v is not None), key=lambda t: t.name.lower())

    # ── Queries ──────────────────────────────────────────────────────

    async def get_by_id(self, tag_id: str) -> Tag | None:
        return self._store.tag_view(tag_id)

    async def get_by_name(self, name: str) -> Tag | None:
        needle = name.lower()
        for stored in self._store.tags.values():
            if stored.name.lower() == needle:
                return self._store.tag_view(stored.id)
        return None

    async def get_tags_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        search_term: str | None = None,
    ) -> PaginatedResult[Tag]:
        tags = self._sorted_views()
        if search_term and search_term.strip():
            term = search_term.strip().lower()
            tags = [t for t in tags if term in t.name.lower()]
        return PaginatedResult.from_sequence(tags, page, page_size)

    def _name_taken(self, name: str, exclude_id: str | None) -> bool:
        needle = name.lower()
        return any(
            t.name.lower() == needle and t.id != exclude_id
            for t in self._store.tags.values()
        )

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        return self._name_taken(name, exclude_id)

    async def id_exists(self, tag_id: str) -> bool:
        return tag_id in self._store.tags

    async def get_tags_with_post_count(self) -> list[Tag]:
        return self._sorted_views()

    async def update_post_count(self, tag_id: str) -> bool:
        # Counts are derived from the association on every read
        return tag_id in self._store.tags

    async def get_tags_by_post(self, post_id: str) -> list[Tag]:
        views = [self._store.tag_view(tid) for tid in self._store.post_tags.get(post_id, [])]
        return [v for v in views if v is not None]

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, tag: Tag) -> Tag:
        if self._name_taken(tag.name, None):
            raise ConflictError("Tag", "name", tag.name)
        self._store.tags[tag.id] = replace(tag, post_count=0)
        return self._store.tag_view(tag.id)

    async def update(self, tag: Tag) -> Tag | None:
        stored = self._store.tags.get(tag.id)
        if stored is None:
            return None
        if self._name_taken(tag.name, tag.id):
            raise ConflictError("Tag", "name", tag.name)
        stored.name = tag.name
        stored.color = tag.color
        stored.updated_at = tag.updated_at
        return self._store.tag_view(tag.id)

    async def delete(self, tag_id: str) -> bool:
        if self._store.tags.pop(tag_id, None) is None:
            return False
        for post_id, tag_ids in self._store.post_tags.items():
            if tag_id in tag_ids:
                self._store.post_tags[post_id] = [t for t in tag_ids if t != tag_id]
        return True

    async def add_tags_to_post(self, post_id: str, tag_ids: list[str]) -> bool:
        if post_id not in self._store.posts:
            return False
        if any(tid not in self._store.tags for tid in tag_ids):
            return False
        current = self._store.post_tags.setdefault(post_id, [])
        for tid in tag_ids:
            if tid not in current:
                current.append(tid)
        return True

    async def remove_tags_from_post(self, post_id: str, tag_ids: list[str]) -> bool:
        if post_id not in self._store.posts:
            return False
        removed = set(tag_ids)
        current = self._store.post_tags.get(post_id, [])
        self._store.post_tags[post_id] = [t for t in current if t not in removed]
        return True
