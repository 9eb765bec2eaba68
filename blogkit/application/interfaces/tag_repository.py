"""Abstract repository interface (port) for Tag persistence."""

from abc import ABC, abstractmethod

from blogkit.domain.entities import PaginatedResult, Tag


class TagRepository(ABC):
    """Port for tag persistence and the post/tag association.

    Names are compared case-insensitively. Association writes follow set
    semantics: adding an existing pair or removing a missing one is a no-op.
    """

    @abstractmethod
    async def get_by_id(self, tag_id: str) -> Tag | None:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Tag | None:
        ...

    @abstractmethod
    async def get_tags_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        search_term: str | None = None,
    ) -> PaginatedResult[Tag]:
        """Retrieve a page of tags ordered by name, filtered by name substring."""
        ...

    @abstractmethod
    async def create(self, tag: Tag) -> Tag:
        ...

    @abstractmethod
    async def update(self, tag: Tag) -> Tag | None:
        """Overwrite name, color and updated_at. None if the tag does not exist."""
        ...

    @abstractmethod
    async def delete(self, tag_id: str) -> bool:
        """Delete a tag and its associations. False if not found."""
        ...

    @abstractmethod
    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        ...

    @abstractmethod
    async def id_exists(self, tag_id: str) -> bool:
        ...

    @abstractmethod
    async def get_tags_with_post_count(self) -> list[Tag]:
        """Retrieve every tag with ``post_count`` populated, ordered by name."""
        ...

    @abstractmethod
    async def update_post_count(self, tag_id: str) -> bool:
        """Recompute the stored post count of a tag. False if not found."""
        ...

    @abstractmethod
    async def get_tags_by_post(self, post_id: str) -> list[Tag]:
        """Retrieve the tags of a post in association order."""
        ...

    @abstractmethod
    async def add_tags_to_post(self, post_id: str, tag_ids: list[str]) -> bool:
        """Associate tags with a post.

        Returns False, changing nothing, when the post or any tag is unknown.
        """
        ...

    @abstractmethod
    async def remove_tags_from_post(self, post_id: str, tag_ids: list[str]) -> bool:
        """Dissociate tags from a post. False only when the post is unknown."""
        ...
