"""Concrete TagRepository backed by SQLAlchemy."""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blogkit.application.interfaces import TagRepository
from blogkit.domain.entities import PaginatedResult, Tag
from blogkit.domain.exceptions import ConflictError
from blogkit.infrastructure.database.models import BlogPostModel, PostTagModel, TagModel
from blogkit.infrastructure.database.repositories.mapping import (
    like_pattern,
    post_counts_subquery,
    tag_to_entity,
)


class SQLAlchemyTagRepository(TagRepository):
    """Implements the TagRepository port using SQLAlchemy async sessions.

    Post counts are computed from ``post_tags`` at read time.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _with_counts(self):
        counts = post_counts_subquery()
        return select(TagModel, func.coalesce(counts.c.n, 0)).outerjoin(
            counts, counts.c.tag_id == TagModel.id
        )

    async def _fetch(self, stmt) -> list[Tag]:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [tag_to_entity(model, count) for model, count in result.all()]

    async def _fetch_one(self, stmt) -> Tag | None:
        tags = await self._fetch(stmt.limit(1))
        return tags[0] if tags else None

    # ── Queries ──────────────────────────────────────────────────────

    async def get_by_id(self, tag_id: str) -> Tag | None:
        return await self._fetch_one(self._with_counts().where(TagModel.id == tag_id))

    async def get_by_name(self, name: str) -> Tag | None:
        return await self._fetch_one(
            self._with_counts().where(func.lower(TagModel.name) == name.lower())
        )

    async def get_tags_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        search_term: str | None = None,
    ) -> PaginatedResult[Tag]:
        conditions = []
        if search_term and search_term.strip():
            pattern = like_pattern(search_term.strip())
            conditions.append(func.lower(TagModel.name).like(pattern, escape="\\"))

        async with self._session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(TagModel).where(*conditions)
            )
            stmt = (
                self._with_counts()
                .where(*conditions)
                .order_by(func.lower(TagModel.name))
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            result = await session.execute(stmt)
            items = [tag_to_entity(model, count) for model, count in result.all()]

        return PaginatedResult(
            items=items, total_count=total or 0, page=page, page_size=page_size
        )

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        stmt = select(TagModel.id).where(func.lower(TagModel.name) == name.lower())
        if exclude_id:
            stmt = stmt.where(TagModel.id != exclude_id)
        async with self._session_factory() as session:
            return (await session.scalar(stmt.limit(1))) is not None

    async def id_exists(self, tag_id: str) -> bool:
        async with self._session_factory() as session:
            return (await session.get(TagModel, tag_id)) is not None

    async def get_tags_with_post_count(self) -> list[Tag]:
        return await self._fetch(self._with_counts().order_by(func.lower(TagModel.name)))

    async def update_post_count(self, tag_id: str) -> bool:
        # Counts are derived from post_tags on every read
        return await self.id_exists(tag_id)

    async def get_tags_by_post(self, post_id: str) -> list[Tag]:
        stmt = (
            self._with_counts()
            .join(PostTagModel, PostTagModel.tag_id == TagModel.id)
            .where(PostTagModel.post_id == post_id)
            .order_by(PostTagModel.position)
        )
        return await self._fetch(stmt)

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, tag: Tag) -> Tag:
        try:
            async with self._session_factory() as session, session.begin():
                session.add(
                    TagModel(
                        id=tag.id,
                        name=tag.name,
                        color=tag.color,
                        created_at=tag.created_at,
                        updated_at=tag.updated_at,
                    )
                )
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same name
            raise ConflictError("Tag", "name", tag.name) from exc
        return await self.get_by_id(tag.id)

    async def update(self, tag: Tag) -> Tag | None:
        try:
            async with self._session_factory() as session, session.begin():
                model = await session.get(TagModel, tag.id)
                if model is None:
                    return None
                model.name = tag.name
                model.color = tag.color
                model.updated_at = tag.updated_at
        except IntegrityError as exc:
            raise ConflictError("Tag", "name", tag.name) from exc
        return await self.get_by_id(tag.id)

    async def delete(self, tag_id: str) -> bool:
        async with self._session_factory() as session, session.begin():
            await session.execute(delete(PostTagModel).where(PostTagModel.tag_id == tag_id))
            result = await session.execute(delete(TagModel).where(TagModel.id == tag_id))
            return result.rowcount > 0

    async def add_tags_to_post(self, post_id: str, tag_ids: list[str]) -> bool:
        wanted = list(dict.fromkeys(tag_ids))
        async with self._session_factory() as session, session.begin():
            if await session.get(BlogPostModel, post_id) is None:
                return False
            if wanted:
                found = await session.scalar(
                    select(func.count()).select_from(TagModel).where(TagModel.id.in_(wanted))
                )
                if found != len(wanted):
                    return False

            rows = await session.execute(
                select(PostTagModel.tag_id, PostTagModel.position).where(
                    PostTagModel.post_id == post_id
                )
            )
            existing = {tag_id: position for tag_id, position in rows.all()}
            next_position = max(existing.values(), default=-1) + 1
            for tag_id in wanted:
                if tag_id in existing:
                    continue
                session.add(PostTagModel(post_id=post_id, tag_id=tag_id, position=next_position))
                next_position += 1
        return True

    async def remove_tags_from_post(self, post_id: str, tag_ids: list[str]) -> bool:
        async with self._session_factory() as session, session.begin():
            if await session.get(BlogPostModel, post_id) is None:
                return False
            if tag_ids:
                await session.execute(
                    delete(PostTagModel).where(
                        PostTagModel.post_id == post_id,
                        PostTagModel.tag_id.in_(tag_ids),
                    )
                )
        return True
