"""Concrete BlogRepository backed by SQLAlchemy."""

from datetime import datetime

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from blogkit.application.interfaces import BlogRepository
from blogkit.domain.entities import BlogPost, PaginatedResult, Tag
from blogkit.domain.exceptions import ConflictError
from blogkit.infrastructure.database.models import BlogPostModel, PostTagModel, TagModel
from blogkit.infrastructure.database.repositories.mapping import (
    like_pattern,
    post_counts_subquery,
    post_to_entity,
    tag_to_entity,
)

_SORT_COLUMNS = {
    "createdat": BlogPostModel.created_at,
    "updatedat": BlogPostModel.updated_at,
    "title": func.lower(BlogPostModel.title),
    "author": func.lower(BlogPostModel.author),
    "viewcount": BlogPostModel.view_count,
}


def _sort_column(sort_by: str | None):
    normalized = (sort_by or "").replace("_", "").lower()
    return _SORT_COLUMNS.get(normalized, BlogPostModel.created_at)


def _filters(
    author: str | None,
    tag: str | None,
    search_term: str | None,
    is_featured: bool | None,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if author and author.strip():
        conditions.append(func.lower(BlogPostModel.author) == author.strip().lower())
    if is_featured is not None:
        conditions.append(BlogPostModel.is_featured == is_featured)
    if search_term and search_term.strip():
        pattern = like_pattern(search_term.strip())
        conditions.append(
            or_(
                func.lower(BlogPostModel.title).like(pattern, escape="\\"),
                func.lower(BlogPostModel.content).like(pattern, escape="\\"),
            )
        )
    if tag and tag.strip():
        needle = tag.strip()
        tagged = (
            select(PostTagModel.post_id)
            .join(TagModel, TagModel.id == PostTagModel.tag_id)
            .where(or_(TagModel.id == needle, func.lower(TagModel.name) == needle.lower()))
        )
        conditions.append(BlogPostModel.id.in_(tagged))
    return conditions


class SQLAlchemyBlogRepository(BlogRepository):
    """Implements the BlogRepository port using SQLAlchemy async sessions.

    Each call runs in its own session and transaction. View counts and the
    featured flag are changed with single UPDATE statements.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ── Helpers ──────────────────────────────────────────────────────

    async def _load_tags(self, session: AsyncSession, post_ids: list[str]) -> dict[str, list[Tag]]:
        """Resolve the ordered tags of many posts in one query."""
        if not post_ids:
            return {}
        counts = post_counts_subquery()
        stmt = (
            select(PostTagModel.post_id, TagModel, func.coalesce(counts.c.n, 0))
            .join(TagModel, TagModel.id == PostTagModel.tag_id)
            .outerjoin(counts, counts.c.tag_id == TagModel.id)
            .where(PostTagModel.post_id.in_(post_ids))
            .order_by(PostTagModel.post_id, PostTagModel.position)
        )
        result = await session.execute(stmt)
        tags: dict[str, list[Tag]] = {}
        for post_id, model, count in result.all():
            tags.setdefault(post_id, []).append(tag_to_entity(model, count))
        return tags

    async def _to_entities(
        self, session: AsyncSession, models: list[BlogPostModel]
    ) -> list[BlogPost]:
        tags = await self._load_tags(session, [m.id for m in models])
        return [post_to_entity(m, tags.get(m.id, [])) for m in models]

    async def _existing_tag_ids(self, session: AsyncSession, tag_ids: list[str]) -> list[str]:
        wanted = list(dict.fromkeys(tag_ids))
        if not wanted:
            return []
        result = await session.execute(select(TagModel.id).where(TagModel.id.in_(wanted)))
        found = set(result.scalars().all())
        return [tid for tid in wanted if tid in found]

    async def _replace_tags(self, session: AsyncSession, post: BlogPost) -> None:
        await session.execute(delete(PostTagModel).where(PostTagModel.post_id == post.id))
        tag_ids = await self._existing_tag_ids(session, post.tag_ids)
        session.add_all(
            PostTagModel(post_id=post.id, tag_id=tid, position=i)
            for i, tid in enumerate(tag_ids)
        )

    async def _page(
        self,
        conditions: list[ColumnElement[bool]],
        page: int,
        page_size: int,
        sort_by: str | None = "createdAt",
        sort_order: str | None = "desc",
    ) -> PaginatedResult[BlogPost]:
        column = _sort_column(sort_by)
        ordering = column.asc() if (sort_order or "desc").lower() == "asc" else column.desc()
        base = select(BlogPostModel).where(*conditions)

        async with self._session_factory() as session:
            total = await session.scalar(select(func.count()).select_from(base.subquery()))
            stmt = (
                base.order_by(ordering, BlogPostModel.id)
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            models = list((await session.execute(stmt)).scalars().all())
            items = await self._to_entities(session, models)

        return PaginatedResult(
            items=items, total_count=total or 0, page=page, page_size=page_size
        )

    async def _latest(self, limit: int, *conditions: ColumnElement[bool]) -> list[BlogPost]:
        stmt = (
            select(BlogPostModel)
            .where(*conditions)
            .order_by(BlogPostModel.created_at.desc(), BlogPostModel.id)
            .limit(limit)
        )
        async with self._session_factory() as session:
            models = list((await session.execute(stmt)).scalars().all())
            return await self._to_entities(session, models)

    # ── Queries ──────────────────────────────────────────────────────

    async def get_by_id(self, post_id: str) -> BlogPost | None:
        async with self._session_factory() as session:
            model = await session.get(BlogPostModel, post_id)
            if model is None:
                return None
            return (await self._to_entities(session, [model]))[0]

    async def get_by_slug(self, slug: str) -> BlogPost | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(BlogPostModel).where(BlogPostModel.slug == slug)
            )
            model = result.scalar_one_or_none()
            if model is None:
                return None
            return (await self._to_entities(session, [model]))[0]

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
        conditions = _filters(author, tag, search_term, is_featured)
        return await self._page(conditions, page, page_size, sort_by, sort_order)

    async def get_featured_posts(self, limit: int = 5) -> list[BlogPost]:
        return await self._latest(limit, BlogPostModel.is_featured.is_(True))

    async def get_recent_posts(self, limit: int = 5) -> list[BlogPost]:
        return await self._latest(limit)

    async def get_posts_by_author(
        self, author: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        return await self._page(_filters(author, None, None, None), page, page_size)

    async def get_posts_by_tag(
        self, tag_id: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        return await self._page(_filters(None, tag_id, None, None), page, page_size)

    async def search_posts(
        self, search_term: str, page: int = 1, page_size: int = 10
    ) -> PaginatedResult[BlogPost]:
        return await self._page(_filters(None, None, search_term, None), page, page_size)

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(BlogPostModel.id).where(BlogPostModel.slug == slug)
        if exclude_id:
            stmt = stmt.where(BlogPostModel.id != exclude_id)
        async with self._session_factory() as session:
            return (await session.scalar(stmt.limit(1))) is not None

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, post: BlogPost) -> BlogPost:
        try:
            async with self._session_factory() as session, session.begin():
                session.add(
                    BlogPostModel(
                        id=post.id,
                        title=post.title,
                        slug=post.slug,
                        content=post.content,
                        excerpt=post.excerpt,
                        author=post.author,
                        is_featured=post.is_featured,
                        view_count=post.view_count,
                        created_at=post.created_at,
                        updated_at=post.updated_at,
                    )
                )
                await session.flush()
                await self._replace_tags(session, post)
        except IntegrityError as exc:
            raise ConflictError("BlogPost", "slug", post.slug or "") from exc
        return await self.get_by_id(post.id)

    async def update(self, post: BlogPost) -> BlogPost | None:
        try:
            async with self._session_factory() as session, session.begin():
                model = await session.get(BlogPostModel, post.id)
                if model is None:
                    return None
                model.title = post.title
                model.slug = post.slug
                model.content = post.content
                model.excerpt = post.excerpt
                model.author = post.author
                model.is_featured = post.is_featured
                model.updated_at = post.updated_at
                await self._replace_tags(session, post)
        except IntegrityError as exc:
            raise ConflictError("BlogPost", "slug", post.slug or "") from exc
        return await self.get_by_id(post.id)

    async def delete(self, post_id: str) -> bool:
        async with self._session_factory() as session, session.begin():
            await session.execute(delete(PostTagModel).where(PostTagModel.post_id == post_id))
            result = await session.execute(
                delete(BlogPostModel).where(BlogPostModel.id == post_id)
            )
            return result.rowcount > 0

    async def increment_view_count(self, post_id: str) -> int | None:
        async with self._session_factory() as session, session.begin():
            result = await session.execute(
                update(BlogPostModel)
                .where(BlogPostModel.id == post_id)
                .values(view_count=BlogPostModel.view_count + 1)
            )
            if result.rowcount == 0:
                return None
            return await session.scalar(
                select(BlogPostModel.view_count).where(BlogPostModel.id == post_id)
            )

    async def set_featured(
        self, post_id: str, is_featured: bool, updated_at: datetime
    ) -> bool:
        async with self._session_factory() as session, session.begin():
            result = await session.execute(
                update(BlogPostModel)
                .where(BlogPostModel.id == post_id)
                .values(is_featured=is_featured, updated_at=updated_at)
            )
            return result.rowcount > 0
