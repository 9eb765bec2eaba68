"""ORM ↔ domain mapping and query fragments shared by the SQLAlchemy repositories."""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.sql.expression import Subquery

from blogkit.domain.entities import BlogPost, Tag
from blogkit.infrastructure.database.models import BlogPostModel, PostTagModel, TagModel


def as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def like_pattern(term: str) -> str:
    """Lowercased ``%term%`` with LIKE wildcards escaped (escape char ``\\``)."""
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def post_counts_subquery() -> Subquery:
    """``(tag_id, n)`` — number of posts per tag."""
    return (
        select(PostTagModel.tag_id, func.count(PostTagModel.post_id).label("n"))
        .group_by(PostTagModel.tag_id)
        .subquery()
    )


def tag_to_entity(model: TagModel, post_count: int = 0) -> Tag:
    """Map ORM model → domain entity."""
    return Tag(
        id=model.id,
        name=model.name,
        color=model.color,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
        post_count=post_count or 0,
    )


def post_to_entity(model: BlogPostModel, tags: list[Tag]) -> BlogPost:
    """Map ORM model → domain entity."""
    return BlogPost(
        id=model.id,
        title=model.title,
        content=model.content,
        author=model.author,
        excerpt=model.excerpt,
        slug=model.slug,
        tags=tags,
        is_featured=model.is_featured,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
        view_count=model.view_count,
    )
