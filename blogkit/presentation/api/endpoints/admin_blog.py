"""Admin blog endpoints — every route requires an admin token."""

import json

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from blogkit.application.schemas import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    FeatureResponse,
    ReadingTimeResponse,
    SlugResponse,
    TagIdsRequest,
)
from blogkit.application.services import BlogService, TagService
from blogkit.domain.entities import BlogPost, Tag
from blogkit.domain.exceptions import NotFoundError, ValidationError
from blogkit.infrastructure.dependencies import get_blog_service, get_tag_service
from blogkit.presentation.api.security import require_admin

router = APIRouter(
    prefix="/admin/blog",
    tags=["Admin Blog"],
    dependencies=[Depends(require_admin)],
)


async def _resolve_tags(tag_ids: list[str], tags: TagService) -> list[Tag]:
    resolved: list[Tag] = []
    for tag_id in dict.fromkeys(tag_ids):
        tag = await tags.get_tag_by_id(tag_id)
        if tag is None:
            raise ValidationError("tagIds", f"Unknown tag id '{tag_id}'")
        resolved.append(tag)
    return resolved


@router.get("/generate-slug", response_model=SlugResponse)
async def generate_slug(
    title: str = "",
    exclude_id: str | None = Query(None, alias="excludeId"),
    service: BlogService = Depends(get_blog_service),
) -> SlugResponse:
    """Suggest a free slug for ``title``."""
    return SlugResponse(slug=await service.generate_slug(title, exclude_id))


@router.post("/reading-time", response_model=ReadingTimeResponse)
async def calculate_reading_time(
    request: Request,
    service: BlogService = Depends(get_blog_service),
) -> ReadingTimeResponse:
    """Estimate reading time of the raw body, or of a JSON string body."""
    raw = (await request.body()).decode("utf-8", errors="replace")
    content = raw
    if "json" in request.headers.get("content-type", ""):
        try:
            content = json.loads(raw) if raw.strip() else ""
        except json.JSONDecodeError:
            raise ValidationError("content", "Body must be a JSON string") from None
        if not isinstance(content, str):
            raise ValidationError("content", "Body must be a JSON string")

    reading_time = service.calculate_reading_time(content)
    return ReadingTimeResponse(word_count=reading_time.word_count, minutes=reading_time.minutes)


@router.get("/{post_id}", response_model=BlogPostResponse)
async def get_admin_post(
    post_id: str,
    increment_view_count: bool = Query(False, alias="incrementViewCount"),
    service: BlogService = Depends(get_blog_service),
) -> BlogPostResponse:
    post = await service.get_post_by_id(post_id, increment_view_count=increment_view_count)
    if post is None:
        raise NotFoundError("BlogPost", post_id)
    return BlogPostResponse.model_validate(post)


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: BlogPostCreate,
    request: Request,
    response: Response,
    service: BlogService = Depends(get_blog_service),
    tags: TagService = Depends(get_tag_service),
) -> BlogPostResponse:
    """Create a post; ``Location`` points at the public read route."""
    post = BlogPost(
        title=data.title,
        content=data.content,
        author=data.author,
        excerpt=data.excerpt,
        slug=data.slug,
        tags=await _resolve_tags(data.tag_ids, tags),
        is_featured=data.is_featured,
    )
    created = await service.create_post(post)
    response.headers["Location"] = str(request.url_for("get_post", post_id=created.id))
    return BlogPostResponse.model_validate(created)


@router.put("/{post_id}", response_model=BlogPostResponse)
async def update_post(
    post_id: str,
    data: BlogPostUpdate,
    service: BlogService = Depends(get_blog_service),
    tags: TagService = Depends(get_tag_service),
) -> BlogPostResponse:
    if data.id != post_id:
        raise ValidationError("id", "Route id and body id do not match")

    post = BlogPost(
        id=post_id,
        title=data.title,
        content=data.content,
        author=data.author,
        excerpt=data.excerpt,
        slug=data.slug,
        tags=await _resolve_tags(data.tag_ids, tags),
        is_featured=data.is_featured,
    )
    updated = await service.update_post(post)
    return BlogPostResponse.model_validate(updated)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    service: BlogService = Depends(get_blog_service),
) -> None:
    if not await service.delete_post(post_id):
        raise NotFoundError("BlogPost", post_id)


@router.post("/{post_id}/feature", response_model=FeatureResponse)
async def set_featured(
    post_id: str,
    is_featured: bool = Body(...),
    service: BlogService = Depends(get_blog_service),
) -> FeatureResponse:
    """Feature or unfeature a post; the body is a bare JSON boolean."""
    if not await service.set_featured(post_id, is_featured):
        raise NotFoundError("BlogPost", post_id)
    state = "featured" if is_featured else "unfeatured"
    return FeatureResponse(message=f"Post {state} successfully")


@router.post("/{post_id}/tags", status_code=status.HTTP_204_NO_CONTENT)
async def add_tags(
    post_id: str,
    data: TagIdsRequest,
    tags: TagService = Depends(get_tag_service),
) -> None:
    await _resolve_tags(data.tag_ids, tags)
    if not await tags.add_tags_to_post(post_id, data.tag_ids):
        raise NotFoundError("BlogPost", post_id)


@router.post("/{post_id}/tags/remove", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tags(
    post_id: str,
    data: TagIdsRequest,
    tags: TagService = Depends(get_tag_service),
) -> None:
    if not await tags.remove_tags_from_post(post_id, data.tag_ids):
        raise NotFoundError("BlogPost", post_id)
