"""Public, read-only blog endpoints."""

from fastapi import APIRouter, Depends, Query

from blogkit.config import Settings
from blogkit.application.schemas import (
    BlogPostResponse,
    BlogSummaryResponse,
    PaginatedResponse,
)
from blogkit.application.services import BlogService
from blogkit.domain.entities import BlogPost, BlogSummary
from blogkit.domain.exceptions import NotFoundError
from blogkit.infrastructure.dependencies import get_app_settings, get_blog_service

router = APIRouter(prefix="/blog", tags=["Blog"])


def to_summary(post: BlogPost) -> BlogSummaryResponse:
    return BlogSummaryResponse.model_validate(BlogSummary.from_post(post))


@router.get("", response_model=PaginatedResponse[BlogSummaryResponse])
async def list_posts(
    page: int = 1,
    page_size: int | None = Query(None, alias="pageSize"),
    author: str | None = None,
    tag: str | None = None,
    search_term: str | None = Query(None, alias="searchTerm"),
    is_featured: bool | None = Query(None, alias="isFeatured"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    service: BlogService = Depends(get_blog_service),
    settings: Settings = Depends(get_app_settings),
) -> PaginatedResponse[BlogSummaryResponse]:
    """List post summaries, filtered, sorted and paginated."""
    result = await service.get_posts(
        page=page,
        page_size=settings.default_page_size if page_size is None else page_size,
        author=author,
        tag=tag,
        search_term=search_term,
        is_featured=is_featured,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return PaginatedResponse[BlogSummaryResponse].from_result(result, to_summary)


@router.get("/featured", response_model=list[BlogSummaryResponse])
async def list_featured_posts(
    limit: int = 5,
    service: BlogService = Depends(get_blog_service),
) -> list[BlogSummaryResponse]:
    posts = await service.get_featured_posts(limit)
    return [to_summary(p) for p in posts]


@router.get("/recent", response_model=list[BlogSummaryResponse])
async def list_recent_posts(
    limit: int = 5,
    service: BlogService = Depends(get_blog_service),
) -> list[BlogSummaryResponse]:
    posts = await service.get_recent_posts(limit)
    return [to_summary(p) for p in posts]


@router.get("/slug/{slug}", response_model=BlogPostResponse)
async def get_post_by_slug(
    slug: str,
    service: BlogService = Depends(get_blog_service),
) -> BlogPostResponse:
    post = await service.get_post_by_slug(slug)
    if post is None:
        raise NotFoundError("BlogPost", slug)
    return BlogPostResponse.model_validate(post)


@router.get("/{post_id}", response_model=BlogPostResponse)
async def get_post(
    post_id: str,
    service: BlogService = Depends(get_blog_service),
) -> BlogPostResponse:
    """Retrieve a single post by ID."""
    post = await service.get_post_by_id(post_id)
    if post is None:
        raise NotFoundError("BlogPost", post_id)
    return BlogPostResponse.model_validate(post)
