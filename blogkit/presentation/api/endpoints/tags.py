"""Public tag endpoints; the mutating routes on /tag still require admin."""

from fastapi import APIRouter, Depends, Query, status

from blogkit.config import Settings
from blogkit.application.schemas import PaginatedResponse, TagResponse
from blogkit.application.services import TagService
from blogkit.domain.entities import Tag
from blogkit.domain.exceptions import NotFoundError
from blogkit.infrastructure.dependencies import get_app_settings, get_tag_service
from blogkit.presentation.api.endpoints import admin_tags
from blogkit.presentation.api.security import require_admin

router = APIRouter(prefix="/tag", tags=["Tags"])


def _to_response(tag: Tag) -> TagResponse:
    return TagResponse.model_validate(tag)


@router.get("", response_model=list[TagResponse])
async def list_tags(
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    return [_to_response(t) for t in await service.get_tags_with_post_count()]


@router.get("/paginated", response_model=PaginatedResponse[TagResponse])
async def list_tags_paginated(
    page: int = 1,
    page_size: int | None = Query(None, alias="pageSize"),
    search_term: str | None = Query(None, alias="searchTerm"),
    service: TagService = Depends(get_tag_service),
    settings: Settings = Depends(get_app_settings),
) -> PaginatedResponse[TagResponse]:
    if page_size is None:
        page_size = settings.default_page_size
    page_size = min(max(page_size, 1), settings.max_page_size)
    result = await service.get_tags_paginated(max(page, 1), page_size, search_term)
    return PaginatedResponse[TagResponse].from_result(result, _to_response)


@router.get("/popular", response_model=list[TagResponse])
async def list_popular_tags(
    limit: int = 10,
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    """Most used tags first."""
    return [_to_response(t) for t in await service.get_popular_tags(limit)]


@router.get("/with-post-count", response_model=list[TagResponse])
async def list_tags_with_post_count(
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    return [_to_response(t) for t in await service.get_tags_with_post_count()]


@router.get("/check-name", response_model=bool)
async def check_tag_name(
    name: str = "",
    exclude_id: str | None = Query(None, alias="excludeId"),
    service: TagService = Depends(get_tag_service),
) -> bool:
    """True when another tag already uses ``name``."""
    return await service.tag_name_exists(name, exclude_id)


@router.get("/name/{name}", response_model=TagResponse)
async def get_tag_by_name(
    name: str,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.get_tag_by_name(name)
    if tag is None:
        raise NotFoundError("Tag", name)
    return _to_response(tag)


@router.get("/post/{post_id}", response_model=list[TagResponse])
async def list_tags_by_post(
    post_id: str,
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    return [_to_response(t) for t in await service.get_tags_by_post(post_id)]


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.get_tag_by_id(tag_id)
    if tag is None:
        raise NotFoundError("Tag", tag_id)
    return _to_response(tag)


# Writes reuse the admin handlers behind the same admin gate
_admin = [Depends(require_admin)]
router.add_api_route(
    "",
    admin_tags.create_tag,
    methods=["POST"],
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_admin,
    name="create_tag_public",
)
router.add_api_route(
    "/{tag_id}",
    admin_tags.update_tag,
    methods=["PUT"],
    response_model=TagResponse,
    dependencies=_admin,
    name="update_tag_public",
)
router.add_api_route(
    "/{tag_id}",
    admin_tags.delete_tag,
    methods=["DELETE"],
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=_admin,
    name="delete_tag_public",
)
