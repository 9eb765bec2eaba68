"""Admin tag endpoints — every route requires an admin token."""

from fastapi import APIRouter, Depends, Request, Response, status

from blogkit.application.schemas import TagCreate, TagResponse, TagUpdate
from blogkit.application.services import TagService
from blogkit.domain.entities import Tag
from blogkit.domain.exceptions import NotFoundError
from blogkit.infrastructure.dependencies import get_tag_service
from blogkit.presentation.api.security import require_admin

router = APIRouter(
    prefix="/admin/tags",
    tags=["Admin Tags"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[TagResponse])
async def list_tags_for_admin(
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    tags = await service.get_tags_with_post_count()
    return [TagResponse.model_validate(t) for t in tags]


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag_for_admin(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.get_tag_by_id(tag_id)
    if tag is None:
        raise NotFoundError("Tag", tag_id)
    return TagResponse.model_validate(tag)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    request: Request,
    response: Response,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    """Create a tag; the name is trimmed and must be unique (case-insensitive)."""
    created = await service.create_tag(Tag(name=data.name, color=data.color))
    response.headers["Location"] = str(request.url_for("get_tag", tag_id=created.id))
    return TagResponse.model_validate(created)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: str,
    data: TagUpdate,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    """Rename or recolor a tag. The route id wins over any body id."""
    updated = await service.update_tag(Tag(id=tag_id, name=data.name, color=data.color))
    return TagResponse.model_validate(updated)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> None:
    if not await service.delete_tag(tag_id):
        raise NotFoundError("Tag", tag_id)
