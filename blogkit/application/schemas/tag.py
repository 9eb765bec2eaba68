"""Pydantic DTOs (Data Transfer Objects) for the Tag feature."""

from datetime import datetime

from pydantic import BaseModel, Field

_HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class TagCreate(BaseModel):
    """Schema for creating a new tag."""

    name: str = Field("", max_length=50, examples=["Go"])
    color: str | None = Field(None, pattern=_HEX_COLOR, examples=["#00ADD8"])


class TagUpdate(BaseModel):
    """Schema for updating a tag — the route id always wins over ``id``."""

    id: str | None = None
    name: str = Field("", max_length=50)
    color: str | None = Field(None, pattern=_HEX_COLOR)


class TagResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    name: str
    color: str | None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    post_count: int = Field(0, alias="postCount")

    model_config = {"from_attributes": True, "populate_by_name": True}


class TagIdsRequest(BaseModel):
    """Body for attaching tags to, or detaching them from, a post."""

    tag_ids: list[str] = Field(default_factory=list, alias="tagIds")

    model_config = {"populate_by_name": True}
