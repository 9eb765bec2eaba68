"""Pydantic DTOs (Data Transfer Objects) for the blog post feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from .tag import TagResponse


class BlogPostCreate(BaseModel):
    """Schema for creating a new post.

    ``slug`` is generated from the title when omitted.
    """

    title: str = Field("", max_length=200, examples=["Why Rust?"])
    content: str = Field("", examples=["# Intro\n\nMemory safety without a GC."])
    excerpt: str | None = Field(None, max_length=500)
    author: str = Field("", max_length=100, examples=["Ferris"])
    slug: str | None = Field(None, max_length=100)
    tag_ids: list[str] = Field(default_factory=list, alias="tagIds")
    is_featured: bool = Field(False, alias="isFeatured")

    model_config = {"populate_by_name": True}


class BlogPostUpdate(BlogPostCreate):
    """Schema for replacing a post — ``id`` must match the route id."""

    id: str = ""


class BlogPostResponse(BaseModel):
    """Full post returned to the client."""

    id: str
    title: str
    content: str
    excerpt: str | None
    author: str
    slug: str | None
    tags: list[TagResponse]
    is_featured: bool = Field(alias="isFeatured")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    view_count: int = Field(alias="viewCount")

    model_config = {"from_attributes": True, "populate_by_name": True}


class BlogSummaryResponse(BaseModel):
    """Lightweight post representation for list views."""

    id: str
    title: str
    author: str
    tags: list[TagResponse]
    is_featured: bool = Field(alias="isFeatured")
    publish_date: datetime = Field(alias="publishDate")

    model_config = {"from_attributes": True, "populate_by_name": True}


class FeatureResponse(BaseModel):
    message: str


class SlugResponse(BaseModel):
    slug: str


class ReadingTimeResponse(BaseModel):
    word_count: int = Field(alias="wordCount")
    minutes: int

    model_config = {"from_attributes": True, "populate_by_name": True}
