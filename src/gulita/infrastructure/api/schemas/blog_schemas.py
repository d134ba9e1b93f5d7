"""Pydantic schemas for blog endpoints."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints

BlogStatus = Literal["draft", "published", "archived"]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]

URL_PATTERN = r"^https?://\S+$"


class BlogCreateRequest(BaseModel):
    """Request body for creating a blog post."""

    title: str = Field(..., min_length=3, max_length=255)
    content: str = Field(..., min_length=10)
    excerpt: str | None = Field(None, max_length=500)
    category: str = Field(..., description="diabetes, nutrition, lifestyle, exercise or mental-health")
    tags: list[Tag] | None = Field(None, max_length=10)
    author: str = Field(..., min_length=1, max_length=255)
    featured_image_url: str | None = Field(None, pattern=URL_PATTERN, max_length=2048)
    status: BlogStatus = "published"
    reading_time_minutes: int | None = Field(None, ge=1, le=999)
    published_at: datetime | None = None


class BlogUpdateRequest(BaseModel):
    """Request body for a partial blog update. Omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=3, max_length=255)
    content: str | None = Field(None, min_length=10)
    excerpt: str | None = Field(None, max_length=500)
    category: str | None = None
    tags: list[Tag] | None = Field(None, max_length=10)
    author: str | None = Field(None, min_length=1, max_length=255)
    featured_image_url: str | None = Field(None, pattern=URL_PATTERN, max_length=2048)
    status: BlogStatus | None = None
    reading_time_minutes: int | None = Field(None, ge=1, le=999)
    published_at: datetime | None = None


class BlogResponse(BaseModel):
    """A blog post."""

    id: str
    title: str
    content: str
    excerpt: str | None
    category: str
    tags: list[str]
    author: str
    featured_image_url: str | None
    status: str
    reading_time_minutes: int | None
    view_count: int
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogData(BaseModel):
    blog: BlogResponse


class PaginationResponse(BaseModel):
    current_page: int
    limit: int
    total_pages: int
    total_blogs: int


class BlogListData(BaseModel):
    blogs: list[BlogResponse]
    pagination: PaginationResponse
