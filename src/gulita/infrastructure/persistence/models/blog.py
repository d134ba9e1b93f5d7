"""SQLAlchemy model for blog posts."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gulita.infrastructure.persistence.database import Base
from gulita.infrastructure.persistence.types import UTCDateTime, utcnow


class BlogModel(Base):
    """Blog post shown in the public health-education feed.

    Attributes:
        id: Primary key (UUID string).
        title: Post title, unique ignoring case.
        content: Post body (may contain HTML).
        excerpt: Short summary, generated from content when not supplied.
        category: One of the fixed blog categories.
        tags: Lower-cased tag list.
        author: Author display name.
        featured_image_url: Optional cover image.
        status: draft, published or archived.
        reading_time_minutes: Estimated reading time.
        view_count: Number of times the post has been viewed.
        published_at: Publication time, null while unpublished.
    """

    __tablename__ = "blogs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    featured_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="published",
        index=True,
    )
    reading_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published', 'archived')", name="blogs_status_check"),
        Index("ix_blogs_category_status", "category", "status"),
    )

    def __repr__(self) -> str:
        return f"<BlogModel(id={self.id}, title={self.title!r}, status={self.status})>"
