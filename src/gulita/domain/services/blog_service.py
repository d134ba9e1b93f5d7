"""Blog service.

Business rules for creating, editing, deleting and listing blog posts.
"""

import math
from dataclasses import dataclass
from typing import Any

from gulita.core.exceptions import (
    BlogNotFoundError,
    DuplicateBlogTitleError,
    InvalidCategoryError,
    ValidationError,
)
from gulita.core.logging import get_logger
from gulita.domain.entities.blog import BLOG_CATEGORIES, BLOG_STATUSES
from gulita.domain.services.blog_text import clean_tags, generate_excerpt, reading_time_minutes
from gulita.infrastructure.persistence.database import SessionScope
from gulita.infrastructure.persistence.models import BlogModel
from gulita.infrastructure.persistence.repositories import BlogRepository
from gulita.infrastructure.persistence.types import utcnow

logger = get_logger(__name__)

REQUIRED_FIELDS = ("title", "content", "category", "author")
MAX_PAGE_SIZE = 100
NON_NULLABLE_FIELDS = frozenset({"title", "content", "category", "author", "status"})


@dataclass(frozen=True)
class BlogPage:
    """One page of published blogs."""

    blogs: list[BlogModel]
    current_page: int
    limit: int
    total_pages: int
    total_blogs: int


class BlogService:
    """Service for blog post management."""

    def __init__(self, session_scope: SessionScope) -> None:
        self._session_scope = session_scope

    async def create_blog(self, data: dict[str, Any]) -> BlogModel:
        """Create a blog post.

        Missing reading time and excerpt are derived from the content. The
        status defaults to ``published``, and a published post without a
        date is stamped with the current time.

        Args:
            data: Blog fields. ``title``, ``content``, ``category`` and
                  ``author`` are required.

        Returns:
            The created blog.

        Raises:
            ValidationError: If a required field is missing or the status is unknown.
            DuplicateBlogTitleError: If another blog has the same title (ignoring case).
            InvalidCategoryError: If the category is not recognised.
        """
        missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
        if missing:
            raise ValidationError(details=f"Missing required fields: {', '.join(missing)}")

        title = data["title"].strip()
        content = data["content"]
        status = data.get("status") or "published"
        if status not in BLOG_STATUSES:
            raise ValidationError(details=f"status must be one of: {', '.join(BLOG_STATUSES)}")

        async with self._session_scope() as session:
            repo = BlogRepository(session)

            if await repo.find_by_title(title) is not None:
                raise DuplicateBlogTitleError()
            if data["category"] not in BLOG_CATEGORIES:
                raise InvalidCategoryError()

            published_at = data.get("published_at")
            if status == "published" and published_at is None:
                published_at = utcnow()

            blog = BlogModel(
                title=title,
                content=content,
                excerpt=data.get("excerpt") or generate_excerpt(content),
                category=data["category"],
                tags=clean_tags(data.get("tags")),
                author=data["author"],
                featured_image_url=data.get("featured_image_url"),
                status=status,
                reading_time_minutes=data.get("reading_time_minutes") or reading_time_minutes(content),
                published_at=published_at,
            )
            await repo.create(blog)
            await session.commit()

        logger.info("Blog created", blog_id=blog.id, category=blog.category, status=status)
        return blog

    async def get_blog(self, blog_id: str) -> BlogModel:
        """Get a blog post by ID.

        Raises:
            BlogNotFoundError: If no blog has this ID.
        """
        if not blog_id or not blog_id.strip():
            raise BlogNotFoundError()

        async with self._session_scope() as session:
            blog = await BlogRepository(session).find_by_id(blog_id.strip())

        if blog is None:
            raise BlogNotFoundError()
        return blog

    async def update_blog(self, blog_id: str, changes: dict[str, Any]) -> BlogModel:
        """Apply a partial update to a blog post.

        Only keys present in ``changes`` are touched. A content change
        recomputes reading time and excerpt unless those are supplied too.
        Publishing a never-published post stamps ``published_at``; moving to a
        non-published status clears it unless a date is given explicitly.

        Args:
            blog_id: Blog to update.
            changes: Fields to change.

        Returns:
            The updated blog, or the unchanged blog when ``changes`` is empty.

        Raises:
            BlogNotFoundError: If no blog has this ID.
            DuplicateBlogTitleError: If another blog already uses the new title.
            InvalidCategoryError: If the new category is not recognised.
            ValidationError: If the new status is unknown.
        """
        if not blog_id or not blog_id.strip():
            raise BlogNotFoundError()
        blog_id = blog_id.strip()
        changes = {
            key: value
            for key, value in changes.items()
            if value is not None or key not in NON_NULLABLE_FIELDS
        }

        async with self._session_scope() as session:
            repo = BlogRepository(session)
            blog = await repo.find_by_id(blog_id)
            if blog is None:
                raise BlogNotFoundError()
            if not changes:
                return blog

            if changes.get("title"):
                title = changes["title"].strip()
                changes["title"] = title
                if title != blog.title:
                    other = await repo.find_by_title(title)
                    if other is not None and other.id != blog_id:
                        raise DuplicateBlogTitleError()

            if "category" in changes and changes["category"] not in BLOG_CATEGORIES:
                raise InvalidCategoryError()

            if changes.get("content") is not None:
                content = changes["content"]
                if changes.get("reading_time_minutes") is None:
                    changes["reading_time_minutes"] = reading_time_minutes(content)
                if changes.get("excerpt") is None:
                    changes["excerpt"] = generate_excerpt(content)

            new_status = changes.get("status") or blog.status
            if new_status not in BLOG_STATUSES:
                raise ValidationError(details=f"status must be one of: {', '.join(BLOG_STATUSES)}")
            if new_status == "published":
                if changes.get("published_at") is None:
                    changes.pop("published_at", None)
                    if blog.published_at is None:
                        changes["published_at"] = utcnow()
            elif "published_at" not in changes:
                changes["published_at"] = None

            if "tags" in changes:
                changes["tags"] = clean_tags(changes["tags"])

            blog = await repo.update(blog, changes)
            await session.commit()

        logger.info("Blog updated", blog_id=blog_id, fields=sorted(changes))
        return blog

    async def delete_blog(self, blog_id: str) -> None:
        """Delete a blog post.

        Raises:
            BlogNotFoundError: If no blog has this ID.
        """
        if not blog_id or not blog_id.strip():
            raise BlogNotFoundError()

        async with self._session_scope() as session:
            deleted = await BlogRepository(session).delete(blog_id.strip())
            if not deleted:
                raise BlogNotFoundError()
            await session.commit()

        logger.info("Blog deleted", blog_id=blog_id)

    async def list_blogs(self, page: int = 1, limit: int = 10, sort_order: str = "desc") -> BlogPage:
        """List published blogs, paginated by publication date.

        Args:
            page: 1-based page number.
            limit: Page size between 1 and 100.
            sort_order: 'asc' or 'desc'.

        Raises:
            ValidationError: If the paging parameters are out of range.
        """
        if page < 1:
            raise ValidationError(details="page must be at least 1")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(details=f"limit must be between 1 and {MAX_PAGE_SIZE}")
        if sort_order not in ("asc", "desc"):
            raise ValidationError(details="sort_order must be 'asc' or 'desc'")

        async with self._session_scope() as session:
            blogs, total = await BlogRepository(session).list_published(page, limit, sort_order)

        return BlogPage(
            blogs=blogs,
            current_page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
            total_blogs=total,
        )
