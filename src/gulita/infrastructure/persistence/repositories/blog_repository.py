"""Blog repository for database operations."""

from typing import Any, Literal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gulita.infrastructure.persistence.errors import translate_connection_errors
from gulita.infrastructure.persistence.models import BlogModel

# Columns a caller may change through update()
UPDATABLE_COLUMNS = frozenset(
    {
        "title",
        "content",
        "excerpt",
        "category",
        "tags",
        "author",
        "featured_image_url",
        "status",
        "reading_time_minutes",
        "published_at",
    }
)


class BlogRepository:
    """Repository for blog database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @translate_connection_errors
    async def create(self, blog: BlogModel) -> BlogModel:
        """Insert a new blog post."""
        self.session.add(blog)
        await self.session.flush()
        return blog

    @translate_connection_errors
    async def find_by_id(self, blog_id: str) -> BlogModel | None:
        result = await self.session.execute(select(BlogModel).where(BlogModel.id == blog_id))
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def find_by_title(self, title: str) -> BlogModel | None:
        """Find a blog by title, ignoring case and surrounding whitespace.

        Args:
            title: Title to look for.

        Returns:
            The first matching blog, or None.
        """
        result = await self.session.execute(
            select(BlogModel)
            .where(func.lower(BlogModel.title) == title.strip().lower())
            .limit(1)
        )
        return result.scalar_one_or_none()

    @translate_connection_errors
    async def update(self, blog: BlogModel, changes: dict[str, Any]) -> BlogModel:
        """Apply column changes to a loaded blog.

        Args:
            blog: The blog model to modify.
            changes: Mapping of column name to new value. Keys outside the
                     updatable columns are ignored.

        Returns:
            The updated blog model.
        """
        for key, value in changes.items():
            if key in UPDATABLE_COLUMNS:
                setattr(blog, key, value)
        await self.session.flush()
        await self.session.refresh(blog)
        return blog

    @translate_connection_errors
    async def delete(self, blog_id: str) -> bool:
        """Delete a blog by ID.

        Returns:
            True if a row was deleted.
        """
        result = await self.session.execute(delete(BlogModel).where(BlogModel.id == blog_id))
        return result.rowcount > 0

    @translate_connection_errors
    async def list_published(
        self,
        page: int = 1,
        limit: int = 10,
        sort_order: Literal["asc", "desc"] = "desc",
    ) -> tuple[list[BlogModel], int]:
        """List published blogs ordered by publication date.

        Args:
            page: 1-based page number.
            limit: Page size.
            sort_order: 'asc' for oldest first, 'desc' for newest first.

        Returns:
            Tuple of (blogs on the requested page, total published blogs).
        """
        published = BlogModel.status == "published"

        total_result = await self.session.execute(
            select(func.count(BlogModel.id)).where(published)
        )
        total = total_result.scalar_one()

        order = BlogModel.published_at.asc() if sort_order == "asc" else BlogModel.published_at.desc()
        result = await self.session.execute(
            select(BlogModel)
            .where(published)
            .order_by(order, BlogModel.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total
