"""create_check_results_and_blogs

Revision ID: 0002_checks_blogs
Revises: 0001_users_tokens
Create Date: 2026-10-18 09:27:05.402913

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '0002_checks_blogs'
down_revision: str | Sequence[str] | None = '0001_users_tokens'
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

health_status = sa.Enum("low", "medium", "high", name="health_status")
education_level = sa.Enum("elementary", "junior", "senior", "college", name="education_level")
diabetes_risk = sa.Enum("non-diabetic", "diabetic", name="diabetes_risk")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "check_results",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("bmi", sa.Float(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("income", sa.Integer(), nullable=False),
        sa.Column("phys_hlth", health_status, nullable=False),
        sa.Column("education", education_level, nullable=False),
        sa.Column("gen_hlth", health_status, nullable=False),
        sa.Column("ment_hlth", health_status, nullable=False),
        sa.Column("diabetes_result", diabetes_risk, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("check_results", schema=None) as batch_op:
        batch_op.create_index("ix_check_results_user_id", ["user_id"], unique=False)

    op.create_table(
        "blogs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("featured_image_url", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("reading_time_minutes", sa.Integer(), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('draft', 'published', 'archived')",
            name="blogs_status_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("blogs", schema=None) as batch_op:
        batch_op.create_index("ix_blogs_category", ["category"], unique=False)
        batch_op.create_index("ix_blogs_status", ["status"], unique=False)
        batch_op.create_index("ix_blogs_published_at", ["published_at"], unique=False)
        batch_op.create_index("ix_blogs_category_status", ["category", "status"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("blogs", schema=None) as batch_op:
        batch_op.drop_index("ix_blogs_category_status")
        batch_op.drop_index("ix_blogs_published_at")
        batch_op.drop_index("ix_blogs_status")
        batch_op.drop_index("ix_blogs_category")
    op.drop_table("blogs")

    with op.batch_alter_table("check_results", schema=None) as batch_op:
        batch_op.drop_index("ix_check_results_user_id")
    op.drop_table("check_results")

    bind = op.get_bind()
    diabetes_risk.drop(bind, checkfirst=True)
    education_level.drop(bind, checkfirst=True)
    health_status.drop(bind, checkfirst=True)
