# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

Tables created:
- users: OAuth-backed community members
- forum_posts, blog_posts, wiki_guides, dex_monsters: content modules
- forum_replies: thread replies
- user_interactions: the interaction ledger

Enums are stored as VARCHAR(20) (native_enum=False), so no CREATE TYPE.
Each content table gets a partial unique index on slug over live rows only,
which frees a deleted item's slug for reuse.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


CONTENT_TABLES = ("forum_posts", "blog_posts", "wiki_guides", "dex_monsters")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _soft_delete() -> list[sa.Column]:
    return [
        sa.Column("is_deleted", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("slug", sa.String(220), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.String(500), nullable=True),
        sa.Column("meta_description", sa.String(160), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_name", sa.String(100), nullable=False),
        sa.Column("author_avatar", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="published"),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("bookmarks_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("shares_count", sa.Integer(), nullable=False, server_default="0"),
        *_soft_delete(),
        *_timestamps(),
    ]


def _content_indexes(table: str) -> None:
    op.create_index(
        f"uq_{table}_slug_active",
        table,
        ["slug"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )
    op.create_index(f"ix_{table}_listing", table, ["is_deleted", "status", "created_at"])
    op.create_index(f"ix_{table}_category", table, ["category"])
    op.create_index(f"ix_{table}_author_id", table, ["author_id"])


def upgrade() -> None:
    """Upgrade database schema."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_account_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("provider", "provider_account_id", name="uq_users_provider_account"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # Content tables
    op.create_table(
        "forum_posts",
        *_content_columns(),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_reply_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "blog_posts",
        *_content_columns(),
        sa.Column("featured_image", sa.String(500), nullable=True),
    )
    op.create_table(
        "wiki_guides",
        *_content_columns(),
        sa.Column("difficulty", sa.String(20), nullable=False, server_default="beginner"),
        sa.Column("helpfuls_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "dex_monsters",
        *_content_columns(),
        sa.Column("model_path", sa.String(500), nullable=True),
        sa.Column("behaviors", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("drops", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("spawning", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("health", sa.Float(), nullable=False, server_default="0"),
        sa.Column("damage", sa.Float(), nullable=False, server_default="0"),
        sa.Column("speed", sa.Float(), nullable=False, server_default="0"),
        sa.Column("xp_drop", sa.Integer(), nullable=False, server_default="0"),
    )
    for table in CONTENT_TABLES:
        _content_indexes(table)

    # Create forum_replies table
    op.create_table(
        "forum_replies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("forum_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "reply_to_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("forum_replies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_name", sa.String(100), nullable=False),
        sa.Column("author_avatar", sa.String(500), nullable=True),
        *_soft_delete(),
        *_timestamps(),
    )
    op.create_index("ix_forum_replies_thread", "forum_replies", ["post_id", "is_deleted", "created_at"])
    op.create_index("ix_forum_replies_author_id", "forum_replies", ["author_id"])

    # Create user_interactions table
    op.create_table(
        "user_interactions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content_type", sa.String(20), nullable=False),
        sa.Column("content_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "user_id",
            "content_type",
            "content_id",
            "action",
            name="uq_user_interactions_user_content_action",
        ),
    )
    op.create_index(
        "ix_user_interactions_content", "user_interactions", ["content_type", "content_id"]
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("user_interactions")
    op.drop_table("forum_replies")
    for table in reversed(CONTENT_TABLES):
        op.drop_table(table)
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
