"""initial_schema

Create the UndeadList core schema:
- Purchases (download entitlement counters)
- BackPage posts (weekly board, expire Monday 00:00 UTC)
- BackPage replies, votes and reports (cascade with their post)

Revision ID: 3c7e5a1d9b42
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c7e5a1d9b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "purchase_status": ("PENDING", "COMPLETED", "REFUNDED", "DISPUTED"),
    "delivery_status": ("PENDING", "DELIVERED"),
    "backpage_category": ("GENERAL", "SHOW_TELL", "LOOKING_FOR", "HELP"),
    "backpage_report_reason": ("SPAM", "HARASSMENT", "SCAM", "OFF_TOPIC", "OTHER"),
    "backpage_report_status": ("PENDING", "RESOLVED", "DISMISSED"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{v}'" for v in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # PURCHASES table
    # ========================================================================
    op.create_table(
        "purchases",
        _id_column(),
        sa.Column("buyer_id", sa.UUID(), nullable=False),
        sa.Column("seller_id", sa.UUID(), nullable=False),
        sa.Column("listing_id", sa.UUID(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "status",
            _enum("purchase_status"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column(
            "delivery_status",
            _enum("delivery_status"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_downloads", sa.Integer(), nullable=False, server_default="10"),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount >= 0", name="purchase_amount_non_negative"),
        sa.CheckConstraint("max_downloads > 0", name="purchase_max_downloads_positive"),
        sa.CheckConstraint(
            "download_count >= 0 AND download_count <= max_downloads",
            name="purchase_download_count_in_range",
        ),
    )
    op.create_index("idx_purchases_buyer_id", "purchases", ["buyer_id"])
    op.create_index("idx_purchases_listing_id", "purchases", ["listing_id"])

    # ========================================================================
    # BACKPAGE_POSTS table
    # ========================================================================
    op.create_table(
        "backpage_posts",
        _id_column(),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("category", _enum("backpage_category"), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reply_count", sa.Integer(), nullable=False, server_default="0"),
        _created_at_column(),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.UUID(), nullable=True),
        sa.Column("removal_reason", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_backpage_posts_slug"),
        sa.CheckConstraint(
            "expires_at > created_at", name="backpage_post_expires_after"
        ),
    )
    op.create_index(
        "idx_backpage_posts_created_at",
        "backpage_posts",
        [sa.text("created_at DESC")],
    )
    op.create_index("idx_backpage_posts_expires_at", "backpage_posts", ["expires_at"])
    op.create_index(
        "idx_backpage_posts_author_created",
        "backpage_posts",
        ["author_id", "created_at"],
    )

    # ========================================================================
    # BACKPAGE_REPLIES table
    # ========================================================================
    op.create_table(
        "backpage_replies",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        _created_at_column(),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(
            ["post_id"], ["backpage_posts.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_backpage_replies_post_created",
        "backpage_replies",
        ["post_id", "created_at"],
    )

    # ========================================================================
    # BACKPAGE_VOTES table (one vote per user per post)
    # ========================================================================
    op.create_table(
        "backpage_votes",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        _created_at_column(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["post_id"], ["backpage_posts.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_backpage_vote"),
        sa.CheckConstraint("value IN (1, -1)", name="backpage_vote_value"),
    )

    # ========================================================================
    # BACKPAGE_REPORTS table (one report per reporter per post)
    # ========================================================================
    op.create_table(
        "backpage_reports",
        _id_column(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("reporter_id", sa.UUID(), nullable=False),
        sa.Column("reason", _enum("backpage_report_reason"), nullable=False),
        sa.Column("details", sa.String(500), nullable=True),
        sa.Column(
            "status",
            _enum("backpage_report_status"),
            nullable=False,
            server_default="PENDING",
        ),
        _created_at_column(),
        sa.Column("resolved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("resolved_by", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(
            ["post_id"], ["backpage_posts.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "reporter_id", name="uq_backpage_report"),
    )
    op.create_index(
        "idx_backpage_reports_status_created",
        "backpage_reports",
        ["status", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("backpage_reports")
    op.drop_table("backpage_votes")
    op.drop_table("backpage_replies")
    op.drop_table("backpage_posts")
    op.drop_table("purchases")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
