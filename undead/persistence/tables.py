"""SQLAlchemy table definitions for UndeadList.

They match the schema defined in Alembic migrations. Users live with the
external auth provider, so user references are plain UUID columns.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PURCHASES TABLE
# ============================================================================
purchases_table = Table(
    "purchases",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("buyer_id", UUID, nullable=False),
    Column("seller_id", UUID, nullable=False),
    Column("listing_id", UUID, nullable=False),
    Column("amount", Numeric(10, 2), nullable=False),
    Column(
        "status",
        Enum(
            "PENDING",
            "COMPLETED",
            "REFUNDED",
            "DISPUTED",
            name="purchase_status",
            create_type=False,
        ),
        nullable=False,
        server_default="PENDING",
    ),
    Column(
        "delivery_status",
        Enum("PENDING", "DELIVERED", name="delivery_status", create_type=False),
        nullable=False,
        server_default="PENDING",
    ),
    Column("download_count", Integer, nullable=False, server_default="0"),
    Column("max_downloads", Integer, nullable=False, server_default="10"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("amount >= 0", name="purchase_amount_non_negative"),
    CheckConstraint("max_downloads > 0", name="purchase_max_downloads_positive"),
    CheckConstraint(
        "download_count >= 0 AND download_count <= max_downloads",
        name="purchase_download_count_in_range",
    ),
)

Index("idx_purchases_buyer_id", purchases_table.c.buyer_id)
Index("idx_purchases_listing_id", purchases_table.c.listing_id)

# ============================================================================
# BACKPAGE POSTS TABLE
# ============================================================================
backpage_posts_table = Table(
    "backpage_posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(100), nullable=False),
    Column("author_id", UUID, nullable=False),
    Column(
        "category",
        Enum(
            "GENERAL",
            "SHOW_TELL",
            "LOOKING_FOR",
            "HELP",
            name="backpage_category",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("title", String(300), nullable=False),
    Column("body", Text, nullable=False),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_by", UUID, nullable=True),
    Column("removal_reason", Text, nullable=True),
    UniqueConstraint("slug", name="uq_backpage_posts_slug"),
    CheckConstraint("expires_at > created_at", name="backpage_post_expires_after"),
)

Index("idx_backpage_posts_created_at", backpage_posts_table.c.created_at.desc())
Index("idx_backpage_posts_expires_at", backpage_posts_table.c.expires_at)
Index(
    "idx_backpage_posts_author_created",
    backpage_posts_table.c.author_id,
    backpage_posts_table.c.created_at,
)

# ============================================================================
# BACKPAGE REPLIES TABLE
# ============================================================================
backpage_replies_table = Table(
    "backpage_replies",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "post_id",
        UUID,
        ForeignKey("backpage_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("author_id", UUID, nullable=False),
    Column("body", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_by", UUID, nullable=True),
    Column("removal_reason", Text, nullable=True),
)

Index(
    "idx_backpage_replies_post_created",
    backpage_replies_table.c.post_id,
    backpage_replies_table.c.created_at,
)

# ============================================================================
# BACKPAGE VOTES TABLE
# ============================================================================
backpage_votes_table = Table(
    "backpage_votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "post_id",
        UUID,
        ForeignKey("backpage_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_id", name="uq_backpage_vote"),
    CheckConstraint("value IN (1, -1)", name="backpage_vote_value"),
)

# ============================================================================
# BACKPAGE REPORTS TABLE
# ============================================================================
backpage_reports_table = Table(
    "backpage_reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "post_id",
        UUID,
        ForeignKey("backpage_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # Set for reports against a reply; post_id then names the reply's post
    Column(
        "reply_id",
        UUID,
        ForeignKey(
            "backpage_replies.id",
            ondelete="CASCADE",
            name="fk_backpage_reports_reply_id",
        ),
        nullable=True,
    ),
    Column("reporter_id", UUID, nullable=False),
    Column(
        "reason",
        Enum(
            "SPAM",
            "HARASSMENT",
            "SCAM",
            "OFF_TOPIC",
            "OTHER",
            name="backpage_report_reason",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("details", String(500), nullable=True),
    Column(
        "status",
        Enum(
            "PENDING",
            "RESOLVED",
            "DISMISSED",
            name="backpage_report_status",
            create_type=False,
        ),
        nullable=False,
        server_default="PENDING",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
    Column("resolved_by", UUID, nullable=True),
)

Index(
    "idx_backpage_reports_status_created",
    backpage_reports_table.c.status,
    backpage_reports_table.c.created_at.desc(),
)
# One post report per reporter, one report per reply per reporter
Index(
    "uq_backpage_report_post",
    backpage_reports_table.c.post_id,
    backpage_reports_table.c.reporter_id,
    unique=True,
    postgresql_where=backpage_reports_table.c.reply_id.is_(None),
)
Index(
    "uq_backpage_report_reply",
    backpage_reports_table.c.reply_id,
    backpage_reports_table.c.reporter_id,
    unique=True,
    postgresql_where=backpage_reports_table.c.reply_id.is_not(None),
)
