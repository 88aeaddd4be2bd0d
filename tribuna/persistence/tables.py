"""SQLAlchemy table definitions for Tribuna comment threads.

Posts and users live in the surrounding publishing system; only their ids
are stored here. The definitions match the schema in the Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

REPORT_REASONS = (
    "spam",
    "harassment",
    "hate_speech",
    "misinformation",
    "inappropriate",
    "copyright",
    "other",
)
REPORT_STATUSES = ("pending", "resolved", "dismissed")

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("post_id", UUID(as_uuid=True), nullable=False),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    # Single self reference; threads of any depth are rebuilt in memory
    Column(
        "parent_comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_comment_id", comments_table.c.parent_comment_id)
Index("idx_comments_created_at", comments_table.c.created_at)

# ============================================================================
# COMMENT LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID(as_uuid=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_comment_like"),
)

Index("idx_comment_likes_comment_id", comment_likes_table.c.comment_id)

# ============================================================================
# COMMENT REPORTS TABLE
# ============================================================================
comment_reports_table = Table(
    "comment_reports",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("reporter_id", UUID(as_uuid=True), nullable=False),
    Column(
        "reason",
        postgresql.ENUM(*REPORT_REASONS, name="report_reason", create_type=False),
        nullable=False,
    ),
    Column("description", Text, nullable=True),
    Column(
        "status",
        postgresql.ENUM(*REPORT_STATUSES, name="report_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("reviewed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("reviewed_by", UUID(as_uuid=True), nullable=True),
)

Index("idx_comment_reports_status", comment_reports_table.c.status)
Index(
    "idx_comment_reports_comment_reporter",
    comment_reports_table.c.comment_id,
    comment_reports_table.c.reporter_id,
)
