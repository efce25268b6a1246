"""add reply reports and reply removal reason

Revision ID: a4d19e6c0b73
Revises: 3c7e5a1d9b42
Create Date: 2026-10-19 16:41:08.507112

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a4d19e6c0b73"
down_revision: Union[str, Sequence[str], None] = "3c7e5a1d9b42"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "backpage_replies", sa.Column("removal_reason", sa.Text(), nullable=True)
    )

    # Reports can target a reply; post_id then holds the reply's post
    op.add_column("backpage_reports", sa.Column("reply_id", sa.UUID(), nullable=True))
    op.create_foreign_key(
        "fk_backpage_reports_reply_id",
        "backpage_reports",
        "backpage_replies",
        ["reply_id"],
        ["id"],
        ondelete="CASCADE",
    )

    # The old (post_id, reporter_id) constraint would block reporting two
    # replies on the same post, so split it into partial unique indexes
    op.drop_constraint("uq_backpage_report", "backpage_reports", type_="unique")
    op.create_index(
        "uq_backpage_report_post",
        "backpage_reports",
        ["post_id", "reporter_id"],
        unique=True,
        postgresql_where=sa.text("reply_id IS NULL"),
    )
    op.create_index(
        "uq_backpage_report_reply",
        "backpage_reports",
        ["reply_id", "reporter_id"],
        unique=True,
        postgresql_where=sa.text("reply_id IS NOT NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_backpage_report_reply", table_name="backpage_reports")
    op.drop_index("uq_backpage_report_post", table_name="backpage_reports")
    op.execute("DELETE FROM backpage_reports WHERE reply_id IS NOT NULL")
    op.create_unique_constraint(
        "uq_backpage_report", "backpage_reports", ["post_id", "reporter_id"]
    )
    op.drop_constraint(
        "fk_backpage_reports_reply_id", "backpage_reports", type_="foreignkey"
    )
    op.drop_column("backpage_reports", "reply_id")
    op.drop_column("backpage_replies", "removal_reason")
