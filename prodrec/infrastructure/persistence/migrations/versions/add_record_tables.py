"""add_record_tables

Add records and file_revisions tables.

Revision ID: add_record_tables
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "add_record_tables"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add record tables."""
    # RECORDS TABLE
    op.create_table(
        "records",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("record_code", sa.String(100), nullable=False),
        sa.Column("shop_code", sa.String(50), nullable=False),
        sa.Column("current_version", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("finalized_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finalized_by", sa.String(255), nullable=True),
        sa.Column("finalization_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("record_code", name="uq_records_record_code"),
    )
    op.create_index("idx_records_shop_code", "records", ["shop_code"])
    op.create_index("idx_records_status", "records", ["status"])
    op.create_index("idx_records_created_at", "records", ["created_at"])

    # FILE REVISIONS TABLE
    op.create_table(
        "file_revisions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("record_id", sa.String(36), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("storage_path", sa.String(512), nullable=False),
        sa.Column("file_size_bytes", sa.Integer(), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("extension", sa.String(20), nullable=False),
        sa.Column("content_hash", sa.String(64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["record_id"], ["records.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "record_id",
            "version",
            "filename",
            name="uq_file_revisions_record_version_filename",
        ),
    )
    op.create_index(
        "idx_file_revisions_record_version", "file_revisions", ["record_id", "version"]
    )


def downgrade() -> None:
    """Drop record tables."""
    op.drop_index("idx_file_revisions_record_version", table_name="file_revisions")
    op.drop_table("file_revisions")
    op.drop_index("idx_records_created_at", table_name="records")
    op.drop_index("idx_records_status", table_name="records")
    op.drop_index("idx_records_shop_code", table_name="records")
    op.drop_table("records")
