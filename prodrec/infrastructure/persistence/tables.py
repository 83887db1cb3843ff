"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# RECORDS TABLE
# ============================================================================
records_table = Table(
    "records",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("record_code", String(100), nullable=False),
    Column("shop_code", String(50), nullable=False),
    Column("current_version", Integer, nullable=False, default=1),
    Column("status", String(16), nullable=False),  # RecordStatus as string
    Column("description", Text, nullable=True),
    Column("finalized_at", DateTime(timezone=True), nullable=True),
    Column("finalized_by", String(255), nullable=True),
    Column("finalization_notes", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("record_code", name="uq_records_record_code"),
)

Index("idx_records_shop_code", records_table.c.shop_code)
Index("idx_records_status", records_table.c.status)
Index("idx_records_created_at", records_table.c.created_at)


# ============================================================================
# FILE REVISIONS TABLE
# ============================================================================
file_revisions_table = Table(
    "file_revisions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "record_id",
        String(36),
        ForeignKey("records.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("version", Integer, nullable=False),
    Column("filename", String(255), nullable=False),
    Column("storage_path", String(512), nullable=False),
    Column("file_size_bytes", Integer, nullable=False),
    Column("mime_type", String(100), nullable=False),
    Column("extension", String(20), nullable=False),
    Column("content_hash", String(64), nullable=False),
    Column("notes", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint(
        "record_id",
        "version",
        "filename",
        name="uq_file_revisions_record_version_filename",
    ),
)

Index(
    "idx_file_revisions_record_version",
    file_revisions_table.c.record_id,
    file_revisions_table.c.version,
)
