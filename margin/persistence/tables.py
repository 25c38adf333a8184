"""SQLAlchemy table definitions.

These match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

metadata = MetaData()

# ============================================================================
# VISITS TABLE (key-value page-view log with expiry)
# ============================================================================
visits_table = Table(
    "visits",
    metadata,
    Column("key", String(255), primary_key=True),  # v:{YYYY-MM-DD}:{visit_key}
    Column("payload", JSONB, nullable=False),
    Column("recorded_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_visits_expires_at", visits_table.c.expires_at)
