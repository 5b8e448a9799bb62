"""Document table definition using SQLAlchemy Core."""

from sqlalchemy import Column, DateTime, Index, MetaData, String, Table, text
from sqlalchemy.dialects.postgresql import JSONB

metadata = MetaData()

documents = Table(
    "documents",
    metadata,
    # Collection + key address one document, like a Firestore path
    Column("collection", String(100), primary_key=True),
    Column("id", String(64), primary_key=True),
    Column("data", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
    Index("idx_documents_collection_created", "collection", "created_at"),
)
