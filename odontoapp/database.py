"""Database configuration for the SQL-backed document store."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from odontoapp.config import settings
from odontoapp.models.documents import metadata


def to_async_url(database_url: str) -> str:
    """Convert a sync PostgreSQL URL to the asyncpg driver."""
    return database_url.replace("postgresql://", "postgresql+asyncpg://")


def create_document_engine(database_url: str) -> AsyncEngine:
    """Create async engine with connection pooling."""
    return create_async_engine(
        to_async_url(database_url),
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
        connect_args={
            "server_settings": {
                "application_name": settings.app_name,
            },
        },
    )


async def init_document_table(engine: AsyncEngine) -> None:
    """Create the documents table if it does not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def check_database_connection(engine: AsyncEngine) -> bool:
    """Check if database connection is healthy."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
