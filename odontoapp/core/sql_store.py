"""Document store backed by a PostgreSQL JSONB table."""

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import bindparam, delete, select, update
from sqlalchemy.dialects.postgresql import JSONB, insert
from sqlalchemy.ext.asyncio import AsyncEngine

from odontoapp.core.document_store import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    Filter,
    Ordering,
    apply_query,
    remote_call,
)
from odontoapp.database import check_database_connection
from odontoapp.models.documents import documents


class SqlDocumentStore(DocumentStore):
    """
    Documents stored as JSONB rows keyed by (collection, id).

    Merge writes use the JSONB ``||`` operator, which replaces top-level
    fields only, matching Firestore merge semantics for flat documents.
    Queries fetch the collection in insertion order and evaluate filters,
    ordering and limit in process.
    """

    def __init__(self, engine: AsyncEngine):
        """Initialize store with an async engine."""
        self.engine = engine

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        async with remote_call("get", collection):
            query = select(documents.c.data).where(
                documents.c.collection == collection, documents.c.id == key
            )
            async with self.engine.connect() as conn:
                result = await conn.execute(query)
                row = result.first()

        return dict(row.data) if row else None

    async def set(
        self, collection: str, key: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        async with remote_call("set", collection):
            statement = insert(documents).values(collection=collection, id=key, data=data)
            new_data = (
                documents.c.data.op("||")(statement.excluded.data)
                if merge
                else statement.excluded.data
            )
            statement = statement.on_conflict_do_update(
                index_elements=[documents.c.collection, documents.c.id],
                set_={"data": new_data, "updated_at": datetime.now(UTC)},
            )
            async with self.engine.begin() as conn:
                await conn.execute(statement)

    async def update(self, collection: str, key: str, patch: dict[str, Any]) -> None:
        async with remote_call("update", collection):
            statement = (
                update(documents)
                .where(documents.c.collection == collection, documents.c.id == key)
                .values(
                    data=documents.c.data.op("||")(bindparam("patch", patch, type_=JSONB)),
                    updated_at=datetime.now(UTC),
                )
            )
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)

            if result.rowcount == 0:
                raise DocumentNotFoundError(f"{collection}/{key}")

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        key = uuid.uuid4().hex[:20]
        async with remote_call("add", collection):
            async with self.engine.begin() as conn:
                await conn.execute(
                    insert(documents).values(collection=collection, id=key, data=data)
                )
        return key

    async def delete(self, collection: str, key: str) -> None:
        async with remote_call("delete", collection):
            async with self.engine.begin() as conn:
                await conn.execute(
                    delete(documents).where(
                        documents.c.collection == collection, documents.c.id == key
                    )
                )

    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: int | None = None,
    ) -> list[Document]:
        async with remote_call("query", collection):
            query = (
                select(documents.c.id, documents.c.data)
                .where(documents.c.collection == collection)
                .order_by(documents.c.created_at, documents.c.id)
            )
            async with self.engine.connect() as conn:
                result = await conn.execute(query)
                rows = result.all()

            return apply_query([(row.id, dict(row.data)) for row in rows], filters, order_by, limit)

    async def ping(self) -> bool:
        return await check_database_connection(self.engine)

    async def close(self) -> None:
        await self.engine.dispose()
