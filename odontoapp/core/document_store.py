"""Document store abstraction and its Firestore and in-memory backends.

Entities are plain JSON-like dicts addressed by collection + key. Every
backend error surfaces as ``RemoteCallException`` so callers handle one
failure type regardless of where the documents live.
"""

import copy
import uuid
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from google.cloud.firestore import AsyncClient, Query
from google.cloud.firestore_v1.base_query import FieldFilter

from odontoapp.core.exceptions import RemoteCallException

# Fixed collection names shared with the mobile client
USERS = "users"
APPOINTMENTS = "consultas"
ACTIVITIES = "atividades"
CLINICS = "clinicas"

Filter = tuple[str, str, Any]
Ordering = tuple[str, str]
Document = tuple[str, dict[str, Any]]

SUPPORTED_OPERATORS = ("==", "!=")


class DocumentNotFoundError(LookupError):
    """Raised by backends when a merge-patch targets a missing document."""


@asynccontextmanager
async def remote_call(operation: str, collection: str) -> AsyncIterator[None]:
    """Translate any backend failure into a ``RemoteCallException``."""
    try:
        yield
    except RemoteCallException:
        raise
    except DocumentNotFoundError as e:
        raise RemoteCallException(
            f"Documento não encontrado em {collection}", operation=operation
        ) from e
    except Exception as e:
        raise RemoteCallException(
            f"Falha ao acessar a coleção {collection}", operation=operation
        ) from e


def _matches(data: dict[str, Any], filters: Iterable[Filter]) -> bool:
    for field, op, value in filters:
        if field not in data:
            return False
        if op == "==" and data[field] != value:
            return False
        if op == "!=" and data[field] == value:
            return False
    return True


def apply_query(
    documents: list[Document],
    filters: Iterable[Filter] = (),
    order_by: Iterable[Ordering] = (),
    limit: int | None = None,
) -> list[Document]:
    """
    Evaluate a filtered/ordered/limited query over already-fetched documents.

    Follows Firestore semantics: a document missing a filtered or ordered
    field is excluded from the result.
    """
    filters = list(filters)
    order_by = list(order_by)

    for _, op, _ in filters:
        if op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {op}")

    result = [doc for doc in documents if _matches(doc[1], filters)]

    for field, _ in order_by:
        result = [doc for doc in result if field in doc[1]]

    # Stable sorts applied from the least significant key
    for field, direction in reversed(order_by):
        result.sort(key=lambda doc: doc[1][field], reverse=direction == "desc")

    if limit is not None:
        result = result[:limit]

    return result


class DocumentStore(ABC):
    """Remote schemaless database addressed by collection + key."""

    @abstractmethod
    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        """Read one document, ``None`` when it does not exist."""

    @abstractmethod
    async def set(
        self, collection: str, key: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        """Write a document; with ``merge`` only the given fields are upserted."""

    @abstractmethod
    async def update(self, collection: str, key: str, patch: dict[str, Any]) -> None:
        """Merge-patch an existing document."""

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a store-assigned id and return the id."""

    @abstractmethod
    async def delete(self, collection: str, key: str) -> None:
        """Delete one document."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: int | None = None,
    ) -> list[Document]:
        """Run a filtered collection query, preserving server order."""

    async def ping(self) -> bool:
        """Check whether the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release backend resources."""


class FirestoreDocumentStore(DocumentStore):
    """Documents stored in Cloud Firestore through the Admin SDK async client."""

    def __init__(self, client: AsyncClient):
        """Initialize store with an async Firestore client."""
        self.client = client

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        async with remote_call("get", collection):
            snapshot = await self.client.collection(collection).document(key).get()
        return snapshot.to_dict() if snapshot.exists else None

    async def set(
        self, collection: str, key: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        async with remote_call("set", collection):
            await self.client.collection(collection).document(key).set(data, merge=merge)

    async def update(self, collection: str, key: str, patch: dict[str, Any]) -> None:
        async with remote_call("update", collection):
            await self.client.collection(collection).document(key).update(patch)

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        async with remote_call("add", collection):
            _, reference = await self.client.collection(collection).add(data)
        return reference.id

    async def delete(self, collection: str, key: str) -> None:
        async with remote_call("delete", collection):
            await self.client.collection(collection).document(key).delete()

    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: int | None = None,
    ) -> list[Document]:
        async with remote_call("query", collection):
            query = self.client.collection(collection)
            for field, op, value in filters:
                query = query.where(filter=FieldFilter(field, op, value))
            for field, direction in order_by:
                query = query.order_by(
                    field,
                    direction=Query.DESCENDING if direction == "desc" else Query.ASCENDING,
                )
            if limit is not None:
                query = query.limit(limit)

            snapshots = await query.get()

        return [(snapshot.id, snapshot.to_dict() or {}) for snapshot in snapshots]

    async def ping(self) -> bool:
        try:
            await self.client.collection(USERS).limit(1).get()
            return True
        except Exception:
            return False


class MemoryDocumentStore(DocumentStore):
    """Process-local documents, for development without Firebase and for tests."""

    def __init__(self, initial: dict[str, dict[str, dict[str, Any]]] | None = None):
        """Initialize store, optionally seeded with ``{collection: {key: data}}``."""
        self._collections: dict[str, dict[str, dict[str, Any]]] = copy.deepcopy(initial or {})

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        data = self._collection(collection).get(key)
        return copy.deepcopy(data) if data is not None else None

    async def set(
        self, collection: str, key: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        documents = self._collection(collection)
        if merge and key in documents:
            documents[key].update(copy.deepcopy(data))
        else:
            documents[key] = copy.deepcopy(data)

    async def update(self, collection: str, key: str, patch: dict[str, Any]) -> None:
        async with remote_call("update", collection):
            documents = self._collection(collection)
            if key not in documents:
                raise DocumentNotFoundError(f"{collection}/{key}")
            documents[key].update(copy.deepcopy(patch))

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        key = uuid.uuid4().hex[:20]
        self._collection(collection)[key] = copy.deepcopy(data)
        return key

    async def delete(self, collection: str, key: str) -> None:
        self._collection(collection).pop(key, None)

    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: int | None = None,
    ) -> list[Document]:
        async with remote_call("query", collection):
            documents = [
                (key, copy.deepcopy(data)) for key, data in self._collection(collection).items()
            ]
            return apply_query(documents, filters, order_by, limit)
