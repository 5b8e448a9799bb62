"""Local ordered mirror of a filtered remote collection.

A screen loads its collection once, renders the mirror and, after each
successful remote write, patches the mirror instead of re-querying. The
mirror is always the last successful read plus the patches applied since.
"""

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog

from odontoapp.core.document_store import Document, DocumentStore, Filter, Ordering
from odontoapp.core.exceptions import RemoteCallException

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Mapper = Callable[[str, dict[str, Any]], T]
Predicate = Callable[[T], bool]

# Raised by mappers for documents that do not fit the entry type;
# pydantic.ValidationError is a ValueError
MAPPING_ERRORS = (ValueError, TypeError, KeyError)


class FallbackPolicy(str, Enum):
    """When a mirror swaps the live result for its fallback data."""

    NEVER = "never"
    ON_EMPTY_OR_ERROR = "on_empty_or_error"


@dataclass(frozen=True)
class FallbackSource:
    """Named static documents shown when the live query yields nothing."""

    name: str
    documents: Sequence[Document]
    policy: FallbackPolicy = FallbackPolicy.ON_EMPTY_OR_ERROR


class RemoteMirroredList(Generic[T]):
    """Best-effort local copy of one filtered remote collection."""

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        mapper: Mapper[T],
        filters: Sequence[Filter] = (),
        order_by: Sequence[Ordering] = (),
        limit: int | None = None,
        fallback: FallbackSource | None = None,
        keep: Predicate[T] | None = None,
    ):
        """
        Initialize an empty mirror of ``collection`` restricted by ``filters``.

        ``keep`` drops loaded entries locally, for conditions the store
        should not evaluate itself.
        """
        self.store = store
        self.collection = collection
        self.mapper = mapper
        self.filters = list(filters)
        self.order_by = list(order_by)
        self.limit = limit
        self.fallback = fallback
        self.keep = keep

        # (key, raw data, mapped entry); data is kept to apply merge-patches
        self._entries: list[tuple[str, dict[str, Any], T]] = []
        self.loading = False
        self.loaded = False
        self.using_fallback = False

    @property
    def items(self) -> list[T]:
        """Mapped entries in mirror order."""
        return [item for _, _, item in self._entries]

    @property
    def ids(self) -> list[str]:
        return [key for key, _, _ in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __contains__(self, key: object) -> bool:
        return any(existing == key for existing, _, _ in self._entries)

    def get(self, key: str) -> T | None:
        """Mapped entry for ``key``, if mirrored."""
        index = self._index_of(key)
        if index is None:
            return None
        return self._entries[index][2]

    def clear(self) -> None:
        """Forget every entry, as before the first load."""
        self._entries = []
        self.loaded = False
        self.using_fallback = False

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    def _index_of(self, key: str) -> int | None:
        for index, (existing, _, _) in enumerate(self._entries):
            if existing == key:
                return index
        return None

    def _map(self, documents: Sequence[Document]) -> list[tuple[str, dict[str, Any], T]]:
        """
        Map every document, or none.

        Raises:
            RemoteCallException: If any document does not fit the mapper
        """
        entries = []
        for key, data in documents:
            try:
                item = self.mapper(key, dict(data))
            except MAPPING_ERRORS as e:
                logger.error(
                    "mirror_document_invalid", collection=self.collection, id=key, error=str(e)
                )
                raise RemoteCallException(
                    f"Documento inválido em {self.collection}", operation="map"
                ) from e
            if self.keep is None or self.keep(item):
                entries.append((key, dict(data), item))
        return entries

    def _applicable_fallback(self) -> FallbackSource | None:
        if self.fallback is not None and self.fallback.policy == FallbackPolicy.ON_EMPTY_OR_ERROR:
            return self.fallback
        return None

    def _use_fallback(self, fallback: FallbackSource, reason: str) -> list[T]:
        self._entries = self._map(fallback.documents)
        self.using_fallback = True
        self.loaded = True
        logger.info(
            "mirror_using_fallback",
            collection=self.collection,
            source=fallback.name,
            reason=reason,
        )
        return self.items

    async def load(self) -> list[T]:
        """
        Replace the mirror with the result of one filtered read.

        Documents are mapped before anything is replaced; a document the
        mapper rejects fails the whole read.

        Returns:
            Mapped entries in server order

        Raises:
            RemoteCallException: If the read fails and no fallback applies;
                the previous entries are kept
        """
        with self._busy():
            try:
                documents = await self.store.query(
                    self.collection,
                    filters=self.filters,
                    order_by=self.order_by,
                    limit=self.limit,
                )
                entries = self._map(documents)
            except RemoteCallException as e:
                logger.error(
                    "mirror_load_failed",
                    collection=self.collection,
                    error=str(e),
                    operation=e.operation,
                )
                fallback = self._applicable_fallback()
                if fallback is not None:
                    return self._use_fallback(fallback, reason="error")
                raise

        fallback = self._applicable_fallback()
        if not entries and fallback is not None:
            return self._use_fallback(fallback, reason="empty")

        self._entries = entries
        self.using_fallback = False
        self.loaded = True
        logger.info("mirror_loaded", collection=self.collection, count=len(entries))
        return self.items

    async def create(self, payload: dict[str, Any]) -> T:
        """
        Write a new document and append it once the store confirms.

        Raises:
            RemoteCallException: If the write fails; the mirror is unchanged
        """
        with self._busy():
            try:
                key = await self.store.add(self.collection, payload)
            except RemoteCallException as e:
                logger.error("mirror_create_failed", collection=self.collection, error=str(e))
                raise

        item = self.mapper(key, dict(payload))
        self._entries.append((key, dict(payload), item))
        logger.info("mirror_created", collection=self.collection, id=key)
        return item

    async def update(self, key: str, patch: dict[str, Any]) -> T | None:
        """
        Merge-patch a mirrored document, then apply the same patch locally.

        Returns:
            The patched entry, or None when ``key`` is not mirrored (no remote call)

        Raises:
            RemoteCallException: If the write fails; the mirror is unchanged
        """
        if self._index_of(key) is None:
            logger.info("mirror_update_skipped", collection=self.collection, id=key)
            return None

        with self._busy():
            try:
                await self.store.update(self.collection, key, patch)
            except RemoteCallException as e:
                logger.error(
                    "mirror_update_failed", collection=self.collection, id=key, error=str(e)
                )
                raise

        # Re-resolve: the entry may have moved while the write was in flight
        index = self._index_of(key)
        if index is None:
            return None
        data = {**self._entries[index][1], **patch}
        item = self.mapper(key, dict(data))
        self._entries[index] = (key, data, item)
        return item

    def remove_local(self, key: str) -> bool:
        """
        Drop an entry from the mirror only; the remote document is untouched.

        Returns:
            True if an entry was removed
        """
        index = self._index_of(key)
        if index is None:
            return False
        del self._entries[index]
        logger.info("mirror_removed_local", collection=self.collection, id=key)
        return True
