# file: AUZY/core/repository.py
"""
Document-store access for one Firestore collection at a time.

Services receive a repository instead of reaching for a global client, so
tests can hand them an in-memory stand-in.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from google.cloud.firestore_v1.base_query import FieldFilter

from AUZY.core.config import (
    BUSINESS_COLLECTION,
    BUSINESS_TAG_COLLECTION,
    POST_COLLECTION,
    POST_TAG_COLLECTION,
)
from AUZY.core.errors import StoreError

logger = logging.getLogger("core.repository")

Document = Tuple[str, Dict[str, Any]]

EQUALS = "=="
ARRAY_CONTAINS_ANY = "array_contains_any"


@dataclass(frozen=True)
class Filter:
    """A predicate the document store evaluates server-side."""
    field: str
    op: str
    value: Any


class CollectionRepository(Protocol):
    name: str

    async def add(self, data: Dict[str, Any]) -> str: ...

    async def set(self, doc_id: str, data: Dict[str, Any]) -> None: ...

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]: ...

    async def delete(self, doc_id: str) -> None: ...

    async def list_all(self) -> List[Document]: ...

    async def find(self, filters: Sequence[Filter]) -> List[Document]: ...


class FirestoreRepository:
    def __init__(self, db, name: str):
        self.db = db
        self.name = name

    @property
    def collection(self):
        return self.db.collection(self.name)

    async def _run(self, action: str, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except Exception as e:
            logger.exception("❌ Firestore %s failed on %s: %s", action, self.name, e)
            raise StoreError(str(e), source=StoreError.DOCUMENT, collection=self.name, action=action) from e

    # ---------------------------
    # Writes
    # ---------------------------
    async def add(self, data: Dict[str, Any]) -> str:
        def _add():
            _, ref = self.collection.add(data)
            return ref.id

        doc_id = await self._run("add", _add)
        logger.info("Added %s/%s", self.name, doc_id)
        return doc_id

    async def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        # full replace, no merge
        await self._run("set", lambda: self.collection.document(doc_id).set(data))
        logger.info("Overwrote %s/%s", self.name, doc_id)

    async def delete(self, doc_id: str) -> None:
        await self._run("delete", lambda: self.collection.document(doc_id).delete())
        logger.info("Deleted %s/%s", self.name, doc_id)

    # ---------------------------
    # Reads
    # ---------------------------
    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        def _get():
            snap = self.collection.document(doc_id).get()
            return snap.to_dict() if snap.exists else None

        return await self._run("get", _get)

    async def list_all(self) -> List[Document]:
        return await self._run("list", lambda: self._collect(self.collection))

    async def find(self, filters: Sequence[Filter]) -> List[Document]:
        def _find():
            query = self.collection
            for f in filters:
                query = query.where(filter=FieldFilter(f.field, f.op, f.value))
            return self._collect(query)

        logger.debug("Querying %s with %s", self.name, filters)
        return await self._run("query", _find)

    @staticmethod
    def _collect(query) -> List[Document]:
        return [(doc.id, doc.to_dict() or {}) for doc in query.stream()]


# ---------------------------
# Per-entity repositories
# ---------------------------
def BusinessRepository(db) -> FirestoreRepository:
    return FirestoreRepository(db, BUSINESS_COLLECTION)


def PostRepository(db) -> FirestoreRepository:
    return FirestoreRepository(db, POST_COLLECTION)


def TagRepository(db, collection: str = BUSINESS_TAG_COLLECTION) -> FirestoreRepository:
    if collection not in (BUSINESS_TAG_COLLECTION, POST_TAG_COLLECTION):
        raise ValueError(f"Not a tag collection: {collection}")
    return FirestoreRepository(db, collection)
