"""
Mock Firestore client for local development and tests.

Implements the small slice of the Firestore client API this service uses:
collection(), collections(), document(), set(), get(), order_by(),
limit() and stream(). Documents are kept in memory and, when a path is
given, mirrored to a JSON file after every write.

SERVER_TIMESTAMP sentinels are replaced with the current UTC time on write,
and documents missing the order_by field are left out of ordered queries,
the same way Firestore behaves.
"""

import copy
import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from firebase_admin import firestore

logger = logging.getLogger(__name__)

_DATETIME_KEY = "__datetime__"


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_KEY: value.isoformat()}
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_encode(v) for v in value]
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value.keys()) == {_DATETIME_KEY}:
            return datetime.fromisoformat(value[_DATETIME_KEY])
        return {k: _decode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decode(v) for v in value]
    return value


def _resolve_sentinels(data: Dict[str, Any]) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    resolved = {}
    for key, value in data.items():
        if value is firestore.SERVER_TIMESTAMP:
            resolved[key] = now
        elif isinstance(value, dict):
            resolved[key] = _resolve_sentinels(value)
        else:
            resolved[key] = copy.deepcopy(value)
    return resolved


class MockDocumentSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data) if self._data is not None else None


class MockDocumentReference:
    def __init__(self, db: "MockFirestore", collection: str, doc_id: str):
        self._db = db
        self._collection = collection
        self.id = doc_id

    def set(self, document_data: Dict[str, Any], merge: bool = False, **kwargs) -> None:
        self._db._write(self._collection, self.id, document_data, merge=merge)

    def get(self, **kwargs) -> MockDocumentSnapshot:
        return MockDocumentSnapshot(self.id, self._db._read(self._collection, self.id))


class MockQuery:
    def __init__(self, db: "MockFirestore", collection: str):
        self._db = db
        self._collection = collection
        self._orders: List[tuple] = []
        self._limit: Optional[int] = None

    def _copy(self) -> "MockQuery":
        query = MockQuery(self._db, self._collection)
        query._orders = list(self._orders)
        query._limit = self._limit
        return query

    def order_by(self, field_path: str, direction: str = firestore.Query.ASCENDING) -> "MockQuery":
        query = self._copy()
        query._orders.append((field_path, direction))
        return query

    def limit(self, count: int) -> "MockQuery":
        query = self._copy()
        query._limit = count
        return query

    def stream(self, **kwargs) -> Iterator[MockDocumentSnapshot]:
        docs = self._db._snapshot(self._collection)
        for field_path, _ in self._orders:
            docs = [(doc_id, data) for doc_id, data in docs if data.get(field_path) is not None]
        # Stable sorts applied last-key-first give multi-key ordering
        for field_path, direction in reversed(self._orders):
            docs.sort(
                key=lambda item: item[1][field_path],
                reverse=direction == firestore.Query.DESCENDING,
            )
        if self._limit is not None:
            docs = docs[: self._limit]
        for doc_id, data in docs:
            yield MockDocumentSnapshot(doc_id, data)


class MockCollectionReference(MockQuery):
    def __init__(self, db: "MockFirestore", name: str):
        super().__init__(db, name)
        self.id = name

    def document(self, document_id: Optional[str] = None) -> MockDocumentReference:
        return MockDocumentReference(self._db, self._collection, document_id or uuid.uuid4().hex[:20])


class MockFirestore:
    """In-memory Firestore stand-in, optionally persisted to a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._lock = threading.Lock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        if path and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                self._collections = _decode(json.load(f))
            logger.info(f"[MOCK DB] Loaded {path}")

    def collection(self, name: str) -> MockCollectionReference:
        return MockCollectionReference(self, name)

    def collections(self, **kwargs) -> List[MockCollectionReference]:
        with self._lock:
            names = [name for name, docs in self._collections.items() if docs]
        return [MockCollectionReference(self, name) for name in names]

    def _write(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        resolved = _resolve_sentinels(data)
        with self._lock:
            docs = self._collections.setdefault(collection, {})
            if merge and doc_id in docs:
                docs[doc_id].update(resolved)
            else:
                docs[doc_id] = resolved
            self._flush()

    def _read(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            return copy.deepcopy(data) if data is not None else None

    def _snapshot(self, collection: str) -> List[tuple]:
        with self._lock:
            return [
                (doc_id, copy.deepcopy(data))
                for doc_id, data in self._collections.get(collection, {}).items()
            ]

    def _flush(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(_encode(self._collections), f, indent=2)


def get_mock_db(path: Optional[str] = None) -> MockFirestore:
    return MockFirestore(path)
