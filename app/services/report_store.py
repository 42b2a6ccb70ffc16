"""
Report store - the one Firestore collection holding citizen reports.

Every call carries a bounded timeout and retry=None, so nothing is
retried. Any failure from the client is re-raised as PersistenceError so
callers deal with a single error type.
"""

from firebase_admin import firestore
from typing import Any, Dict, List
import logging

from app.core.errors import PersistenceError

logger = logging.getLogger(__name__)


class ReportStore:
    """
    Thin wrapper over a Firestore (or mock) client for the reports collection.
    """

    def __init__(self, db, collection: str = "submissions", timeout: float = 30.0):
        self.db = db
        self.collection = collection
        self.timeout = timeout

    def insert(self, document: Dict[str, Any]) -> str:
        """
        Insert one document and return its generated id.

        The write is a single document set, so it either lands whole or not
        at all.
        """
        try:
            doc_ref = self.db.collection(self.collection).document()
            doc_ref.set(document, retry=None, timeout=self.timeout)
        except Exception as e:
            logger.error(f"Failed to write to '{self.collection}': {e}", exc_info=True)
            raise PersistenceError(f"insert failed: {e}") from e
        return doc_ref.id

    def find_all(self) -> List[Dict[str, Any]]:
        """
        Return every document ordered by createdAt, newest first.
        Each dict carries the document id under "id".
        """
        try:
            query = self.db.collection(self.collection).order_by(
                "createdAt", direction=firestore.Query.DESCENDING
            )
            documents = []
            for doc in query.stream(retry=None, timeout=self.timeout):
                data = doc.to_dict() or {}
                data["id"] = doc.id
                documents.append(data)
        except Exception as e:
            logger.error(f"Failed to read from '{self.collection}': {e}", exc_info=True)
            raise PersistenceError(f"read failed: {e}") from e
        return documents

    def ping(self) -> int:
        """Touch the store and return the number of non-empty collections."""
        try:
            return len(list(self.db.collections(retry=None, timeout=self.timeout)))
        except Exception as e:
            raise PersistenceError(f"ping failed: {e}") from e
