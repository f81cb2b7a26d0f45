from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore import Client

from collection.errors import NotFoundError
from config.settings import settings
from models.entities import CollectionLog
from storage.firestore_client import get_firestore_client
from storage.paging import stream_pages
from utils.ids import new_document_id


class CollectionLogRepository:
    def __init__(self, db: Optional[Client] = None, collection: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection = collection or settings.COLLECTION_LOGS

    def _col(self):
        return self.db.collection(self.collection)

    def get(self, log_id: str) -> Optional[CollectionLog]:
        snap = self._col().document(log_id).get()
        if not snap.exists:
            return None
        return CollectionLog.from_doc(snap.id, snap.to_dict())

    def create(self, entry: CollectionLog) -> CollectionLog:
        log_id = entry.id or new_document_id()
        stored = entry.model_copy(update={"id": log_id})
        self._col().document(log_id).set(stored.to_doc(), merge=False)
        return stored

    def update(self, log_id: str, patch: Dict[str, Any]) -> None:
        try:
            self._col().document(log_id).update(
                {**patch, "updated_at": datetime.now(timezone.utc).isoformat()}
            )
        except NotFound:
            raise NotFoundError("log_not_found", log_id=log_id)

    def delete(self, log_id: str) -> None:
        self._col().document(log_id).delete()

    def find_for_household_on(self, household_id: str, day: date) -> Optional[CollectionLog]:
        snaps = list(
            self._col()
            .where("household_id", "==", household_id)
            .where("date", "==", day.isoformat())
            .limit(1)
            .stream()
        )
        if not snaps:
            return None
        return CollectionLog.from_doc(snaps[0].id, snaps[0].to_dict())

    def list_recent(self, limit: int = 100) -> List[CollectionLog]:
        docs = self._col().order_by("timestamp", direction=firestore.Query.DESCENDING).limit(limit).stream()
        return [CollectionLog.from_doc(d.id, d.to_dict()) for d in docs]

    def list_for_household(self, household_id: str, limit: int = 100) -> List[CollectionLog]:
        docs = self._col().where("household_id", "==", household_id).limit(limit).stream()
        entries = [CollectionLog.from_doc(d.id, d.to_dict()) for d in docs]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    def list_by_date(self, day: date) -> List[CollectionLog]:
        docs = self._col().where("date", "==", day.isoformat()).stream()
        return [CollectionLog.from_doc(d.id, d.to_dict()) for d in docs]

    def list_between(self, start: date, end: date) -> List[CollectionLog]:
        # ISO dates order lexically, so a string range is a date range.
        docs = (
            self._col()
            .where("date", ">=", start.isoformat())
            .where("date", "<=", end.isoformat())
            .stream()
        )
        return [CollectionLog.from_doc(d.id, d.to_dict()) for d in docs]

    def iter_all(self) -> Iterator[CollectionLog]:
        for d in stream_pages(self._col(), settings.LOG_LIST_LIMIT):
            yield CollectionLog.from_doc(d.id, d.to_dict())
