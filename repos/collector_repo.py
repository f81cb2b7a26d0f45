from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import AlreadyExists, NotFound
from google.cloud import firestore
from google.cloud.firestore import Client

from collection.errors import ConflictError, NotFoundError
from config.settings import settings
from models.entities import Collector
from storage.firestore_client import get_firestore_client
from storage.paging import stream_pages


class CollectorRepository:
    def __init__(self, db: Optional[Client] = None, collection: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection = collection or settings.COLLECTION_COLLECTORS

    def _col(self):
        return self.db.collection(self.collection)

    def get(self, collector_id: str) -> Optional[Collector]:
        if not collector_id:
            return None
        snap = self._col().document(collector_id).get()
        if not snap.exists:
            return None
        return Collector.from_doc(snap.id, snap.to_dict())

    def list(self) -> List[Collector]:
        return [
            Collector.from_doc(d.id, d.to_dict())
            for d in stream_pages(self._col(), settings.HOUSEHOLD_PAGE_SIZE)
        ]

    def find_by_phone(self, phone: str) -> Optional[Collector]:
        snaps = list(self._col().where("phone", "==", phone).limit(1).stream())
        if not snaps:
            return None
        return Collector.from_doc(snaps[0].id, snaps[0].to_dict())

    def create(self, collector: Collector) -> Collector:
        """Collector ids are the paired auth identity, so a second create for the same id is a conflict."""
        try:
            self._col().document(collector.id).create(
                {**collector.to_doc(), "created_at": datetime.now(timezone.utc).isoformat()}
            )
        except AlreadyExists:
            raise ConflictError("collector_exists", collector_id=collector.id)
        return collector

    def update(self, collector_id: str, patch: Dict[str, Any]) -> None:
        try:
            self._col().document(collector_id).update(
                {**patch, "updated_at": datetime.now(timezone.utc).isoformat()}
            )
        except NotFound:
            raise NotFoundError("collector_not_found", collector_id=collector_id)

    def increment_total_collections(self, collector_id: str, by: int = 1) -> bool:
        # Server-side increment: concurrent collectors never lose an update.
        try:
            self._col().document(collector_id).update({"total_collections": firestore.Increment(by)})
        except NotFound:
            return False
        return True

    def delete(self, collector_id: str) -> None:
        self._col().document(collector_id).delete()
