from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from google.api_core.exceptions import NotFound
from google.cloud.firestore import Client

from collection.errors import NotFoundError
from config.settings import settings
from models.entities import Household
from storage.firestore_client import get_firestore_client
from storage.paging import stream_pages
from utils.ids import new_document_id


class HouseholdRepository:
    """Raw household documents. Status decay is applied by callers, never here."""

    def __init__(self, db: Optional[Client] = None, collection: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection = collection or settings.COLLECTION_HOUSEHOLDS

    def _col(self):
        return self.db.collection(self.collection)

    def get(self, household_id: str) -> Optional[Household]:
        if not household_id:
            return None
        snap = self._col().document(household_id).get()
        if not snap.exists:
            return None
        return Household.from_doc(snap.id, snap.to_dict())

    def list(self, limit: int = 100, offset: int = 0) -> List[Household]:
        docs = self._col().offset(max(0, offset)).limit(limit).stream()
        return [Household.from_doc(d.id, d.to_dict()) for d in docs]

    def iter_all(self, page_size: Optional[int] = None) -> Iterator[Household]:
        for d in stream_pages(self._col(), page_size or settings.HOUSEHOLD_PAGE_SIZE):
            yield Household.from_doc(d.id, d.to_dict())

    def count(self) -> int:
        return sum(1 for _ in self._col().stream())

    def list_by_ward(self, ward: int, page_size: Optional[int] = None) -> List[Household]:
        query = self._col().where("ward", "==", int(ward))
        return [
            Household.from_doc(d.id, d.to_dict())
            for d in stream_pages(query, page_size or settings.HOUSEHOLD_PAGE_SIZE)
        ]

    def list_by_collector(self, collector_id: str, page_size: Optional[int] = None) -> List[Household]:
        query = self._col().where("assigned_collector", "==", collector_id)
        return [
            Household.from_doc(d.id, d.to_dict())
            for d in stream_pages(query, page_size or settings.HOUSEHOLD_PAGE_SIZE)
        ]

    def find_by_phone(self, phone: str) -> Optional[Household]:
        snaps = list(self._col().where("phone", "==", phone).limit(1).stream())
        if not snaps:
            return None
        return Household.from_doc(snaps[0].id, snaps[0].to_dict())

    def create(self, household: Household) -> Household:
        household_id = household.id or new_document_id()
        stored = household.model_copy(update={"id": household_id})
        self._col().document(household_id).set(
            {**stored.to_doc(), "created_at": datetime.now(timezone.utc).isoformat()},
            merge=False,
        )
        return stored

    def update(self, household_id: str, patch: Dict[str, Any]) -> None:
        try:
            self._col().document(household_id).update(
                {**patch, "updated_at": datetime.now(timezone.utc).isoformat()}
            )
        except NotFound:
            raise NotFoundError("household_not_found", household_id=household_id)

    def delete(self, household_id: str) -> None:
        self._col().document(household_id).delete()
