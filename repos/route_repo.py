from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from google.api_core.exceptions import AlreadyExists, NotFound
from google.cloud import firestore
from google.cloud.firestore import Client

from collection.errors import ConflictError, NotFoundError
from config.settings import settings
from models.entities import Route
from storage.firestore_client import get_firestore_client
from storage.paging import stream_pages
from utils.ids import route_id_for


class RouteRepository:
    def __init__(self, db: Optional[Client] = None, collection: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection = collection or settings.COLLECTION_ROUTES

    def _col(self):
        return self.db.collection(self.collection)

    def get(self, route_id: str) -> Optional[Route]:
        if not route_id:
            return None
        snap = self._col().document(route_id).get()
        if not snap.exists:
            return None
        return Route.from_doc(snap.id, snap.to_dict())

    def create(self, route: Route) -> Route:
        """
        Create-if-absent on the (date, ward) id.

        Raises ConflictError("route_already_assigned") when the ward already has a
        route for that date, whichever collector holds it.
        """
        route_id = route.id or route_id_for(route.date, route.ward)
        stored = route.model_copy(update={"id": route_id})
        try:
            self._col().document(route_id).create(
                {**stored.to_doc(), "created_at": datetime.now(timezone.utc).isoformat()}
            )
        except AlreadyExists:
            raise ConflictError("route_already_assigned", ward=route.ward, date=route.date.isoformat())
        return stored

    def update(self, route_id: str, patch: Dict[str, Any]) -> None:
        try:
            self._col().document(route_id).update(
                {**patch, "updated_at": datetime.now(timezone.utc).isoformat()}
            )
        except NotFound:
            raise NotFoundError("route_not_found", route_id=route_id)

    def delete(self, route_id: str) -> None:
        self._col().document(route_id).delete()

    def list_by_date(self, day: date) -> List[Route]:
        docs = self._col().where("date", "==", day.isoformat()).stream()
        return sorted((Route.from_doc(d.id, d.to_dict()) for d in docs), key=lambda r: r.ward)

    def list_recent(self, limit: int = 100) -> List[Route]:
        docs = self._col().order_by("start_time", direction=firestore.Query.DESCENDING).limit(limit).stream()
        return [Route.from_doc(d.id, d.to_dict()) for d in docs]

    def find_for_collector(self, collector_id: str, day: date) -> Optional[Route]:
        snaps = list(
            self._col()
            .where("collector_id", "==", collector_id)
            .where("date", "==", day.isoformat())
            .limit(1)
            .stream()
        )
        if not snaps:
            return None
        return Route.from_doc(snaps[0].id, snaps[0].to_dict())

    def iter_all(self) -> Iterator[Route]:
        for d in stream_pages(self._col(), settings.HOUSEHOLD_PAGE_SIZE):
            yield Route.from_doc(d.id, d.to_dict())
