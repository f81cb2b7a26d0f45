from __future__ import annotations

import logging
from typing import List, Optional

from collection.errors import ConflictError, InvalidRequest, NotFoundError
from identity.auth_client import IdentityClient
from models.entities import Collector
from models.schema import UNASSIGNED
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from utils.ids import avatar_label, normalize_phone

log = logging.getLogger("greenlink.collection.collectors")


class CollectorAdmin:
    def __init__(
        self,
        collectors: Optional[CollectorRepository] = None,
        households: Optional[HouseholdRepository] = None,
        identity: Optional[IdentityClient] = None,
    ):
        self.collectors = collectors or CollectorRepository()
        self.households = households or HouseholdRepository()
        self._identity = identity

    @property
    def identity(self) -> IdentityClient:
        # Built lazily: listing collectors must not require auth configuration.
        if self._identity is None:
            self._identity = IdentityClient()
        return self._identity

    def list_collectors(self) -> List[Collector]:
        return self.collectors.list()

    def create_collector(self, name: str, phone: str, email: str, password: str, wards: List[int]) -> Collector:
        clean_wards = sorted({int(w) for w in wards})
        if not clean_wards:
            raise InvalidRequest("wards_required")
        phone = normalize_phone(phone)
        if not phone:
            raise InvalidRequest("invalid_phone")
        if self.collectors.find_by_phone(phone) is not None:
            raise ConflictError("collector_phone_exists", phone=phone)

        # The auth identity comes first; its user id becomes the collector document id.
        user_id = self.identity.sign_up(email, password, display_name=name)
        collector = self.collectors.create(
            Collector(
                id=user_id,
                name=name,
                phone=phone,
                email=email,
                wards=clean_wards,
                status="active",
                total_collections=0,
                avatar=avatar_label(name),
            )
        )
        log.info("collector_created", extra={"extra": {"event": "collector_created", "collector_id": user_id, "wards": clean_wards}})
        return collector

    def delete_collector(self, collector_id: str) -> int:
        """Delete the collector document and unassign its households. Returns households reset."""
        if self.collectors.get(collector_id) is None:
            raise NotFoundError("collector_not_found", collector_id=collector_id)
        self.collectors.delete(collector_id)

        houses = self.households.list_by_collector(collector_id)
        for h in houses:
            self.households.update(h.id, {"assigned_collector": UNASSIGNED})
        log.info(
            "collector_deleted",
            extra={"extra": {"event": "collector_deleted", "collector_id": collector_id, "households_reset": len(houses)}},
        )
        return len(houses)
