from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from collection.errors import InvalidRequest, NotFoundError
from collection.status import is_current, present
from config.settings import settings
from models.entities import Household
from models.schema import PENDING
from repos.household_repo import HouseholdRepository
from utils.clock import local_today
from utils.ids import normalize_phone

log = logging.getLogger("greenlink.collection.households")

# Never patched through the admin path.
_READ_ONLY_FIELDS = {"id"}
_STATUS_FIELDS = {"collection_status", "payment_status"}


class HouseholdDirectory:
    """
    Every household read goes through here so the day-rollover decay is applied
    the same way on each path.
    """

    def __init__(self, repo: Optional[HouseholdRepository] = None, today: Callable[[], date] = local_today):
        self.repo = repo or HouseholdRepository()
        self.today = today

    def list_households(self, limit: int = 100, offset: int = 0) -> List[Household]:
        today = self.today()
        return [present(h, today) for h in self.repo.list(limit=limit, offset=offset)]

    def get_household(self, household_id: str) -> Household:
        h = self.repo.get(household_id)
        if h is None:
            raise NotFoundError("household_not_found", household_id=household_id)
        return present(h, self.today())

    def households_in_ward(self, ward: int) -> List[Household]:
        today = self.today()
        return [present(h, today) for h in self.repo.list_by_ward(ward)]

    def households_for_collector(self, collector_id: str) -> List[Household]:
        today = self.today()
        return [present(h, today) for h in self.repo.list_by_collector(collector_id)]

    def find_by_phone(self, phone: str) -> Optional[Household]:
        h = self.repo.find_by_phone(normalize_phone(phone))
        if h is None:
            return None
        return present(h, self.today())

    # -------- Admin writes --------
    def create_household(self, data: Dict[str, Any]) -> Household:
        payload = {"monthly_fee": settings.DEFAULT_MONTHLY_FEE, **data}
        payload["phone"] = normalize_phone(str(payload.get("phone") or ""))
        if not payload["phone"]:
            raise InvalidRequest("invalid_phone")
        created = self.repo.create(Household.model_validate(payload))
        log.info("household_created", extra={"extra": {"event": "household_created", "household_id": created.id, "ward": created.ward}})
        return present(created, self.today())

    def update_household(self, household_id: str, patch: Dict[str, Any]) -> Household:
        current = self.repo.get(household_id)
        if current is None:
            raise NotFoundError("household_not_found", household_id=household_id)
        clean = {k: v for k, v in patch.items() if k not in _READ_ONLY_FIELDS}
        if "phone" in clean:
            clean["phone"] = normalize_phone(str(clean["phone"] or ""))
        today = self.today()
        if _STATUS_FIELDS & clean.keys() and "last_collection_date" not in clean and not is_current(current, today):
            # A status edit on a stale record applies to today; the untouched axis starts pending.
            clean["last_collection_date"] = today
            for field in _STATUS_FIELDS:
                clean.setdefault(field, PENDING)
        # Validate the merged record before writing so bad values never reach the store.
        try:
            merged = Household.model_validate({**current.model_dump(), **clean})
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise InvalidRequest("invalid_household_update", household_id=household_id, fields=fields)
        stored = {k: v for k, v in merged.to_doc().items() if k in clean}
        if stored:
            self.repo.update(household_id, stored)
        return present(merged, today)

    def delete_household(self, household_id: str) -> None:
        if self.repo.get(household_id) is None:
            raise NotFoundError("household_not_found", household_id=household_id)
        self.repo.delete(household_id)
        log.info("household_deleted", extra={"extra": {"event": "household_deleted", "household_id": household_id}})
