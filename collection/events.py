from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from collection.errors import InvalidRequest, NotFoundError
from collection.status import is_current
from models.entities import CollectionLog, Household
from models.schema import (
    COLLECTED,
    COLLECTION_EVENT_STATUSES,
    ONLINE_LOCATION,
    PAID,
    PAYMENT_MODES,
    PAYMENT_STATUSES,
    PENDING,
    SYSTEM_COLLECTOR_ID,
    SYSTEM_COLLECTOR_NAME,
)
from repos.collection_log_repo import CollectionLogRepository
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from utils.clock import local_now

log = logging.getLogger("greenlink.collection.events")


class CollectionEventWorkflow:
    """
    Household visits and payments.

    Each event writes the household's status for today, then upserts the single
    log entry for (household, day). Collection and payment are independent axes:
    touching one never changes the other's value for today.
    """

    def __init__(
        self,
        households: Optional[HouseholdRepository] = None,
        logs: Optional[CollectionLogRepository] = None,
        collectors: Optional[CollectorRepository] = None,
        now: Callable[[], datetime] = local_now,
    ):
        self.households = households or HouseholdRepository()
        self.logs = logs or CollectionLogRepository()
        self.collectors = collectors or CollectorRepository()
        self.now = now

    def _require_household(self, household_id: str) -> Household:
        h = self.households.get(household_id)
        if h is None:
            raise NotFoundError("household_not_found", household_id=household_id)
        return h

    def record_collection(
        self,
        household_id: str,
        status: str,
        collector_id: str,
        collector_name: str,
        resident_name: Optional[str] = None,
        location: Optional[str] = None,
        amount: float = 0.0,
        payment_mode: Optional[str] = None,
        payment_status: Optional[str] = None,
    ) -> CollectionLog:
        if status not in COLLECTION_EVENT_STATUSES:
            raise InvalidRequest("invalid_collection_status", status=status)
        if payment_mode and payment_mode not in PAYMENT_MODES:
            raise InvalidRequest("invalid_payment_mode", payment_mode=payment_mode)
        if payment_status and payment_status not in PAYMENT_STATUSES:
            raise InvalidRequest("invalid_payment_status", payment_status=payment_status)
        household = self._require_household(household_id)

        now = self.now()
        today = now.date()
        mode = payment_mode or "none"

        patch: Dict[str, Any] = {
            "collection_status": status,
            "last_collection_date": today.isoformat(),
            "payment_mode": mode,
        }
        if payment_status:
            patch["payment_status"] = payment_status
        elif mode == "offline":
            patch["payment_status"] = PAID
        elif not is_current(household, today):
            # Stamping today's date must not resurrect a payment from an earlier day.
            patch["payment_status"] = PENDING
        self.households.update(household_id, patch)

        existing = self.logs.find_for_household_on(household_id, today)
        if existing is not None:
            update = {
                "collector_id": collector_id,
                "collector_name": collector_name,
                "status": status,
                "amount_collected": float(amount),
                "payment_mode": mode,
            }
            self.logs.update(existing.id, update)
            entry = existing.model_copy(update=update)
            # Logs written before `counted` existed carry only their status.
            already_counted = existing.counted or existing.status == COLLECTED
        else:
            entry = self.logs.create(
                CollectionLog(
                    collector_id=collector_id,
                    collector_name=collector_name,
                    household_id=household_id,
                    resident_name=resident_name or household.resident_name,
                    timestamp=now,
                    date=today,
                    location=location or household.address,
                    status=status,
                    amount_collected=float(amount),
                    payment_mode=mode,
                )
            )
            already_counted = False

        # At most one increment per household per day.
        counted = False
        if status == COLLECTED and collector_id != SYSTEM_COLLECTOR_ID and not already_counted:
            counted = self.collectors.increment_total_collections(collector_id)
            if counted:
                self.logs.update(entry.id, {"counted": True})
                entry = entry.model_copy(update={"counted": True})
            else:
                log.warning(
                    "collector_counter_skipped",
                    extra={"extra": {"event": "collector_counter_skipped", "collector_id": collector_id, "reason": "collector_not_found"}},
                )

        log.info(
            "collection_recorded",
            extra={
                "extra": {
                    "event": "collection_recorded",
                    "household_id": household_id,
                    "collector_id": collector_id,
                    "status": status,
                    "payment_mode": mode,
                    "log_id": entry.id,
                    "log_updated": existing is not None,
                    "counted": counted,
                }
            },
        )
        return entry

    def pay_online(self, household_id: str, amount: float, resident_name: Optional[str] = None) -> CollectionLog:
        if amount is None or float(amount) <= 0:
            raise InvalidRequest("invalid_amount", amount=amount)
        household = self._require_household(household_id)

        now = self.now()
        today = now.date()

        patch: Dict[str, Any] = {
            "payment_status": PAID,
            "payment_mode": "online",
            "last_collection_date": today.isoformat(),
        }
        if not is_current(household, today):
            patch["collection_status"] = PENDING
        self.households.update(household_id, patch)

        existing = self.logs.find_for_household_on(household_id, today)
        if existing is not None:
            update = {"status": PAID, "amount_collected": float(amount), "payment_mode": "online"}
            self.logs.update(existing.id, update)
            entry = existing.model_copy(update=update)
        else:
            entry = self.logs.create(
                CollectionLog(
                    collector_id=SYSTEM_COLLECTOR_ID,
                    collector_name=SYSTEM_COLLECTOR_NAME,
                    household_id=household_id,
                    resident_name=resident_name or household.resident_name,
                    timestamp=now,
                    date=today,
                    location=ONLINE_LOCATION,
                    status=PAID,
                    amount_collected=float(amount),
                    payment_mode="online",
                )
            )

        log.info(
            "online_payment_recorded",
            extra={
                "extra": {
                    "event": "online_payment_recorded",
                    "household_id": household_id,
                    "amount": float(amount),
                    "log_id": entry.id,
                    "log_updated": existing is not None,
                }
            },
        )
        return entry
