from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from models.entities import CollectionLog
from models.schema import COVERED_LOG_STATUSES
from repos.collection_log_repo import CollectionLogRepository
from repos.household_repo import HouseholdRepository

log = logging.getLogger("greenlink.reports.daily")

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def summarize_day(total_households: int, logs: Iterable[CollectionLog]) -> Dict[str, Any]:
    covered = [entry for entry in logs if entry.status in COVERED_LOG_STATUSES]
    return {
        "total": total_households,
        "covered": len(covered),
        "pending": max(0, total_households - len(covered)),
        "revenue": round(sum(entry.amount_collected for entry in covered), 2),
    }


def bucket_week(end_day: date, logs: Iterable[CollectionLog]) -> List[Dict[str, Any]]:
    days = [end_day - timedelta(days=6 - i) for i in range(7)]
    buckets: Dict[date, Dict[str, Any]] = {
        d: {"day": WEEKDAY_LABELS[d.weekday()], "date": d.isoformat(), "collected": 0, "missed": 0} for d in days
    }
    for entry in logs:
        b = buckets.get(entry.date)
        if b is None:
            continue
        if entry.status in COVERED_LOG_STATUSES:
            b["collected"] += 1
        else:
            b["missed"] += 1
    return [buckets[d] for d in days]


class ReportService:
    def __init__(
        self,
        households: Optional[HouseholdRepository] = None,
        logs: Optional[CollectionLogRepository] = None,
    ):
        self.households = households or HouseholdRepository()
        self.logs = logs or CollectionLogRepository()

    def daily_summary(self, day: date) -> Dict[str, Any]:
        out = summarize_day(self.households.count(), self.logs.list_by_date(day))
        out["date"] = day.isoformat()
        log.info("daily_summary_built", extra={"extra": {"event": "daily_summary_built", **out}})
        return out

    def weekly_trend(self, end_day: date) -> List[Dict[str, Any]]:
        return bucket_week(end_day, self.logs.list_between(end_day - timedelta(days=6), end_day))
