"""
Generate three days of demo history: one route per collector that has assigned
households (today active, earlier days completed) and a log for most of those
households.

Usage:
    python -m maintenance.populate_logs
"""
from __future__ import annotations

import logging
import random
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from collection.assignment import route_name
from collection.errors import ConflictError
from config.settings import settings
from maintenance.runner import run_script
from models.entities import CollectionLog, Route
from models.schema import ROUTE_START_CLOCK
from repos.collection_log_repo import CollectionLogRepository
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from repos.route_repo import RouteRepository
from utils.clock import local_today

log = logging.getLogger("greenlink.maintenance.populate_logs")

DAYS_BACK = 3
STATUS_WEIGHTS = ("collected", "collected", "collected", "not-available", "skipped")
SKIP_RATE = 0.1


def run(
    collectors: Optional[CollectorRepository] = None,
    households: Optional[HouseholdRepository] = None,
    routes: Optional[RouteRepository] = None,
    logs: Optional[CollectionLogRepository] = None,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    collectors = collectors or CollectorRepository()
    households = households or HouseholdRepository()
    routes = routes or RouteRepository()
    logs = logs or CollectionLogRepository()
    today = today or local_today()
    rng = rng or random.Random()
    tz = ZoneInfo(settings.LOCAL_TIMEZONE)

    crew = collectors.list()
    houses = list(households.iter_all())
    if not crew or not houses:
        log.warning("nothing_to_populate", extra={"extra": {"collectors": len(crew), "households": len(houses)}})
        return {"routes": 0, "logs": 0}

    routes_created = 0
    logs_created = 0
    for d in range(DAYS_BACK):
        day = today - timedelta(days=d)
        for collector in crew:
            assigned = [h for h in houses if h.assigned_collector == collector.id]
            if not assigned or not collector.wards:
                continue

            try:
                routes.create(
                    Route(
                        name=route_name(collector.name, day),
                        collector_id=collector.id,
                        ward=collector.wards[0],
                        status="active" if d == 0 else "completed",
                        start_time=f"{day.isoformat()} {ROUTE_START_CLOCK}",
                        end_time=None if d == 0 else f"{day.isoformat()} 02:30 PM",
                        total_houses=len(assigned),
                        collected_houses=int(len(assigned) * 0.8),
                        date=day,
                    )
                )
                routes_created += 1
            except ConflictError:
                log.info("route_exists", extra={"extra": {"ward": collector.wards[0], "date": day.isoformat()}})

            for house in assigned:
                if rng.random() < SKIP_RATE:
                    continue
                status = rng.choice(STATUS_WEIGHTS)
                stamp = datetime.combine(day, time(8 + rng.randrange(6), rng.randrange(60)), tzinfo=tz)
                try:
                    logs.create(
                        CollectionLog(
                            collector_id=collector.id,
                            collector_name=collector.name,
                            household_id=house.id,
                            resident_name=house.resident_name,
                            timestamp=stamp,
                            date=day,
                            location=house.address,
                            status=status,
                            amount_collected=house.monthly_fee if status == "collected" else 0.0,
                            payment_mode="offline" if status == "collected" else "none",
                        )
                    )
                    logs_created += 1
                except Exception as e:
                    log.warning("log_create_failed", extra={"extra": {"household_id": house.id, "message": str(e)}})

    return {"routes": routes_created, "logs": logs_created}


def main() -> None:
    raise SystemExit(run_script("populate_logs", run))


if __name__ == "__main__":
    main()
