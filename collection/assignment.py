from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from collection.errors import InvalidRequest, NotFoundError
from collection.status import display_status
from models.entities import Route
from models.schema import COLLECTED, ROUTE_START_CLOCK, UNASSIGNED
from ops.tracing import Stopwatch
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from repos.route_repo import RouteRepository
from utils.clock import clock_label, local_now
from utils.ids import route_id_for

log = logging.getLogger("greenlink.collection.assignment")


def route_name(collector_name: str, day: date) -> str:
    return f"Route - {collector_name} - {day.isoformat()}"


class AssignmentWorkflow:
    """
    Binds collectors to wards for a day and points the ward's households at them.

    Multi-document steps are independent writes: a failure part-way through a
    ward leaves the households already updated as they are.
    """

    def __init__(
        self,
        routes: Optional[RouteRepository] = None,
        households: Optional[HouseholdRepository] = None,
        collectors: Optional[CollectorRepository] = None,
        now: Callable[[], datetime] = local_now,
    ):
        self.routes = routes or RouteRepository()
        self.households = households or HouseholdRepository()
        self.collectors = collectors or CollectorRepository()
        self.now = now

    def assign_route(self, collector_id: str, ward: int, day: date) -> Route:
        t = Stopwatch()
        collector = self.collectors.get(collector_id)
        if collector is None:
            raise NotFoundError("collector_not_found", collector_id=collector_id)
        if not collector.covers(ward):
            raise InvalidRequest("collector_not_in_ward", collector_id=collector_id, ward=ward)

        route = self.routes.create(
            Route(
                id=route_id_for(day, ward),
                name=route_name(collector.name, day),
                collector_id=collector_id,
                ward=ward,
                status="active",
                start_time=f"{day.isoformat()} {ROUTE_START_CLOCK}",
                date=day,
                total_houses=0,
                collected_houses=0,
            )
        )

        houses = self.households.list_by_ward(ward)
        for h in houses:
            self.households.update(h.id, {"assigned_collector": collector_id})

        self.routes.update(route.id, {"total_houses": len(houses)})
        route = route.model_copy(update={"total_houses": len(houses)})

        log.info(
            "route_assigned",
            extra={
                "extra": {
                    "event": "route_assigned",
                    "route_id": route.id,
                    "collector_id": collector_id,
                    "ward": ward,
                    "date": day.isoformat(),
                    "households_reassigned": len(houses),
                    "duration_ms": t.elapsed_ms(),
                }
            },
        )
        return route

    def delete_route(self, route_id: str, ward: Optional[int] = None) -> int:
        """Delete the route and unassign its ward. Returns the number of households reset."""
        route = self.routes.get(route_id)
        if route is None:
            raise NotFoundError("route_not_found", route_id=route_id)
        target_ward = route.ward if ward is None else ward

        self.routes.delete(route_id)

        houses = self.households.list_by_ward(target_ward)
        for h in houses:
            self.households.update(h.id, {"assigned_collector": UNASSIGNED})

        log.info(
            "route_deleted",
            extra={"extra": {"event": "route_deleted", "route_id": route_id, "ward": target_ward, "households_reset": len(houses)}},
        )
        return len(houses)

    def get_daily_assignment(self, collector_id: str, day: date) -> Optional[Route]:
        # One route per collector per day is policy, not storage; extras are ignored.
        route = self.routes.find_for_collector(collector_id, day)
        if route is None:
            log.info(
                "no_assignment_for_day",
                extra={"extra": {"event": "no_assignment_for_day", "collector_id": collector_id, "date": day.isoformat()}},
            )
        return route

    def complete_route(self, route_id: str) -> Route:
        route = self.routes.get(route_id)
        if route is None:
            raise NotFoundError("route_not_found", route_id=route_id)

        now = self.now()
        today = now.date()
        houses = self.households.list_by_ward(route.ward)
        collected = sum(1 for h in houses if display_status(h, today)[0] == COLLECTED)
        patch = {
            "status": "completed",
            "end_time": f"{today.isoformat()} {clock_label(now)}",
            "total_houses": len(houses),
            "collected_houses": collected,
        }
        self.routes.update(route_id, patch)
        log.info("route_completed", extra={"extra": {"event": "route_completed", "route_id": route_id, **patch}})
        return route.model_copy(update=patch)

    def list_routes(self, day: Optional[date] = None, limit: int = 100) -> List[Route]:
        if day is not None:
            return self.routes.list_by_date(day)
        return self.routes.list_recent(limit=limit)
