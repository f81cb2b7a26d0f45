"""
Point every household at the first collector whose wards cover it.

Usage:
    python -m maintenance.fix_assignments
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from maintenance.runner import run_script
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository

log = logging.getLogger("greenlink.maintenance.fix_assignments")


def run(
    collectors: Optional[CollectorRepository] = None,
    households: Optional[HouseholdRepository] = None,
) -> Dict[str, Any]:
    collectors = collectors or CollectorRepository()
    households = households or HouseholdRepository()

    crew = collectors.list()
    scanned = 0
    updated = 0
    unmatched = 0
    failed = 0

    for house in households.iter_all():
        scanned += 1
        match = next((c for c in crew if c.covers(house.ward)), None)
        if match is None:
            unmatched += 1
            log.warning(
                "no_collector_for_ward",
                extra={"extra": {"ward": house.ward, "household_id": house.id, "resident_name": house.resident_name}},
            )
            continue
        if house.assigned_collector == match.id:
            continue
        try:
            households.update(house.id, {"assigned_collector": match.id})
            updated += 1
            log.info(
                "household_reassigned",
                extra={"extra": {"household_id": house.id, "ward": house.ward, "collector_id": match.id}},
            )
        except Exception as e:
            failed += 1
            log.warning("household_reassign_failed", extra={"extra": {"household_id": house.id, "message": str(e)}})

    return {"scanned": scanned, "updated": updated, "unmatched": unmatched, "failed": failed}


def main() -> None:
    raise SystemExit(run_script("fix_assignments", run))


if __name__ == "__main__":
    main()
