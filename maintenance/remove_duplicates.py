"""
Remove duplicate documents left behind by repeated seeding.

The first document seen for a key is kept; the rest are deleted.

Usage:
    python -m maintenance.remove_duplicates
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from maintenance.runner import run_script
from repos.collection_log_repo import CollectionLogRepository
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from repos.route_repo import RouteRepository

log = logging.getLogger("greenlink.maintenance.remove_duplicates")


def dedupe(
    kind: str,
    records: Iterable[Any],
    key: Callable[[Any], str],
    delete: Callable[[str], None],
) -> Dict[str, int]:
    seen = set()
    dupes = []
    for rec in records:
        k = key(rec)
        if k in seen:
            dupes.append(rec.id)
        else:
            seen.add(k)

    removed = 0
    failed = 0
    for record_id in dupes:
        try:
            delete(record_id)
            removed += 1
        except Exception as e:
            failed += 1
            log.warning("duplicate_delete_failed", extra={"extra": {"kind": kind, "id": record_id, "message": str(e)}})

    log.info("duplicates_removed", extra={"extra": {"kind": kind, "kept": len(seen), "removed": removed, "failed": failed}})
    return {"kept": len(seen), "removed": removed, "failed": failed}


def run(
    collectors: Optional[CollectorRepository] = None,
    households: Optional[HouseholdRepository] = None,
    routes: Optional[RouteRepository] = None,
    logs: Optional[CollectionLogRepository] = None,
) -> Dict[str, Any]:
    collectors = collectors or CollectorRepository()
    households = households or HouseholdRepository()
    routes = routes or RouteRepository()
    logs = logs or CollectionLogRepository()

    # Each scan is fully materialized before deleting so paging stays stable.
    return {
        "collectors": dedupe("collectors", collectors.list(), lambda c: c.phone, collectors.delete),
        "households": dedupe(
            "households",
            list(households.iter_all()),
            lambda h: f"{h.resident_name}|{h.address}",
            households.delete,
        ),
        "routes": dedupe("routes", list(routes.iter_all()), lambda r: f"{r.collector_id}|{r.name}", routes.delete),
        "logs": dedupe(
            "logs",
            list(logs.iter_all()),
            lambda e: f"{e.household_id}|{e.timestamp.isoformat()}|{e.status}",
            logs.delete,
        ),
    }


def main() -> None:
    raise SystemExit(run_script("remove_duplicates", run))


if __name__ == "__main__":
    main()
