"""
Print the log count and the most recent entries.

Usage:
    python -m maintenance.check_logs
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from maintenance.runner import run_script
from repos.collection_log_repo import CollectionLogRepository

log = logging.getLogger("greenlink.maintenance.check_logs")

SAMPLE_SIZE = 3


def run(logs: Optional[CollectionLogRepository] = None) -> Dict[str, Any]:
    logs = logs or CollectionLogRepository()
    total = sum(1 for _ in logs.iter_all())
    latest = [
        {
            "id": e.id,
            "resident_name": e.resident_name,
            "collector_name": e.collector_name,
            "status": e.status,
            "date": e.date.isoformat(),
        }
        for e in logs.list_recent(limit=SAMPLE_SIZE)
    ]
    for entry in latest:
        log.info("log_sample", extra={"extra": entry})
    return {"total": total, "latest": latest}


def main() -> None:
    raise SystemExit(run_script("check_logs", run))


if __name__ == "__main__":
    main()
