"""
Recompute each collector's total_collections from the logs (collected or paid).

Usage:
    python -m maintenance.sync_collector_counts
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Optional

from maintenance.runner import run_script
from models.schema import COVERED_LOG_STATUSES
from repos.collection_log_repo import CollectionLogRepository
from repos.collector_repo import CollectorRepository

log = logging.getLogger("greenlink.maintenance.sync_collector_counts")


def run(
    collectors: Optional[CollectorRepository] = None,
    logs: Optional[CollectionLogRepository] = None,
) -> Dict[str, Any]:
    collectors = collectors or CollectorRepository()
    logs = logs or CollectionLogRepository()

    counts: Counter = Counter(
        entry.collector_id for entry in logs.iter_all() if entry.status in COVERED_LOG_STATUSES
    )

    synced = 0
    failed = 0
    for collector in collectors.list():
        total = counts.get(collector.id, 0)
        try:
            collectors.update(collector.id, {"total_collections": total})
            synced += 1
            log.info("collector_count_synced", extra={"extra": {"collector_id": collector.id, "total_collections": total}})
        except Exception as e:
            failed += 1
            log.warning("collector_count_sync_failed", extra={"extra": {"collector_id": collector.id, "message": str(e)}})

    return {"synced": synced, "failed": failed, "logs_counted": sum(counts.values())}


def main() -> None:
    raise SystemExit(run_script("sync_collector_counts", run))


if __name__ == "__main__":
    main()
