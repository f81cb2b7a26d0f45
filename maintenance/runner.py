from __future__ import annotations

import logging
from typing import Any, Callable

from config.settings import settings
from ops.tracing import Stopwatch
from ops.structured_logger import setup_logging

log = logging.getLogger("greenlink.maintenance")

EXIT_CONFIG_MISSING = 2


def run_script(name: str, job: Callable[[], Any]) -> int:
    """
    Shared entry point for maintenance scripts.

    Missing configuration is fatal (exit 2). Anything raised by the job itself is
    logged and the script still exits 0; per-item failures are the job's to count.
    """
    setup_logging(settings.LOG_LEVEL)

    missing = settings.missing_maintenance_settings()
    if missing:
        log.error(
            "maintenance_config_missing",
            extra={"extra": {"event": "maintenance_config_missing", "script": name, "missing": missing}},
        )
        return EXIT_CONFIG_MISSING

    t = Stopwatch()
    log.info("maintenance_start", extra={"extra": {"event": "maintenance_start", "script": name}})
    try:
        result = job()
    except Exception as e:
        log.error(
            "maintenance_failed",
            extra={
                "extra": {
                    "event": "maintenance_failed",
                    "script": name,
                    "error_type": type(e).__name__,
                    "message": str(e),
                    "duration_ms": t.elapsed_ms(),
                }
            },
            exc_info=True,
        )
        return 0

    log.info(
        "maintenance_complete",
        extra={"extra": {"event": "maintenance_complete", "script": name, "result": result, "duration_ms": t.elapsed_ms()}},
    )
    return 0


def clear_collection(db: Any, collection: str) -> dict:
    """Delete every document in `collection`, continuing past individual failures."""
    deleted = 0
    failed = 0
    # Materialize refs first; deleting while paging would skip documents.
    for ref in list(db.collection(collection).list_documents()):
        try:
            ref.delete()
            deleted += 1
        except Exception as e:
            failed += 1
            log.warning(
                "delete_failed",
                extra={"extra": {"event": "delete_failed", "collection": collection, "id": ref.id, "message": str(e)}},
            )
    log.info("collection_cleared", extra={"extra": {"event": "collection_cleared", "collection": collection, "deleted": deleted, "failed": failed}})
    return {"deleted": deleted, "failed": failed}
