"""
List the configured collections and how many documents each holds.

Usage:
    python -m maintenance.debug_collections
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from config.settings import settings
from maintenance.runner import run_script
from storage.firestore_client import get_firestore_client

log = logging.getLogger("greenlink.maintenance.debug_collections")


def configured_collections():
    return (
        settings.COLLECTION_HOUSEHOLDS,
        settings.COLLECTION_COLLECTORS,
        settings.COLLECTION_ROUTES,
        settings.COLLECTION_LOGS,
        settings.COLLECTION_SESSIONS,
    )


def run(db: Optional[Any] = None) -> Dict[str, Any]:
    db = db or get_firestore_client()
    counts: Dict[str, Any] = {}
    for name in configured_collections():
        try:
            counts[name] = sum(1 for _ in db.collection(name).list_documents())
        except Exception as e:
            counts[name] = None
            log.warning("collection_probe_failed", extra={"extra": {"collection": name, "message": str(e)}})
            continue
        log.info("collection_probe", extra={"extra": {"collection": name, "documents": counts[name]}})
    return {"database": settings.FIRESTORE_DATABASE_ID, "collections": counts}


def main() -> None:
    raise SystemExit(run_script("debug_collections", run))


if __name__ == "__main__":
    main()
