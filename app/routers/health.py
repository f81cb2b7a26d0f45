from __future__ import annotations

import os
import time
from typing import Any, Dict

from fastapi import APIRouter

from config.settings import settings

router = APIRouter()


def _firestore_probe(timeout_s: float = 0.20) -> Dict[str, Any]:
    """
    Read-only, bounded-time Firestore connectivity probe.
    - No PII
    - No writes
    - Uses a fixed doc path.
    """
    try:
        from google.cloud import firestore  # type: ignore
    except Exception as e:
        return {"ok": False, "error_type": type(e).__name__, "message": str(e)}

    try:
        t0 = time.time()
        db = firestore.Client(project=settings.FIRESTORE_PROJECT_ID or None, database=settings.FIRESTORE_DATABASE_ID)
        db.collection(settings.COLLECTION_HOUSEHOLDS).document("healthz").get(timeout=timeout_s)
        dt_ms = int((time.time() - t0) * 1000)
        return {"ok": True, "latency_ms": dt_ms}
    except Exception as e:
        return {"ok": False, "error_type": type(e).__name__, "message": str(e)}


@router.get("/health")
def health():
    rev = os.getenv("K_REVISION") or ""
    svc = os.getenv("K_SERVICE") or "greenlink-api"

    fs = _firestore_probe()

    return {
        "ok": bool(fs.get("ok", False)),
        "service": "greenlink-api",
        "cloudrun_service": svc,
        "revision": rev,
        "environment": settings.ENVIRONMENT,
        "timezone": settings.LOCAL_TIMEZONE,
        "firestore_ok": bool(fs.get("ok", False)),
        "firestore": fs,
        "time_unix": time.time(),
    }
