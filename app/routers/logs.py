from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.deps import get_log_repo
from config.settings import settings
from repos.collection_log_repo import CollectionLogRepository
from security.access import AdminOnly, HouseholdOnly
from utils.auth import Session

router = APIRouter()


@router.get("/logs")
def list_logs(
    limit: int = Query(default=0, ge=0, le=500),
    session: Session = AdminOnly,
    logs: CollectionLogRepository = Depends(get_log_repo),
):
    items = logs.list_recent(limit=limit or settings.LOG_LIST_LIMIT)
    return {"ok": True, "items": [e.model_dump(mode="json") for e in items], "count": len(items)}


@router.get("/logs/mine")
def my_logs(session: Session = HouseholdOnly, logs: CollectionLogRepository = Depends(get_log_repo)):
    items = logs.list_for_household(session.subject_id, limit=settings.LOG_LIST_LIMIT)
    return {"ok": True, "items": [e.model_dump(mode="json") for e in items], "count": len(items)}
