from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.deps import get_report_service
from reports.daily import ReportService
from security.access import AdminOnly
from utils.auth import Session
from utils.clock import local_today

router = APIRouter()


@router.get("/reports/daily")
def daily_report(
    day: Optional[date] = Query(default=None, alias="date"),
    session: Session = AdminOnly,
    reports: ReportService = Depends(get_report_service),
):
    return {"ok": True, "summary": reports.daily_summary(day or local_today())}


@router.get("/reports/weekly")
def weekly_report(
    day: Optional[date] = Query(default=None, alias="date"),
    session: Session = AdminOnly,
    reports: ReportService = Depends(get_report_service),
):
    return {"ok": True, "days": reports.weekly_trend(day or local_today())}
