from __future__ import annotations

import datetime as dt
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.deps import get_assignment_workflow
from collection.assignment import AssignmentWorkflow
from security.access import AdminOnly, CollectorOnly, Staff
from utils.auth import Session
from utils.clock import local_today

router = APIRouter()


class AssignRouteRequest(BaseModel):
    collector_id: str = Field(..., min_length=1, max_length=128)
    ward: int = Field(..., ge=1)
    date: Optional[dt.date] = None


@router.get("/routes")
def list_routes(
    day: Optional[date] = Query(default=None, alias="date"),
    session: Session = AdminOnly,
    workflow: AssignmentWorkflow = Depends(get_assignment_workflow),
):
    items = workflow.list_routes(day)
    return {"ok": True, "items": [r.model_dump(mode="json") for r in items], "count": len(items)}


@router.post("/routes", status_code=201)
def assign_route(body: AssignRouteRequest, session: Session = AdminOnly, workflow: AssignmentWorkflow = Depends(get_assignment_workflow)):
    route = workflow.assign_route(body.collector_id, body.ward, body.date or local_today())
    return {"ok": True, "route": route.model_dump(mode="json")}


@router.get("/routes/today")
def my_route_today(session: Session = CollectorOnly, workflow: AssignmentWorkflow = Depends(get_assignment_workflow)):
    route = workflow.get_daily_assignment(session.subject_id, local_today())
    return {"ok": True, "route": route.model_dump(mode="json") if route else None}


@router.get("/routes/assignment")
def daily_assignment(
    collector_id: str,
    day: Optional[date] = Query(default=None, alias="date"),
    session: Session = AdminOnly,
    workflow: AssignmentWorkflow = Depends(get_assignment_workflow),
):
    route = workflow.get_daily_assignment(collector_id, day or local_today())
    return {"ok": True, "route": route.model_dump(mode="json") if route else None}


@router.post("/routes/{route_id}/complete")
def complete_route(route_id: str, session: Session = Staff, workflow: AssignmentWorkflow = Depends(get_assignment_workflow)):
    if session.role == "collector":
        route = workflow.routes.get(route_id)
        if route is not None and route.collector_id != session.subject_id:
            raise HTTPException(status_code=403, detail="not_your_route")
    route = workflow.complete_route(route_id)
    return {"ok": True, "route": route.model_dump(mode="json")}


@router.delete("/routes/{route_id}")
def delete_route(
    route_id: str,
    ward: Optional[int] = Query(default=None, ge=1),
    session: Session = AdminOnly,
    workflow: AssignmentWorkflow = Depends(get_assignment_workflow),
):
    reset = workflow.delete_route(route_id, ward)
    return {"ok": True, "deleted": route_id, "households_unassigned": reset}
