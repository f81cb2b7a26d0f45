from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.deps import get_collector_repo, get_event_workflow, get_household_directory
from collection.events import CollectionEventWorkflow
from collection.households import HouseholdDirectory
from models.schema import CollectionStatus, PaymentMode, PaymentStatus
from repos.collector_repo import CollectorRepository
from security.access import AdminOnly, AnySession, CollectorOnly, HouseholdOnly, Staff
from utils.auth import Session

log = logging.getLogger("greenlink.router.households")
router = APIRouter()


class HouseholdCreateRequest(BaseModel):
    resident_name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    ward: int = Field(..., ge=1)
    phone: str = Field(..., min_length=6, max_length=20)
    monthly_fee: Optional[float] = Field(default=None, ge=0)
    assigned_collector: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class HouseholdUpdateRequest(BaseModel):
    resident_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address: Optional[str] = Field(default=None, min_length=1, max_length=255)
    ward: Optional[int] = Field(default=None, ge=1)
    phone: Optional[str] = Field(default=None, min_length=6, max_length=20)
    monthly_fee: Optional[float] = Field(default=None, ge=0)
    payment_status: Optional[PaymentStatus] = None
    collection_status: Optional[CollectionStatus] = None
    last_collection_date: Optional[date] = None
    assigned_collector: Optional[str] = None
    payment_mode: Optional[PaymentMode] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class CollectionEventRequest(BaseModel):
    status: CollectionStatus
    amount: float = Field(default=0.0, ge=0)
    payment_mode: Optional[PaymentMode] = None
    payment_status: Optional[PaymentStatus] = None
    # Admins record on behalf of a collector; collectors always record as themselves.
    collector_id: Optional[str] = None


class OnlinePaymentRequest(BaseModel):
    amount: float = Field(..., gt=0)


@router.get("/households")
def list_households(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session: Session = Staff,
    directory: HouseholdDirectory = Depends(get_household_directory),
):
    items = directory.list_households(limit=limit, offset=offset)
    return {"ok": True, "items": [h.model_dump(mode="json") for h in items], "count": len(items)}


@router.get("/households/mine")
def my_household(session: Session = HouseholdOnly, directory: HouseholdDirectory = Depends(get_household_directory)):
    return {"ok": True, "household": directory.get_household(session.subject_id).model_dump(mode="json")}


@router.get("/households/assigned")
def assigned_households(session: Session = CollectorOnly, directory: HouseholdDirectory = Depends(get_household_directory)):
    items = directory.households_for_collector(session.subject_id)
    return {"ok": True, "items": [h.model_dump(mode="json") for h in items], "count": len(items)}


@router.get("/households/by-ward/{ward}")
def households_by_ward(ward: int, session: Session = Staff, directory: HouseholdDirectory = Depends(get_household_directory)):
    items = directory.households_in_ward(ward)
    return {"ok": True, "ward": ward, "items": [h.model_dump(mode="json") for h in items], "count": len(items)}


@router.get("/households/{household_id}")
def get_household(household_id: str, session: Session = AnySession, directory: HouseholdDirectory = Depends(get_household_directory)):
    if session.role == "household" and not session.owns_household(household_id):
        raise HTTPException(status_code=403, detail="not_your_household")
    return {"ok": True, "household": directory.get_household(household_id).model_dump(mode="json")}


@router.post("/households", status_code=201)
def create_household(
    body: HouseholdCreateRequest,
    session: Session = AdminOnly,
    directory: HouseholdDirectory = Depends(get_household_directory),
):
    data = body.model_dump(exclude_none=True)
    return {"ok": True, "household": directory.create_household(data).model_dump(mode="json")}


@router.patch("/households/{household_id}")
def update_household(
    household_id: str,
    body: HouseholdUpdateRequest,
    session: Session = AdminOnly,
    directory: HouseholdDirectory = Depends(get_household_directory),
):
    patch = body.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="empty_update")
    return {"ok": True, "household": directory.update_household(household_id, patch).model_dump(mode="json")}


@router.delete("/households/{household_id}")
def delete_household(household_id: str, session: Session = AdminOnly, directory: HouseholdDirectory = Depends(get_household_directory)):
    directory.delete_household(household_id)
    return {"ok": True, "deleted": household_id}


@router.post("/households/{household_id}/collection")
def record_collection(
    household_id: str,
    body: CollectionEventRequest,
    session: Session = Staff,
    events: CollectionEventWorkflow = Depends(get_event_workflow),
    collectors: CollectorRepository = Depends(get_collector_repo),
):
    if body.status == "pending":
        raise HTTPException(status_code=400, detail="invalid_collection_status")

    collector_id = session.subject_id if session.role == "collector" else (body.collector_id or "")
    if not collector_id:
        raise HTTPException(status_code=400, detail="missing_collector_id")
    collector = collectors.get(collector_id)
    if collector is None:
        raise HTTPException(status_code=404, detail="collector_not_found")

    entry = events.record_collection(
        household_id,
        body.status,
        collector_id=collector.id,
        collector_name=collector.name,
        amount=body.amount,
        payment_mode=body.payment_mode,
        payment_status=body.payment_status,
    )
    return {"ok": True, "log": entry.model_dump(mode="json")}


@router.post("/households/{household_id}/pay-online")
def pay_online(
    household_id: str,
    body: OnlinePaymentRequest,
    session: Session = HouseholdOnly,
    events: CollectionEventWorkflow = Depends(get_event_workflow),
):
    if not session.owns_household(household_id):
        raise HTTPException(status_code=403, detail="not_your_household")
    entry = events.pay_online(household_id, amount=body.amount)
    return {"ok": True, "log": entry.model_dump(mode="json")}
