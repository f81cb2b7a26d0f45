from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.deps import get_collector_admin
from collection.collectors import CollectorAdmin
from identity.auth_client import AuthServiceError
from security.access import AdminOnly, Staff
from utils.auth import Session

router = APIRouter()


class CollectorCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=6, max_length=20)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=256)
    wards: List[int] = Field(..., min_length=1)


@router.get("/collectors")
def list_collectors(session: Session = Staff, admin: CollectorAdmin = Depends(get_collector_admin)):
    items = admin.list_collectors()
    return {"ok": True, "items": [c.model_dump(mode="json") for c in items], "count": len(items)}


@router.post("/collectors", status_code=201)
def create_collector(body: CollectorCreateRequest, session: Session = AdminOnly, admin: CollectorAdmin = Depends(get_collector_admin)):
    try:
        collector = admin.create_collector(
            name=body.name.strip(),
            phone=body.phone,
            email=body.email.strip().lower(),
            password=body.password,
            wards=body.wards,
        )
    except AuthServiceError as e:
        if e.code == "EMAIL_EXISTS":
            raise HTTPException(status_code=409, detail="email_exists")
        if e.code in ("WEAK_PASSWORD", "INVALID_EMAIL"):
            raise HTTPException(status_code=400, detail=e.code.lower())
        raise HTTPException(status_code=502, detail=f"auth_service_error:{e.code}")
    return {"ok": True, "collector": collector.model_dump(mode="json")}


@router.delete("/collectors/{collector_id}")
def delete_collector(collector_id: str, session: Session = AdminOnly, admin: CollectorAdmin = Depends(get_collector_admin)):
    reset = admin.delete_collector(collector_id)
    return {"ok": True, "deleted": collector_id, "households_unassigned": reset}
