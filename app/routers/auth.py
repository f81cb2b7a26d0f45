from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.deps import get_collector_repo, get_household_directory, get_identity_client, get_session_repo
from collection.households import HouseholdDirectory
from config.settings import settings
from identity.auth_client import AuthServiceError, IdentityClient
from repos.collector_repo import CollectorRepository
from repos.session_repo import SessionRepository
from security.access import AnySession
from utils.auth import Session, mint_bearer_token

log = logging.getLogger("greenlink.router.auth")
router = APIRouter()

_BAD_CREDENTIALS = {"EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "INVALID_EMAIL", "USER_DISABLED"}


class LoginBody(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=256)


class ResidentLoginBody(BaseModel):
    phone: str = Field(..., min_length=6, max_length=32)


def _issue(sessions: SessionRepository, user_id: str, role: str, subject_id: str, email: str = "") -> dict:
    token = mint_bearer_token()
    sessions.create_session(
        token=token,
        user_id=user_id,
        role=role,
        subject_id=subject_id,
        email=email,
        ttl_sec=settings.SESSION_TTL_SEC,
    )
    log.info("auth_session_issued", extra={"extra": {"user_id": user_id, "role": role}})
    return {
        "ok": True,
        "token": token,
        "role": role,
        "user_id": user_id,
        "subject_id": subject_id,
        "expires_in_sec": settings.SESSION_TTL_SEC,
    }


@router.post("/auth/login")
def login(
    body: LoginBody,
    identity: IdentityClient = Depends(get_identity_client),
    collectors: CollectorRepository = Depends(get_collector_repo),
    sessions: SessionRepository = Depends(get_session_repo),
):
    email = body.email.strip().lower()
    try:
        account = identity.sign_in(email, body.password)
    except AuthServiceError as e:
        if e.code in _BAD_CREDENTIALS:
            raise HTTPException(status_code=401, detail="invalid_credentials")
        raise HTTPException(status_code=502, detail=f"auth_service_error:{e.code}")

    user_id = account["user_id"]
    if email in settings.admin_emails():
        return _issue(sessions, user_id, "admin", user_id, email)

    collector = collectors.get(user_id)
    if collector is None:
        log.info("auth_no_role", extra={"extra": {"user_id": user_id}})
        raise HTTPException(status_code=403, detail="no_role_for_user")
    if collector.status != "active":
        raise HTTPException(status_code=403, detail="collector_inactive")
    return _issue(sessions, user_id, "collector", collector.id, email)


@router.post("/auth/resident")
def resident_login(
    body: ResidentLoginBody,
    directory: HouseholdDirectory = Depends(get_household_directory),
    sessions: SessionRepository = Depends(get_session_repo),
):
    household = directory.find_by_phone(body.phone)
    if household is None:
        raise HTTPException(status_code=404, detail="household_not_found")
    out = _issue(sessions, household.id, "household", household.id)
    out["household"] = household.model_dump(mode="json")
    return out


@router.post("/auth/logout")
def logout(session: Session = AnySession, sessions: SessionRepository = Depends(get_session_repo)):
    sessions.revoke_session(session.token)
    log.info("auth_session_revoked", extra={"extra": {"user_id": session.user_id, "role": session.role}})
    return {"ok": True}


@router.get("/auth/me")
def me(session: Session = AnySession):
    return {
        "ok": True,
        "user_id": session.user_id,
        "role": session.role,
        "subject_id": session.subject_id,
        "email": session.email,
    }
