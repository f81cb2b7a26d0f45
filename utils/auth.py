from __future__ import annotations

from dataclasses import dataclass
import secrets
import time

from fastapi import Depends, HTTPException, Request

from app.deps import get_session_repo
from repos.session_repo import SessionRepository


@dataclass(frozen=True)
class Session:
    """Who is calling. Resolved per request from the bearer token; never cached globally."""

    token: str
    user_id: str
    role: str
    subject_id: str
    email: str = ""

    def owns_household(self, household_id: str) -> bool:
        return self.role == "household" and self.subject_id == household_id


def mint_bearer_token() -> str:
    return secrets.token_urlsafe(32)


def parse_bearer_token(request: Request) -> str:
    h = request.headers.get("Authorization", "").strip()
    if not h:
        raise HTTPException(status_code=401, detail="missing_auth")
    parts = h.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise HTTPException(status_code=401, detail="invalid_auth_header")
    return parts[1].strip()


def require_session(request: Request, sessions: SessionRepository = Depends(get_session_repo)) -> Session:
    """
    Returns the Session for a valid non-expired, non-revoked bearer token.
    """
    token = parse_bearer_token(request)
    s = sessions.get_session_by_token(token)
    if not s:
        raise HTTPException(status_code=401, detail="invalid_session")
    if s.get("revoked_at"):
        raise HTTPException(status_code=401, detail="revoked_session")
    now = int(time.time())
    exp = int(s.get("expires_at") or 0)
    if exp <= now:
        raise HTTPException(status_code=401, detail="expired_session")
    return Session(
        token=token,
        user_id=str(s.get("user_id") or ""),
        role=str(s.get("role") or ""),
        subject_id=str(s.get("subject_id") or ""),
        email=str(s.get("email") or ""),
    )
