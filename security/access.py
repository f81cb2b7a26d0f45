from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, HTTPException

from utils.auth import Session, require_session

log = logging.getLogger("greenlink.access")


def require_roles(*roles: str) -> Callable[..., Session]:
    allowed = set(roles)

    def _check(session: Session = Depends(require_session)) -> Session:
        if session.role not in allowed:
            log.warning(
                "role_denied",
                extra={"extra": {"event": "role_denied", "role": session.role, "allowed": sorted(allowed), "user_id": session.user_id}},
            )
            raise HTTPException(status_code=403, detail="role_not_allowed")
        return session

    return _check


AdminOnly = Depends(require_roles("admin"))
CollectorOnly = Depends(require_roles("collector"))
HouseholdOnly = Depends(require_roles("household"))
Staff = Depends(require_roles("admin", "collector"))
AnySession = Depends(require_session)
