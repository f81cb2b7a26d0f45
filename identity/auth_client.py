from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from config.settings import settings

log = logging.getLogger("greenlink.identity")


def _email_hint(email: str) -> str:
    email = (email or "").strip()
    if "@" not in email:
        return ""
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"


class AuthServiceError(Exception):
    """Rejection from the hosted auth service; `code` is the provider's error message (e.g. EMAIL_EXISTS)."""

    def __init__(self, code: str, status_code: int = 0):
        super().__init__(code)
        self.code = code
        self.status_code = status_code


class IdentityClient:
    """
    Email/password identities on the hosted auth service (Identity Toolkit REST).

    Only two calls are needed: sign-in to resolve a user id for a session, and
    sign-up to pair a new collector with an identity.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key or settings.AUTH_API_KEY
        if not self.api_key:
            raise RuntimeError("AUTH_API_KEY not configured")
        self.endpoint = (endpoint or settings.AUTH_ENDPOINT).rstrip("/")
        self.http = http or httpx.Client(timeout=20.0)

    def _call(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.endpoint}/accounts:{action}"
        t0 = time.time()
        r = self.http.post(url, params={"key": self.api_key}, json=payload)
        try:
            data = r.json()
        except ValueError:
            data = {"error": {"message": f"non_json_response:{r.status_code}"}}
        dt_ms = int((time.time() - t0) * 1000)

        if r.status_code >= 400 or "error" in data:
            # Messages look like "EMAIL_EXISTS" or "WEAK_PASSWORD : Password should be ...".
            message = str((data.get("error") or {}).get("message") or f"http_{r.status_code}")
            code = message.split(":", 1)[0].strip()
            log.warning(
                "auth_call_failed",
                extra={"extra": {"event": "auth_call_failed", "action": action, "status_code": r.status_code, "code": code, "latency_ms": dt_ms}},
            )
            raise AuthServiceError(code, status_code=r.status_code)

        log.info(
            "auth_call_ok",
            extra={"extra": {"event": "auth_call_ok", "action": action, "status_code": r.status_code, "latency_ms": dt_ms}},
        )
        return data

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        data = self._call("signInWithPassword", {"email": email, "password": password, "returnSecureToken": True})
        log.info("auth_sign_in", extra={"extra": {"event": "auth_sign_in", "email": _email_hint(email)}})
        return {"user_id": str(data.get("localId") or ""), "email": str(data.get("email") or email)}

    def sign_up(self, email: str, password: str, display_name: str = "") -> str:
        payload: Dict[str, Any] = {"email": email, "password": password, "returnSecureToken": False}
        if display_name:
            payload["displayName"] = display_name
        data = self._call("signUp", payload)
        user_id = str(data.get("localId") or "")
        log.info("auth_sign_up", extra={"extra": {"event": "auth_sign_up", "email": _email_hint(email), "user_id": user_id}})
        return user_id

    def ensure_identity(self, email: str, password: str, display_name: str = "") -> str:
        """Sign up, or sign in when the email is already registered. Returns the user id."""
        try:
            return self.sign_up(email, password, display_name)
        except AuthServiceError as e:
            if e.code != "EMAIL_EXISTS":
                raise
        return self.sign_in(email, password)["user_id"]
