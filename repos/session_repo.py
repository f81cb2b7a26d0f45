from __future__ import annotations

import time
from typing import Any, Dict, Optional

from google.cloud.firestore import Client

from config.settings import settings
from storage.firestore_client import get_firestore_client
from utils.ids import token_hash


class SessionRepository:
    """
    Server-issued bearer sessions.

    Session doc id = sha256_hex(token); the raw token is never stored.
    """

    def __init__(self, db: Optional[Client] = None, collection: Optional[str] = None):
        self.db = db or get_firestore_client()
        self.collection = collection or settings.COLLECTION_SESSIONS

    def create_session(
        self,
        token: str,
        user_id: str,
        role: str,
        subject_id: str,
        email: str,
        ttl_sec: int,
    ) -> Dict[str, Any]:
        now = int(time.time())
        session_id = token_hash(token)
        payload = {
            "user_id": user_id,
            "role": role,
            "subject_id": subject_id,
            "email": email,
            "created_at": now,
            "expires_at": now + int(ttl_sec),
            "revoked_at": None,
        }
        self.db.collection(self.collection).document(session_id).set(payload, merge=False)
        return {"session_id": session_id, **payload}

    def get_session_by_token(self, token: str) -> Optional[Dict[str, Any]]:
        session_id = token_hash(token)
        snap = self.db.collection(self.collection).document(session_id).get()
        if not snap.exists:
            return None
        d = snap.to_dict() or {}
        d["session_id"] = session_id
        return d

    def revoke_session(self, token: str) -> None:
        self.db.collection(self.collection).document(token_hash(token)).set(
            {"revoked_at": int(time.time())}, merge=True
        )
