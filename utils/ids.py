from __future__ import annotations

import hashlib
import re
import uuid
from datetime import date


def new_document_id() -> str:
    return uuid.uuid4().hex


def route_id_for(day: date, ward: int) -> str:
    # Deterministic: one route document per (date, ward), enforced by create-if-absent.
    return f"{day.isoformat()}_w{int(ward)}"


def token_hash(token: str) -> str:
    return hashlib.sha256((token or "").encode("utf-8")).hexdigest()


def avatar_label(name: str) -> str:
    letters = re.sub(r"[^A-Za-z]", "", name or "")
    return letters[:2].upper() or "U"


def normalize_phone(phone: str) -> str:
    return re.sub(r"[^\d+]", "", phone or "")
