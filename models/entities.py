from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.schema import (
    UNASSIGNED,
    CollectionStatus,
    CollectorStatus,
    LogStatus,
    PaymentMode,
    PaymentStatus,
    RouteStatus,
)

log = logging.getLogger("greenlink.models")

# Bookkeeping fields stamped by repositories; never part of a record.
_META_FIELDS = {"created_at", "updated_at"}


class StoredRecord(BaseModel):
    """
    Base for every document-backed record.

    The document id lives outside the stored payload: `from_doc` injects it and
    `to_doc` strips it. Fields the store returns that the record does not
    declare are logged once per read and dropped.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""

    @classmethod
    def from_doc(cls, doc_id: str, data: Optional[Dict[str, Any]]):
        payload = dict(data or {})
        unknown = set(payload) - set(cls.model_fields) - _META_FIELDS
        if unknown:
            log.warning(
                "unknown_fields_ignored",
                extra={"extra": {"event": "unknown_fields_ignored", "record": cls.__name__, "id": doc_id, "fields": sorted(unknown)}},
            )
        payload["id"] = doc_id
        return cls.model_validate(payload)

    def to_doc(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude={"id"})


class Household(StoredRecord):
    resident_name: str
    address: str
    ward: int
    phone: str
    monthly_fee: float = 100.0
    payment_status: PaymentStatus = "pending"
    collection_status: CollectionStatus = "pending"
    last_collection_date: Optional[dt.date] = None
    assigned_collector: str = UNASSIGNED
    payment_mode: PaymentMode = "none"
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("last_collection_date", mode="before")
    @classmethod
    def _parse_collection_date(cls, v: Any) -> Any:
        # Legacy rows carry display sentinels ("—", "none", "") instead of null.
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            try:
                return dt.date.fromisoformat(v.strip())
            except ValueError:
                return None
        return v

    @field_validator("assigned_collector", mode="before")
    @classmethod
    def _default_assignment(cls, v: Any) -> Any:
        return v or UNASSIGNED


class Collector(StoredRecord):
    name: str
    phone: str
    email: str = ""
    wards: List[int] = Field(default_factory=list)
    status: CollectorStatus = "active"
    total_collections: int = 0
    avatar: str = ""

    def covers(self, ward: int) -> bool:
        return ward in self.wards


class Route(StoredRecord):
    name: str
    collector_id: str
    ward: int
    status: RouteStatus = "active"
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    total_houses: int = 0
    collected_houses: int = 0
    date: dt.date


class CollectionLog(StoredRecord):
    collector_id: str
    collector_name: str
    household_id: str
    resident_name: str
    timestamp: dt.datetime
    date: dt.date
    location: str = ""
    status: LogStatus
    amount_collected: float = 0.0
    payment_mode: PaymentMode = "none"
    # Set once the collector's total has been incremented for this household and day.
    counted: bool = False
