"""
Seed the base pool: four collectors (with auth identities) and sixteen
households, each assigned to the collector covering its ward.

Usage:
    python -m maintenance.seed_data
"""
from __future__ import annotations

import logging
import random
import re
from datetime import date
from typing import Any, Dict, List, Optional

from collection.errors import ConflictError
from config.settings import settings
from identity.auth_client import IdentityClient
from maintenance.runner import run_script
from maintenance.seed_catalog import BASE_COLLECTORS, BASE_HOUSEHOLDS, BASE_LAT, BASE_LNG
from models.entities import Collector, Household
from models.schema import UNASSIGNED
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from utils.clock import local_today
from utils.ids import avatar_label

log = logging.getLogger("greenlink.maintenance.seed_data")


def seed_collectors(
    entries: List[Dict[str, Any]],
    identity: IdentityClient,
    collectors: CollectorRepository,
) -> List[Collector]:
    """Create (or reuse) an auth identity and a collector document per entry. Failures are skipped."""
    seeded: List[Collector] = []
    for entry in entries:
        try:
            user_id = identity.ensure_identity(entry["email"], settings.SEED_PASSWORD, entry["name"])
            collector = Collector(
                id=user_id,
                name=entry["name"],
                phone=entry["phone"],
                email=entry["email"],
                wards=list(entry["wards"]),
                status="active",
                total_collections=int(entry.get("total_collections", 0)),
                avatar=avatar_label(entry["name"]),
            )
            try:
                collectors.create(collector)
                log.info("collector_seeded", extra={"extra": {"collector_id": user_id, "email": entry["email"]}})
            except ConflictError:
                log.info("collector_exists", extra={"extra": {"collector_id": user_id, "email": entry["email"]}})
            seeded.append(collector)
        except Exception as e:
            log.warning(
                "collector_seed_failed",
                extra={"extra": {"email": entry.get("email"), "error_type": type(e).__name__, "message": str(e)}},
            )
    return seeded


def ward_from_address(address: str) -> int:
    m = re.search(r"Ward (\d+)", address or "")
    return int(m.group(1)) if m else 1


def seed_base_households(
    seeded: List[Collector],
    households: HouseholdRepository,
    today: date,
    rng: Optional[random.Random] = None,
) -> int:
    rng = rng or random.Random()
    created = 0
    for i, (name, address) in enumerate(BASE_HOUSEHOLDS):
        ward = ward_from_address(address)
        owner = next((c for c in seeded if c.covers(ward)), None)
        household = Household(
            resident_name=name,
            address=address,
            ward=ward,
            phone=f"98470{54300 + i}",
            monthly_fee=settings.DEFAULT_MONTHLY_FEE,
            payment_status="pending" if i % 5 == 0 else ("overdue" if i % 7 == 0 else "paid"),
            collection_status="pending" if i % 10 == 0 else "collected",
            last_collection_date=today,
            assigned_collector=owner.id if owner else UNASSIGNED,
            payment_mode="none",
            lat=round(BASE_LAT + rng.random() * 0.05, 6),
            lng=round(BASE_LNG + rng.random() * 0.05, 6),
        )
        try:
            households.create(household)
            created += 1
        except Exception as e:
            log.warning("household_seed_failed", extra={"extra": {"resident_name": name, "message": str(e)}})
    return created


def run(
    identity: Optional[IdentityClient] = None,
    collectors: Optional[CollectorRepository] = None,
    households: Optional[HouseholdRepository] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    seeded = seed_collectors(BASE_COLLECTORS, identity or IdentityClient(), collectors or CollectorRepository())
    created = seed_base_households(seeded, households or HouseholdRepository(), today or local_today())
    return {"collectors": len(seeded), "households": created}


def main() -> None:
    raise SystemExit(run_script("seed_data", run))


if __name__ == "__main__":
    main()
