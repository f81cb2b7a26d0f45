"""
Wipe all four collections, then seed the twelve-collector overlapping pool and
sixty unassigned households. Assign routes from the admin dashboard afterwards.

Usage:
    python -m maintenance.reset_and_seed
"""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from config.settings import settings
from identity.auth_client import IdentityClient
from maintenance.runner import clear_collection, run_script
from maintenance.seed_catalog import (
    BASE_LAT,
    BASE_LNG,
    FIRST_NAMES,
    HOUSE_NAMES,
    LAST_NAMES,
    POOL_COLLECTORS,
    POOL_HOUSEHOLD_COUNT,
    WARD_COUNT,
)
from maintenance.seed_data import seed_collectors
from models.entities import Household
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from storage.firestore_client import get_firestore_client

log = logging.getLogger("greenlink.maintenance.reset_and_seed")


def random_household(rng: random.Random) -> Household:
    ward = rng.randint(1, WARD_COUNT)
    return Household(
        resident_name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        address=f"{rng.choice(HOUSE_NAMES)}, Ward {ward}",
        ward=ward,
        phone=f"984{rng.randint(1000000, 9999999)}",
        monthly_fee=settings.DEFAULT_MONTHLY_FEE,
        lat=round(BASE_LAT + rng.random() * 0.1, 6),
        lng=round(BASE_LNG + rng.random() * 0.1, 6),
    )


def run(db: Any = None, identity: Optional[IdentityClient] = None, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    db = db or get_firestore_client()
    rng = rng or random.Random()

    cleared = {
        name: clear_collection(db, name)
        for name in (
            settings.COLLECTION_HOUSEHOLDS,
            settings.COLLECTION_COLLECTORS,
            settings.COLLECTION_LOGS,
            settings.COLLECTION_ROUTES,
        )
    }

    seeded = seed_collectors(POOL_COLLECTORS, identity or IdentityClient(), CollectorRepository(db=db))

    households = HouseholdRepository(db=db)
    created = 0
    for _ in range(POOL_HOUSEHOLD_COUNT):
        try:
            households.create(random_household(rng))
            created += 1
        except Exception as e:
            log.warning("household_seed_failed", extra={"extra": {"message": str(e)}})

    return {"cleared": cleared, "collectors": len(seeded), "households": created}


def main() -> None:
    raise SystemExit(run_script("reset_and_seed", run))


if __name__ == "__main__":
    main()
