from __future__ import annotations

from datetime import date
from typing import Tuple

from models.entities import Household
from models.schema import PENDING


def is_current(household: Household, today: date) -> bool:
    return household.last_collection_date is not None and household.last_collection_date == today


def display_status(household: Household, today: date) -> Tuple[str, str]:
    """
    (collection_status, payment_status) as they should be shown on `today`.

    Stored statuses describe the day of the last collection event only. Any other
    day (including a household never visited) reads as pending on both axes.
    Read-time projection: nothing is written back.
    """
    if is_current(household, today):
        return household.collection_status, household.payment_status
    return PENDING, PENDING


def present(household: Household, today: date) -> Household:
    collection_status, payment_status = display_status(household, today)
    return household.model_copy(
        update={"collection_status": collection_status, "payment_status": payment_status}
    )
