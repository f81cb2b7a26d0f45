from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from collection.assignment import AssignmentWorkflow
from collection.events import CollectionEventWorkflow
from collection.households import HouseholdDirectory
from models.entities import Collector, Household
from repos.collection_log_repo import CollectionLogRepository
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from repos.route_repo import RouteRepository
from repos.session_repo import SessionRepository
from tests.fake_firestore import FakeFirestore

TZ = ZoneInfo("Asia/Kolkata")
TODAY = date(2025, 3, 10)
YESTERDAY = date(2025, 3, 9)
NOW = datetime(2025, 3, 10, 9, 30, tzinfo=TZ)


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def households(db):
    return HouseholdRepository(db=db)


@pytest.fixture
def collectors(db):
    return CollectorRepository(db=db)


@pytest.fixture
def routes(db):
    return RouteRepository(db=db)


@pytest.fixture
def logs(db):
    return CollectionLogRepository(db=db)


@pytest.fixture
def sessions(db):
    return SessionRepository(db=db)


@pytest.fixture
def directory(households):
    return HouseholdDirectory(repo=households, today=lambda: TODAY)


@pytest.fixture
def events(households, logs, collectors):
    return CollectionEventWorkflow(households=households, logs=logs, collectors=collectors, now=lambda: NOW)


@pytest.fixture
def assignment(routes, households, collectors):
    return AssignmentWorkflow(routes=routes, households=households, collectors=collectors, now=lambda: NOW)


@pytest.fixture
def ravi(collectors):
    return collectors.create(
        Collector(id="c-ravi", name="Ravi Kumar", phone="9847011111", email="ravi@greenlink.test", wards=[1, 2])
    )


@pytest.fixture
def anita(collectors):
    return collectors.create(
        Collector(id="c-anita", name="Anita Das", phone="9847022222", email="anita@greenlink.test", wards=[3])
    )


def make_household(repo, **overrides):
    fields = {
        "resident_name": "Lakshmi Nair",
        "address": "Rose Villa, Ward 1",
        "ward": 1,
        "phone": "9847054300",
    }
    fields.update(overrides)
    return repo.create(Household(**fields))
