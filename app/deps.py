from __future__ import annotations

# Request-scoped providers. Tests swap these through app.dependency_overrides.

from fastapi import Depends

from collection.assignment import AssignmentWorkflow
from collection.collectors import CollectorAdmin
from collection.events import CollectionEventWorkflow
from collection.households import HouseholdDirectory
from identity.auth_client import IdentityClient
from reports.daily import ReportService
from repos.collection_log_repo import CollectionLogRepository
from repos.collector_repo import CollectorRepository
from repos.household_repo import HouseholdRepository
from repos.route_repo import RouteRepository
from repos.session_repo import SessionRepository


def get_session_repo() -> SessionRepository:
    return SessionRepository()


def get_household_repo() -> HouseholdRepository:
    return HouseholdRepository()


def get_collector_repo() -> CollectorRepository:
    return CollectorRepository()


def get_route_repo() -> RouteRepository:
    return RouteRepository()


def get_log_repo() -> CollectionLogRepository:
    return CollectionLogRepository()


def get_identity_client() -> IdentityClient:
    return IdentityClient()


def get_household_directory(repo: HouseholdRepository = Depends(get_household_repo)) -> HouseholdDirectory:
    return HouseholdDirectory(repo=repo)


def get_assignment_workflow(
    routes: RouteRepository = Depends(get_route_repo),
    households: HouseholdRepository = Depends(get_household_repo),
    collectors: CollectorRepository = Depends(get_collector_repo),
) -> AssignmentWorkflow:
    return AssignmentWorkflow(routes=routes, households=households, collectors=collectors)


def get_event_workflow(
    households: HouseholdRepository = Depends(get_household_repo),
    logs: CollectionLogRepository = Depends(get_log_repo),
    collectors: CollectorRepository = Depends(get_collector_repo),
) -> CollectionEventWorkflow:
    return CollectionEventWorkflow(households=households, logs=logs, collectors=collectors)


def get_collector_admin(
    collectors: CollectorRepository = Depends(get_collector_repo),
    households: HouseholdRepository = Depends(get_household_repo),
) -> CollectorAdmin:
    # The identity client is built on first sign-up, so listing works without auth config.
    return CollectorAdmin(collectors=collectors, households=households)


def get_report_service(
    households: HouseholdRepository = Depends(get_household_repo),
    logs: CollectionLogRepository = Depends(get_log_repo),
) -> ReportService:
    return ReportService(households=households, logs=logs)
