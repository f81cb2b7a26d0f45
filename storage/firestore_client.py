from __future__ import annotations

from functools import lru_cache

from google.cloud import firestore

from config.settings import settings


@lru_cache(maxsize=1)
def get_firestore_client() -> firestore.Client:
    """One client per process; repositories built per request share it."""
    project = settings.FIRESTORE_PROJECT_ID or None  # None falls back to the ADC project
    return firestore.Client(project=project, database=settings.FIRESTORE_DATABASE_ID)
