from __future__ import annotations

from typing import List, Set

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Core
    ENVIRONMENT: str = Field(default="production")
    LOG_LEVEL: str = Field(default="INFO")
    FIRESTORE_PROJECT_ID: str = Field(default="")
    FIRESTORE_DATABASE_ID: str = Field(default="(default)")

    # Collection ids (one per logical store)
    COLLECTION_HOUSEHOLDS: str = Field(default="households")
    COLLECTION_COLLECTORS: str = Field(default="collectors")
    COLLECTION_ROUTES: str = Field(default="routes")
    COLLECTION_LOGS: str = Field(default="collection_logs")
    COLLECTION_SESSIONS: str = Field(default="auth_sessions")

    # Hosted auth (Identity Toolkit email/password)
    AUTH_ENDPOINT: str = Field(default="https://identitytoolkit.googleapis.com/v1")
    AUTH_API_KEY: str = Field(default="")
    ADMIN_EMAILS: str = Field(default="")  # comma-separated
    SESSION_TTL_SEC: int = Field(default=7 * 24 * 60 * 60)

    # Business rules
    LOCAL_TIMEZONE: str = Field(default="Asia/Kolkata")
    HOUSEHOLD_PAGE_SIZE: int = Field(default=100)
    LOG_LIST_LIMIT: int = Field(default=100)
    DEFAULT_MONTHLY_FEE: float = Field(default=100.0)

    # Maintenance
    SEED_PASSWORD: str = Field(default="password123")

    def admin_emails(self) -> Set[str]:
        return {x.strip().lower() for x in (self.ADMIN_EMAILS or "").split(",") if x.strip()}

    def missing_maintenance_settings(self) -> List[str]:
        required = (
            "FIRESTORE_PROJECT_ID",
            "FIRESTORE_DATABASE_ID",
            "AUTH_API_KEY",
            "COLLECTION_HOUSEHOLDS",
            "COLLECTION_COLLECTORS",
            "COLLECTION_ROUTES",
            "COLLECTION_LOGS",
        )
        return [name for name in required if not str(getattr(self, name) or "").strip()]


settings = Settings()
