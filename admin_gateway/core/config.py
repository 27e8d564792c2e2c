from __future__ import annotations

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _base_url() -> Optional[str]:
    # Preview deployments point at their own Admin API
    for key in ("PREVIEW_ADMIN_API", "ADMIN_API"):
        value = (os.getenv(key) or "").strip()
        if value:
            return value.rstrip("/")
    return None


class Settings(BaseModel):
    # Upstream Admin API. None is a configuration error surfaced per request.
    ADMIN_API: Optional[str] = _base_url()

    # Service credential attached to superadmin-only calls
    ADMIN_API_TOKEN: str = os.getenv("ADMIN_API_TOKEN", "")

    # Comma-separated superadmin allow-list, read once per process
    SUPERADMIN_EMAILS: str = os.getenv("SUPERADMIN_EMAILS", "")
    POLICY_BACKEND: str = os.getenv("POLICY_BACKEND", "env")

    # Upstream timeouts (seconds)
    IDENTITY_TIMEOUT_SECONDS: float = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", "5"))
    UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")

    @property
    def superadmin_emails(self) -> List[str]:
        return [e.strip() for e in self.SUPERADMIN_EMAILS.split(",") if e.strip()]

    @property
    def is_configured(self) -> bool:
        return bool(self.ADMIN_API)


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; overridden in tests."""
    return settings
