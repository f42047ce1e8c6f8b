"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_EMAIL_FROM = "EyeSentry <no-reply@email.eyesentrymed.com>"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConfigError(RuntimeError):
    """Raised when a required setting is missing from the environment."""


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str
    icon: str = ""


# Ordered navigation entries for the admin console
TABS: List[TabConfig] = [
    TabConfig("analytics", "Analytics", ":material/monitoring:"),
    TabConfig("patients", "Patient Data", ":material/patient_list:"),
    TabConfig("questions", "Questions", ":material/quiz:"),
    TabConfig("users", "Users", ":material/group:"),
]


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    supabase_service_role_key: Optional[str]
    resend_api_key: Optional[str]
    email_from: str = DEFAULT_EMAIL_FROM
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            supabase_url=_first_env("SUPABASE_URL", "VITE_SUPABASE_URL"),
            supabase_key=_first_env("SUPABASE_KEY", "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
            supabase_service_role_key=_first_env(
                "SUPABASE_SERVICE_ROLE_KEY", "VITE_SUPABASE_SERVICE_ROLE_KEY"
            ),
            resend_api_key=_first_env("RESEND_API_KEY"),
            email_from=_first_env("EMAIL_FROM") or DEFAULT_EMAIL_FROM,
            log_level=(_first_env("LOG_LEVEL") or "INFO").upper(),
        )

    def require_supabase(self, service_role: bool = False) -> tuple[str, str]:
        """Return (url, key) or raise ConfigError naming what is missing."""
        key = self.supabase_service_role_key if service_role else self.supabase_key
        key_name = "SUPABASE_SERVICE_ROLE_KEY" if service_role else "SUPABASE_KEY"
        missing = [name for name, val in (("SUPABASE_URL", self.supabase_url), (key_name, key)) if not val]
        if missing:
            raise ConfigError(f"Missing Supabase credentials: {', '.join(missing)}")
        return self.supabase_url, key  # type: ignore[return-value]


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
