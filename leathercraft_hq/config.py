"""
config.py — Environment-driven settings for the dashboard.

Values come from the process environment, optionally seeded from a `.env`
file in the project root (see `.env.example`).
"""

import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

# BASE_DIR points to the project root (parent of leathercraft_hq/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

logger = logging.getLogger(__name__)

DEFAULT_POLL_SECONDS = 5.0
DEFAULT_REFRESH_MS = 2000
DEFAULT_PORT = 8070


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    owner_email: str = ""
    owner_password: str = ""
    poll_seconds: float = DEFAULT_POLL_SECONDS
    refresh_ms: int = DEFAULT_REFRESH_MS
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    currency: str = "MAD"

    @property
    def supabase_configured(self) -> bool:
        """True when both credentials are set and the URL isn't the template placeholder."""
        url = self.supabase_url
        return bool(url and self.supabase_key and "YOUR_PROJECT" not in url)

    @property
    def has_owner_login(self) -> bool:
        return bool(self.owner_email and self.owner_password)


def _env_number(name, default, cast):
    raw = os.environ.get(name, "")
    if raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %r", name, raw, default)
        return default


def load_settings(env_file=None) -> Settings:
    """Load settings from the environment (after reading `.env` if present)."""
    load_dotenv(env_file or os.path.join(BASE_DIR, ".env"))
    return Settings(
        supabase_url=os.environ.get("SUPABASE_URL", "").strip(),
        supabase_key=os.environ.get("SUPABASE_KEY", "").strip(),
        owner_email=os.environ.get("SUPABASE_OWNER_EMAIL", "").strip(),
        owner_password=os.environ.get("SUPABASE_OWNER_PASSWORD", ""),
        poll_seconds=_env_number("LIVE_POLL_SECONDS", DEFAULT_POLL_SECONDS, float),
        refresh_ms=_env_number("REFRESH_MS", DEFAULT_REFRESH_MS, int),
        port=_env_number("PORT", DEFAULT_PORT, int),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        currency=os.environ.get("CURRENCY", "MAD"),
    )
