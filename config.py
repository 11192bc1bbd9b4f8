"""Configuration for the Fairway league service."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(__file__).parent / 'league.db'}",
)

# Deadlines are authored as wall-clock times in this zone
LEAGUE_TIMEZONE = os.getenv("LEAGUE_TIMEZONE", "America/New_York")


# Emails (comma-separated). Case-insensitive.
def _parse_emails(value: str) -> set[str]:
    if not value:
        return set()
    return {x.strip().lower() for x in value.split(",") if x.strip()}


# Used when the league_config table has no commissioner_emails row
COMMISSIONER_EMAILS = _parse_emails(os.getenv("COMMISSIONER_EMAILS", ""))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Web API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
