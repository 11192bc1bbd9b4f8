"""Commissioner allow-list and email login."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import config
from league.errors import NotFound, Unauthorized
from league.models import Team
from league.store import LeagueStore

logger = logging.getLogger("league.commissioners")

COMMISSIONER_EMAILS_KEY = "commissioner_emails"


def parse_email_list(value: str) -> set[str]:
    """Comma-separated emails -> lower-cased, trimmed set."""
    return {e.strip().lower() for e in (value or "").split(",") if e.strip()}


async def commissioner_emails(store: LeagueStore) -> set[str]:
    """Allow-list from league_config; falls back to COMMISSIONER_EMAILS when the key is unset."""
    value = await store.get_config_value(COMMISSIONER_EMAILS_KEY)
    if value is None:
        return set(config.COMMISSIONER_EMAILS)
    return parse_email_list(value)


async def is_commissioner(store: LeagueStore, email: str | None) -> bool:
    if not email or not email.strip():
        return False
    return email.strip().lower() in await commissioner_emails(store)


async def require_commissioner(store: LeagueStore, email: str | None) -> str:
    """Return the normalized email, or raise Unauthorized."""
    if not await is_commissioner(store, email):
        logger.warning("Commissioner action refused for %r", email)
        raise Unauthorized("Only commissioners can do this")
    return email.strip().lower()


@dataclass
class LoginResult:
    team: Team
    is_commissioner: bool


async def login(store: LeagueStore, email: str) -> LoginResult:
    """Look up the team owned by an email. No password: the email is the key."""
    team = await store.get_team_by_email(email)
    if not team:
        raise NotFound("Email not found. Contact your commissioner.")
    return LoginResult(team=team, is_commissioner=await is_commissioner(store, email))
