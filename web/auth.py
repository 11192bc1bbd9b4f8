"""Request-scoped store and commissioner checks for the web API.

Identity is the owner's email, sent as the X-User-Email header by the
frontend after login. There are no passwords or tokens.
"""
from __future__ import annotations

from typing import AsyncIterator, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from league.services.commissioners import is_commissioner
from league.store import LeagueStore


async def get_store(request: Request) -> AsyncIterator[LeagueStore]:
    """One session per request, closed when the request finishes."""
    async with request.app.state.session_factory() as session:
        yield LeagueStore(session)


async def get_current_email(
    x_user_email: Optional[str] = Header(None, alias="X-User-Email"),
) -> Optional[str]:
    """Return the caller's email (lower-cased), or None if not sent."""
    if not x_user_email or not x_user_email.strip():
        return None
    return x_user_email.strip().lower()


async def require_email(email: Optional[str] = Depends(get_current_email)) -> str:
    """Require an identified caller. Raises 401 if the header is missing."""
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return email


async def require_commissioner_user(
    email: str = Depends(require_email),
    store: LeagueStore = Depends(get_store),
) -> str:
    """Dependency: require a commissioner email. Raises 403 otherwise."""
    if not await is_commissioner(store, email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Commissioner access required")
    return email
