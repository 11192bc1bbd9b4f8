"""League settings API: commissioner allow-list (commissioner read/write)."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from league.services.commissioners import COMMISSIONER_EMAILS_KEY, commissioner_emails, parse_email_list
from league.store import LeagueStore
from web.auth import get_store, require_commissioner_user

router = APIRouter(prefix="/api/settings", tags=["settings"])

logger = logging.getLogger("league.web")


class CommissionersResponse(BaseModel):
    emails: list[str]


class CommissionersUpdate(BaseModel):
    emails: list[str]


@router.get("/commissioners", response_model=CommissionersResponse)
async def get_commissioners(
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Current commissioner emails."""
    return CommissionersResponse(emails=sorted(await commissioner_emails(store)))


@router.put("/commissioners", response_model=CommissionersResponse)
async def put_commissioners(
    body: CommissionersUpdate,
    store: LeagueStore = Depends(get_store),
    admin: str = Depends(require_commissioner_user),
):
    """Replace the allow-list. The caller must stay on it."""
    emails = parse_email_list(",".join(body.emails))
    if admin not in emails:
        raise HTTPException(400, "Cannot remove yourself from the commissioners")
    async with store.transaction():
        await store.set_config_value(COMMISSIONER_EMAILS_KEY, ",".join(sorted(emails)))
    logger.info("%s set commissioners to %s", admin, sorted(emails))
    return CommissionersResponse(emails=sorted(emails))
