"""Auth API routes: email login and current user."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from league.services.commissioners import is_commissioner, login
from league.store import LeagueStore
from web.api.utils import team_to_dict
from web.auth import get_current_email, get_store

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("Email is required")
        return v


class LoginResponse(BaseModel):
    team_id: int
    team_name: str
    owner_email: str
    is_commissioner: bool


@router.post("/login", response_model=LoginResponse)
async def post_login(body: LoginRequest, store: LeagueStore = Depends(get_store)):
    """Find the team owned by this email and report commissioner status."""
    result = await login(store, body.email)
    return LoginResponse(**team_to_dict(result.team), is_commissioner=result.is_commissioner)


@router.get("/me")
async def get_me(email: Optional[str] = Depends(get_current_email), store: LeagueStore = Depends(get_store)):
    """Current caller's team and commissioner flag, or null if not identified."""
    if not email:
        return None
    team = await store.get_team_by_email(email)
    return {
        "email": email,
        "team": team_to_dict(team) if team else None,
        "is_commissioner": await is_commissioner(store, email),
    }
