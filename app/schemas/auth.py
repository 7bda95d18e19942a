from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel


class Role(StrEnum):
    admin = "ADMIN"
    hotel = "HOTEL"
    staff = "STAFF"
    customer = "CUSTOMER"


class TokenClaims(BaseModel):
    sub: str
    email: str | None = None
    role: str | None = None
    exp: int | None = None


class UserProfile(BaseModel):
    id: str
    role: str
    hotel_id: str | None = None
    email: str | None = None


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: int  # unix seconds
    token_type: str = "bearer"
    user_id: str | None = None

    @property
    def expires_at_dt(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class SessionResponse(BaseModel):
    success: bool = True
    data: AuthSession
