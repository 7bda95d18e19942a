"""Request authorization helpers.

Mirrors the database row-level security policies
(`EXISTS (SELECT 1 FROM profiles WHERE id = auth.uid() AND role = ...)`)
as pure predicates over an already loaded profile.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from app.schemas.auth import UserProfile

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Token from a "Bearer <token>" header value, else None."""
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        token = value[len(BEARER_PREFIX):].strip()
        return token or None
    return None


def has_role(profile: UserProfile | None, *roles: str) -> bool:
    if profile is None or not profile.role:
        return False
    wanted = {r.upper() for r in roles}
    return profile.role.upper() in wanted


def find_missing_fields(data: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    """Required fields that are absent or falsy (empty string, 0, None)."""
    return [field for field in required if not data.get(field)]
