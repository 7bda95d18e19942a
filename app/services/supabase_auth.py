import logging
import time

import httpx

from app.exceptions.custom import AuthenticationError, RateLimitError, SupabaseError
from app.schemas.auth import AuthSession

logger = logging.getLogger(__name__)


class SupabaseAuthService:
    """Supabase Auth (GoTrue) token endpoint."""

    def __init__(self, client: httpx.AsyncClient, url: str, api_key: str):
        self._client = client
        self._token_url = f"{url.rstrip('/')}/auth/v1/token"
        self._headers = {"apikey": api_key, "Content-Type": "application/json"}

    @property
    def token_url(self) -> str:
        return self._token_url

    async def _grant(self, grant_type: str, payload: dict) -> AuthSession:
        resp = await self._client.post(
            self._token_url,
            params={"grant_type": grant_type},
            json=payload,
            headers=self._headers,
        )

        if resp.status_code == 429:
            raise RateLimitError("Supabase Auth")
        if resp.status_code in (400, 401):
            data = _safe_json(resp)
            message = data.get("error_description") or data.get("msg") or "Authentication failed"
            raise AuthenticationError(message, code="INVALID_CREDENTIALS")
        if resp.status_code >= 400:
            raise SupabaseError(resp.text, status_code=resp.status_code)

        return _session_from_response(resp.json())

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        session = await self._grant("password", {"email": email, "password": password})
        logger.info("Signed in %s", email)
        return session

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        session = await self._grant("refresh_token", {"refresh_token": refresh_token})
        logger.info("Session refreshed, expires at %s", session.expires_at_dt.isoformat())
        return session


def _safe_json(resp: httpx.Response) -> dict:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _session_from_response(data: dict) -> AuthSession:
    expires_at = data.get("expires_at")
    if expires_at is None:
        expires_at = int(time.time()) + int(data.get("expires_in", 3600))
    user = data.get("user") or {}
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data["refresh_token"],
        expires_at=int(expires_at),
        token_type=data.get("token_type", "bearer"),
        user_id=user.get("id"),
    )
