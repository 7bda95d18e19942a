import json
import time

import httpx
import pytest
import respx
from httpx import Response

from app.exceptions.custom import AuthenticationError, SupabaseError
from app.services.supabase_auth import SupabaseAuthService

SUPABASE_URL = "https://test.supabase.co"
TOKEN_URL = f"{SUPABASE_URL}/auth/v1/token"


def _session_json(**overrides):
    data = {
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "token_type": "bearer",
        "expires_in": 3600,
        "expires_at": 1_800_000_000,
        "user": {"id": "u1", "email": "h@test.com"},
    }
    data.update(overrides)
    return data


@respx.mock
@pytest.mark.asyncio
async def test_sign_in_with_password():
    route = respx.post(TOKEN_URL).mock(return_value=Response(200, json=_session_json()))

    async with httpx.AsyncClient() as client:
        service = SupabaseAuthService(client, SUPABASE_URL, "anon-key")
        session = await service.sign_in_with_password("h@test.com", "secret")

    assert session.access_token == "access-1"
    assert session.refresh_token == "refresh-1"
    assert session.expires_at == 1_800_000_000
    assert session.user_id == "u1"
    req = route.calls.last.request
    assert req.url.params["grant_type"] == "password"
    assert req.headers["apikey"] == "anon-key"
    assert json.loads(req.content) == {"email": "h@test.com", "password": "secret"}


@respx.mock
@pytest.mark.asyncio
async def test_sign_in_bad_credentials():
    respx.post(TOKEN_URL).mock(
        return_value=Response(
            400,
            json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
        )
    )

    async with httpx.AsyncClient() as client:
        service = SupabaseAuthService(client, SUPABASE_URL, "anon-key")
        with pytest.raises(AuthenticationError) as exc_info:
            await service.sign_in_with_password("h@test.com", "wrong")

    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.code == "INVALID_CREDENTIALS"


@respx.mock
@pytest.mark.asyncio
async def test_refresh_session():
    route = respx.post(TOKEN_URL).mock(
        return_value=Response(200, json=_session_json(access_token="access-2", refresh_token="refresh-2"))
    )

    async with httpx.AsyncClient() as client:
        service = SupabaseAuthService(client, SUPABASE_URL, "anon-key")
        session = await service.refresh_session("refresh-1")

    assert session.access_token == "access-2"
    req = route.calls.last.request
    assert req.url.params["grant_type"] == "refresh_token"
    assert json.loads(req.content) == {"refresh_token": "refresh-1"}


@respx.mock
@pytest.mark.asyncio
async def test_refresh_without_expires_at_uses_expires_in():
    body = _session_json(expires_in=600)
    del body["expires_at"]
    respx.post(TOKEN_URL).mock(return_value=Response(200, json=body))

    before = int(time.time())
    async with httpx.AsyncClient() as client:
        service = SupabaseAuthService(client, SUPABASE_URL, "anon-key")
        session = await service.refresh_session("refresh-1")

    assert before + 600 <= session.expires_at <= int(time.time()) + 600


@respx.mock
@pytest.mark.asyncio
async def test_server_error():
    respx.post(TOKEN_URL).mock(return_value=Response(503, text="unavailable"))

    async with httpx.AsyncClient() as client:
        service = SupabaseAuthService(client, SUPABASE_URL, "anon-key")
        with pytest.raises(SupabaseError) as exc_info:
            await service.refresh_session("refresh-1")

    assert exc_info.value.status_code == 503
