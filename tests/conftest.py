import time

import httpx
import pytest
from httpx import ASGITransport
from jose import jwt

SUPABASE_URL = "https://test.supabase.co"
JWT_SECRET = "test-jwt-secret"


def make_token(
    sub: str = "user-1",
    secret: str = JWT_SECRET,
    audience: str = "authenticated",
    expires_in: int = 3600,
    **claims,
) -> str:
    payload = {
        "sub": sub,
        "aud": audience,
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", SUPABASE_URL)
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "test-service-key")
    monkeypatch.setenv("SUPABASE_JWT_SECRET", JWT_SECRET)
    monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "test-line-token")
    monkeypatch.setenv("LINE_ADMIN_USER_IDS", "U-admin-1")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c


@pytest.fixture
def token_factory():
    return make_token
