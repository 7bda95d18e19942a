from fastapi import APIRouter

from app.dependencies import SupabaseAuthDep
from app.schemas.auth import LoginRequest, RefreshRequest, SessionResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, auth: SupabaseAuthDep) -> SessionResponse:
    session = await auth.sign_in_with_password(body.email, body.password)
    return SessionResponse(data=session)


@router.post("/refresh", response_model=SessionResponse)
async def refresh(body: RefreshRequest, auth: SupabaseAuthDep) -> SessionResponse:
    session = await auth.refresh_session(body.refresh_token)
    return SessionResponse(data=session)
