from typing import Annotated

from fastapi import Depends, Header, Request

from app.config import Settings
from app.exceptions.custom import AppError, AuthenticationError
from app.mappers.authz import extract_bearer_token, has_role
from app.schemas.auth import Role, UserProfile
from app.security import decode_access_token
from app.services.secure_bookings import SecureBookingService
from app.services.supabase import SupabaseService
from app.services.supabase_auth import SupabaseAuthService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_supabase_service(request: Request) -> SupabaseService:
    return request.app.state.supabase_service


def get_supabase_auth_service(request: Request) -> SupabaseAuthService:
    return request.app.state.supabase_auth


def get_secure_booking_service(request: Request) -> SecureBookingService:
    return request.app.state.secure_booking_service


SettingsDep = Annotated[Settings, Depends(get_settings)]
SupabaseDep = Annotated[SupabaseService, Depends(get_supabase_service)]
SecureBookingDep = Annotated[SecureBookingService, Depends(get_secure_booking_service)]
SupabaseAuthDep = Annotated[SupabaseAuthService, Depends(get_supabase_auth_service)]


async def get_current_user(
    settings: SettingsDep,
    supabase: SupabaseDep,
    authorization: Annotated[str | None, Header()] = None,
) -> UserProfile:
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("No token provided", code="NO_TOKEN")

    claims = decode_access_token(
        token, settings.supabase_jwt_secret, settings.supabase_jwt_audience
    )
    profile = await supabase.get_profile(claims.sub)
    if profile is None:
        raise AuthenticationError("Invalid user", code="INVALID_USER")
    return profile


CurrentUserDep = Annotated[UserProfile, Depends(get_current_user)]


async def require_hotel_user(user: CurrentUserDep) -> UserProfile:
    if not has_role(user, Role.hotel):
        raise AppError(
            403, "FORBIDDEN", "Forbidden: Hotel role required",
            details={"user_role": user.role},
        )
    if not user.hotel_id:
        raise AppError(403, "NO_HOTEL", "Hotel account is not linked to a hotel")
    return user


HotelUserDep = Annotated[UserProfile, Depends(require_hotel_user)]
