import logging
from typing import Any

from pydantic import ValidationError

from app.exceptions.custom import AppError, RateLimitError, SupabaseError
from app.mappers.authz import find_missing_fields
from app.mappers.line_messages import booking_notification_from_row
from app.schemas.auth import UserProfile
from app.schemas.bookings import BookingServiceItem
from app.services.line import LineService
from app.services.supabase import SupabaseService

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "service_id",
    "booking_date",
    "booking_time",
    "duration",
    "base_price",
    "final_price",
)

# Ownership columns: always taken from the caller's profile
PROTECTED_FIELDS = ("id", "hotel_id", "created_by")


class SecureBookingService:
    """Hotel-scoped booking writes through the service-role client."""

    def __init__(
        self,
        supabase: SupabaseService,
        line: LineService | None = None,
        admin_line_ids: list[str] | None = None,
    ):
        self._supabase = supabase
        self._line = line
        self._admin_line_ids = admin_line_ids or []

    async def create_booking(self, user: UserProfile, payload: dict[str, Any]) -> dict[str, Any]:
        raw_services = payload.get("services") or []
        booking_data = {k: v for k, v in payload.items() if k != "services"}
        booking_data["hotel_id"] = user.hotel_id
        booking_data["created_by"] = user.id

        missing = find_missing_fields(booking_data, REQUIRED_FIELDS)
        if missing:
            raise AppError(
                400, "MISSING_FIELDS", "Missing required fields",
                details={"missing": missing},
            )

        try:
            services = [BookingServiceItem(**s) for s in raw_services]
        except (ValidationError, TypeError) as exc:
            raise AppError(400, "INVALID_SERVICES", f"Invalid services: {exc}")

        logger.info("Creating booking for hotel user %s", user.email or user.id)
        try:
            booking = await self._supabase.insert_booking(booking_data)
        except SupabaseError as exc:
            raise AppError(500, "DATABASE_ERROR", f"Failed to create booking: {exc.message}")

        if services:
            await self._insert_services(booking["id"], services)

        await self._notify_admins(booking)
        return booking

    async def _insert_services(self, booking_id: str, services: list[BookingServiceItem]) -> None:
        rows = [{"booking_id": booking_id, **s.model_dump()} for s in services]
        try:
            await self._supabase.insert_booking_services(rows)
        except (SupabaseError, RateLimitError) as exc:
            logger.error(
                "booking_services insert failed for %s, rolling back: %s",
                booking_id, exc,
            )
            try:
                await self._supabase.delete_booking(booking_id)
            except (SupabaseError, RateLimitError):
                logger.exception("Rollback of booking %s failed", booking_id)
            raise AppError(
                500, "BOOKING_SERVICES_FAILED",
                f"Failed to create booking services: {exc}",
            )

    async def _notify_admins(self, booking: dict[str, Any]) -> None:
        if self._line is None or not self._admin_line_ids:
            return
        try:
            await self._line.send_new_booking_to_admin(
                self._admin_line_ids, booking_notification_from_row(booking)
            )
        except (ValidationError, ValueError, TypeError):
            logger.exception("Admin notification failed for booking %s", booking.get("id"))

    async def list_bookings(self, user: UserProfile) -> list[dict[str, Any]]:
        try:
            return await self._supabase.list_hotel_bookings(user.hotel_id)
        except SupabaseError as exc:
            raise AppError(500, "DATABASE_ERROR", f"Failed to fetch bookings: {exc.message}")

    async def update_booking(
        self, user: UserProfile, booking_id: str, updates: dict[str, Any],
    ) -> dict[str, Any]:
        try:
            existing = await self._supabase.get_hotel_booking(booking_id, user.hotel_id)
        except SupabaseError as exc:
            raise AppError(500, "DATABASE_ERROR", f"Failed to fetch booking: {exc.message}")
        if existing is None:
            raise AppError(404, "BOOKING_NOT_FOUND", "Booking not found or access denied")

        clean = {k: v for k, v in updates.items() if k not in PROTECTED_FIELDS}
        if not clean:
            raise AppError(400, "NO_UPDATES", "No updatable fields provided")

        try:
            updated = await self._supabase.update_booking(booking_id, clean)
        except SupabaseError as exc:
            raise AppError(500, "DATABASE_ERROR", f"Failed to update booking: {exc.message}")
        if updated is None:
            raise AppError(404, "BOOKING_NOT_FOUND", "Booking not found or access denied")

        logger.info("Booking %s updated by %s", booking_id, user.id)
        return updated
