from typing import Any

from fastapi import APIRouter, Body

from app.dependencies import HotelUserDep, SecureBookingDep
from app.schemas.bookings import BookingListResponse, BookingResponse

router = APIRouter(prefix="/api/secure-bookings", tags=["secure-bookings"])


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(
    user: HotelUserDep,
    service: SecureBookingDep,
    payload: dict[str, Any] = Body(...),
) -> BookingResponse:
    booking = await service.create_booking(user, payload)
    return BookingResponse(data=booking, message="Booking created successfully")


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(user: HotelUserDep, service: SecureBookingDep) -> BookingListResponse:
    bookings = await service.list_bookings(user)
    return BookingListResponse(data=bookings, count=len(bookings))


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    user: HotelUserDep,
    service: SecureBookingDep,
    updates: dict[str, Any] = Body(...),
) -> BookingResponse:
    updated = await service.update_booking(user, booking_id, updates)
    return BookingResponse(data=updated, message="Booking updated successfully")
