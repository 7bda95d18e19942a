"""Builders for LINE text messages. Pure functions, no I/O."""

from typing import Any

from app.mappers.pricing import format_baht
from app.schemas.line import BookingNotificationData, LineMessage


def build_new_booking_message(data: BookingNotificationData) -> LineMessage:
    if data.is_hotel_booking:
        booking_type = f"🏨 จองผ่านโรงแรม: {data.hotel_name or '-'}"
    else:
        booking_type = "👤 จองโดยลูกค้า"

    lines = [
        "📋 มีการจองใหม่!",
        "",
        f"🔢 เลขที่จอง: {data.booking_number}",
        f"👤 ลูกค้า: {data.customer_name}",
        f"💆 บริการ: {data.service_name}",
        f"📅 วันที่: {data.scheduled_date}",
        f"⏰ เวลา: {data.scheduled_time}",
        f"💰 ราคา: {format_baht(round(data.final_price))}",
        booking_type,
        "",
        "ตรวจสอบรายละเอียดในระบบ Admin",
    ]
    return LineMessage(type="text", text="\n".join(lines))


def booking_notification_from_row(
    booking: dict[str, Any], hotel_name: str | None = None,
) -> BookingNotificationData:
    """Map a freshly inserted `bookings` row to notification data."""
    return BookingNotificationData(
        booking_number=str(booking.get("booking_number") or booking.get("id") or "-"),
        customer_name=booking.get("customer_name") or "-",
        service_name=booking.get("service_name") or str(booking.get("service_id") or "-"),
        scheduled_date=str(booking.get("booking_date") or "-"),
        scheduled_time=str(booking.get("booking_time") or "-"),
        final_price=float(booking.get("final_price") or 0),
        hotel_name=hotel_name or booking.get("hotel_name"),
        is_hotel_booking=bool(booking.get("hotel_id")),
    )
