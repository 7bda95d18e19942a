from typing import Any

from pydantic import BaseModel


class BookingServiceItem(BaseModel):
    service_id: str
    duration: int
    price: float
    recipient_index: int = 0
    sort_order: int = 0


class BookingResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]
    message: str


class BookingListResponse(BaseModel):
    success: bool = True
    data: list[dict[str, Any]]
    count: int
