from pydantic import BaseModel


class LineMessage(BaseModel):
    type: str = "text"
    text: str | None = None
    alt_text: str | None = None
    contents: dict | None = None

    def to_api(self) -> dict:
        payload: dict = {"type": self.type}
        if self.text is not None:
            payload["text"] = self.text
        if self.alt_text is not None:
            payload["altText"] = self.alt_text
        if self.contents is not None:
            payload["contents"] = self.contents
        return payload


class BookingNotificationData(BaseModel):
    booking_number: str
    customer_name: str
    service_name: str
    scheduled_date: str
    scheduled_time: str
    final_price: float
    hotel_name: str | None = None
    is_hotel_booking: bool = False
