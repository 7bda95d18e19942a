from pydantic import BaseModel


class PricingResult(BaseModel):
    duration_minutes: int
    base_price_60min: float
    hotel_price_60min: float
    multiplier: float
    final_base_price: int
    final_hotel_price: int


class PriceQuote(PricingResult):
    label: str
    base_price_display: str
    hotel_price_display: str
    discount_percentage: int
