from typing import Annotated

from fastapi import APIRouter, Query

from app.exceptions.custom import AppError
from app.mappers.pricing import (
    DEFAULT_DURATIONS,
    calculate_discount_percentage,
    calculate_price,
    format_baht,
    get_duration_label,
)
from app.schemas.pricing import PriceQuote

router = APIRouter(prefix="/api/pricing", tags=["pricing"])

BasePriceQuery = Annotated[float, Query(ge=0, description="Standard price for 60 minutes")]
HotelPriceQuery = Annotated[float, Query(ge=0, description="Hotel-partner price for 60 minutes")]


def build_quote(base_price: float, hotel_price: float, duration: int) -> PriceQuote:
    result = calculate_price(base_price, hotel_price, duration)
    return PriceQuote(
        **result.model_dump(),
        label=get_duration_label(duration),
        base_price_display=format_baht(result.final_base_price),
        hotel_price_display=format_baht(result.final_hotel_price),
        discount_percentage=calculate_discount_percentage(base_price, hotel_price),
    )


@router.get("/quote", response_model=PriceQuote)
async def get_quote(
    base_price: BasePriceQuery,
    hotel_price: HotelPriceQuery,
    duration: Annotated[int, Query(gt=0)] = 60,
) -> PriceQuote:
    return build_quote(base_price, hotel_price, duration)


@router.get("/options", response_model=list[PriceQuote])
async def get_options(
    base_price: BasePriceQuery,
    hotel_price: HotelPriceQuery,
    durations: Annotated[list[int] | None, Query()] = None,
) -> list[PriceQuote]:
    selected = durations or list(DEFAULT_DURATIONS)
    invalid = [d for d in selected if d <= 0]
    if invalid:
        raise AppError(
            422, "VALIDATION_ERROR", "Durations must be greater than 0",
            details={"durations": invalid},
        )
    return [build_quote(base_price, hotel_price, d) for d in selected]
