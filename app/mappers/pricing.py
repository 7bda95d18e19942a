"""Duration-based price calculation for massage services.

Pure functions, no I/O. A service is priced for 60 minutes; other
durations scale that price by a multiplier. The 90 and 120 minute tiers
are fixed constants taken from the reference price list
(690 / 990 / 1,280 baht), not derived from a formula.
"""

import math

from app.schemas.pricing import PricingResult

BASE_DURATION = 60
CURRENCY_SUFFIX = "บาท"

# Reference tiers: 690 → 990 (+300) → 1,280 (+590)
DURATION_MULTIPLIERS: dict[int, float] = {
    60: 1.0,
    90: 1.435,
    120: 1.855,
}

# Between 60 and 120: slope of the 120 minute tier
_MID_RANGE_STEP = 0.855
# Past 120: each extra hour adds this much
_EXTRA_HOUR_STEP = 0.4

DURATION_LABELS: dict[int, str] = {
    60: "60 นาที (1 ชั่วโมง)",
    90: "90 นาที (1.5 ชั่วโมง)",
    120: "120 นาที (2 ชั่วโมง)",
}

DEFAULT_DURATIONS = (60, 90, 120)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def duration_multiplier(duration: int) -> float:
    """Unrounded multiplier applied to the 60 minute price."""
    if duration in DURATION_MULTIPLIERS:
        return DURATION_MULTIPLIERS[duration]
    if duration < 60:
        return duration / BASE_DURATION
    if duration > 120:
        return DURATION_MULTIPLIERS[120] + ((duration - 120) / 60) * _EXTRA_HOUR_STEP
    return 1.0 + ((duration - 60) / 60) * _MID_RANGE_STEP


def calculate_price(
    base_price_60min: float, hotel_price_60min: float, duration: int,
) -> PricingResult:
    """Scale the standard and hotel 60 minute prices to *duration*.

    The multiplier is rounded to 3 decimals first and final prices are
    whole baht. Inputs are not validated: callers pass one of the
    selector durations, anything else gets the interpolation rules.
    """
    multiplier = _round_half_up(duration_multiplier(duration), 3)
    return PricingResult(
        duration_minutes=duration,
        base_price_60min=base_price_60min,
        hotel_price_60min=hotel_price_60min,
        multiplier=multiplier,
        final_base_price=int(_round_half_up(base_price_60min * multiplier)),
        final_hotel_price=int(_round_half_up(hotel_price_60min * multiplier)),
    )


def calculate_all_duration_prices(
    base_price_60min: float, hotel_price_60min: float, durations: list[int],
) -> list[PricingResult]:
    return [calculate_price(base_price_60min, hotel_price_60min, d) for d in durations]


def format_baht(amount: int) -> str:
    return f"{amount:,} {CURRENCY_SUFFIX}"


def get_price_display(
    base_price_60min: float,
    hotel_price_60min: float,
    duration: int,
    is_hotel_price: bool = False,
) -> str:
    """Display string for one duration, e.g. "1,280 บาท"."""
    result = calculate_price(base_price_60min, hotel_price_60min, duration)
    price = result.final_hotel_price if is_hotel_price else result.final_base_price
    return format_baht(price)


def get_duration_label(duration: int) -> str:
    return DURATION_LABELS.get(duration, f"{duration} นาที")


def calculate_discount_percentage(base_price: float, hotel_price: float) -> int:
    """Hotel discount relative to the standard price, whole percent."""
    if base_price <= 0:
        return 0
    return int(_round_half_up((base_price - hotel_price) / base_price * 100))
