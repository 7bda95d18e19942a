"""Tests for the duration price calculator (pure functions, no I/O)."""

import pytest

from app.mappers.pricing import (
    DURATION_MULTIPLIERS,
    calculate_all_duration_prices,
    calculate_discount_percentage,
    calculate_price,
    duration_multiplier,
    get_duration_label,
    get_price_display,
)


# --- calculate_price ---


def test_60_minutes_uses_base_price():
    result = calculate_price(690, 550, 60)
    assert result.multiplier == 1.0
    assert result.final_base_price == 690
    assert result.final_hotel_price == 550


def test_90_minutes_uses_fixed_tier():
    result = calculate_price(690, 550, 90)
    assert result.multiplier == 1.435
    assert result.final_base_price == 990  # 990.15
    assert result.final_hotel_price == 789  # 789.25


def test_120_minutes_uses_fixed_tier():
    result = calculate_price(690, 550, 120)
    assert result.multiplier == 1.855
    assert result.final_base_price == 1280  # 1279.95


def test_generic_base_price():
    result = calculate_price(1000, 800, 60)
    assert result.multiplier == 1.0
    assert result.final_base_price == 1000
    assert result.final_hotel_price == 800

    result = calculate_price(1000, 800, 120)
    assert result.final_base_price == 1855
    assert result.final_hotel_price == 1484


def test_below_60_is_proportional():
    result = calculate_price(600, 480, 30)
    assert result.multiplier == 0.5
    assert result.final_base_price == 300
    assert result.final_hotel_price == 240


def test_above_120_extends_by_point_four_per_hour():
    result = calculate_price(1000, 800, 180)
    assert result.multiplier == 2.255
    assert result.final_base_price == 2255
    assert result.final_hotel_price == 1804


def test_between_60_and_120_interpolates():
    result = calculate_price(1000, 800, 75)
    # 1 + 15/60 * 0.855 = 1.21375 → 1.214
    assert result.multiplier == 1.214
    assert result.final_base_price == 1214


def test_multiplier_has_at_most_three_decimals():
    for duration in (45, 75, 100, 135, 200):
        result = calculate_price(690, 550, duration)
        assert round(result.multiplier, 3) == result.multiplier


def test_result_echoes_inputs():
    result = calculate_price(690, 550, 60)
    assert result.duration_minutes == 60
    assert result.base_price_60min == 690
    assert result.hotel_price_60min == 550


def test_tier_constants_are_hardcoded():
    assert DURATION_MULTIPLIERS == {60: 1.0, 90: 1.435, 120: 1.855}


def test_half_rounds_up():
    # 2.5 → 3 and 0.5 → 1 (banker's rounding would give 2 and 0)
    assert calculate_price(2.5, 0.5, 60).final_base_price == 3
    assert calculate_price(2.5, 0.5, 60).final_hotel_price == 1


def test_monotonic_over_durations():
    durations = [60, 90, 120, 150, 180, 240]
    prices = [calculate_price(690, 550, d).final_base_price for d in durations]
    assert prices == sorted(prices)


def test_idempotent():
    assert calculate_price(690, 550, 90) == calculate_price(690, 550, 90)


def test_negative_duration_is_not_rejected():
    result = calculate_price(600, 480, -30)
    assert result.multiplier == -0.5


@pytest.mark.parametrize(
    "duration,expected",
    [(30, 0.5), (60, 1.0), (90, 1.435), (120, 1.855), (180, 2.255)],
)
def test_duration_multiplier(duration, expected):
    assert duration_multiplier(duration) == pytest.approx(expected)


# --- calculate_all_duration_prices ---


def test_all_duration_prices_keeps_order():
    results = calculate_all_duration_prices(690, 550, [60, 90, 120])
    assert [r.duration_minutes for r in results] == [60, 90, 120]
    assert [r.final_base_price for r in results] == [690, 990, 1280]


def test_all_duration_prices_empty():
    assert calculate_all_duration_prices(690, 550, []) == []


# --- get_price_display ---


def test_price_display_base():
    assert get_price_display(690, 550, 60) == "690 บาท"


def test_price_display_hotel():
    assert get_price_display(690, 550, 60, is_hotel_price=True) == "550 บาท"


def test_price_display_thousands_separator():
    assert get_price_display(690, 550, 120) == "1,280 บาท"


# --- get_duration_label ---


def test_duration_labels():
    assert get_duration_label(60) == "60 นาที (1 ชั่วโมง)"
    assert get_duration_label(90) == "90 นาที (1.5 ชั่วโมง)"
    assert get_duration_label(120) == "120 นาที (2 ชั่วโมง)"


def test_duration_label_unknown():
    assert get_duration_label(45) == "45 นาที"


# --- calculate_discount_percentage ---


def test_discount_percentage():
    assert calculate_discount_percentage(1000, 800) == 20
    assert calculate_discount_percentage(1000, 700) == 30


def test_discount_equal_prices():
    assert calculate_discount_percentage(500, 500) == 0


def test_discount_zero_base():
    assert calculate_discount_percentage(0, 500) == 0


def test_discount_full():
    assert calculate_discount_percentage(1000, 0) == 100
