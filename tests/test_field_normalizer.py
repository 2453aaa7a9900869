from datetime import date, datetime

import pytest

from domain.stock.parser.field_normalizer import (
    format_date, parse_float, parse_int, parse_str, reconstruct_date, reconstruct_time,
)


@pytest.mark.parametrize("raw, expected", [
    ("+1,234", 1234),
    ("-1,234", -1234),
    ("  75000 ", 75000),
    ("+75000", 75000),
    ("1,234,567", 1234567),
    ("0", 0),
    ("12.0", 12),
    (1200, 1200),
])
def test_parse_int_strips_sign_and_separators(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "+", ",", "12a"])
def test_parse_int_falls_back_to_zero(raw):
    assert parse_int(raw) == 0


@pytest.mark.parametrize("raw, expected", [
    ("+1.25", 1.25),
    ("-0.37", -0.37),
    ("1,234.5", 1234.5),
    (" 98.76 ", 98.76),
])
def test_parse_float(raw, expected):
    assert parse_float(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "N/A", "--"])
def test_parse_float_falls_back_to_zero(raw):
    assert parse_float(raw) == 0.0


def test_parse_str_trims_and_handles_none():
    assert parse_str(None) == ''
    assert parse_str(" 2 ") == '2'


def test_reconstruct_time_combines_reference_date():
    now = datetime(2024, 3, 15, 10, 0, 0)
    result = reconstruct_time("093015", now)
    assert result == datetime(2024, 3, 15, 9, 30, 15)


@pytest.mark.parametrize("raw", [None, "", "0930", "0930151", "996060", "ab:cde"])
def test_reconstruct_time_falls_back_to_reference_now(raw):
    now = datetime(2024, 3, 15, 10, 1, 2)
    assert reconstruct_time(raw, now) == now


def test_reconstruct_time_without_reference_uses_wall_clock():
    before = datetime.now()
    result = reconstruct_time(None)
    after = datetime.now()
    assert before <= result <= after


def test_reconstruct_time_uses_today_even_for_previous_day_tick_after_midnight():
    # 자정 직후 수집된 전일 23:59:58 체결은 벽시계 날짜(다음 날)로 기록됩니다.
    now = datetime(2024, 3, 16, 0, 0, 5)
    result = reconstruct_time("235958", now)
    assert result == datetime(2024, 3, 16, 23, 59, 58)
    assert result > now


def test_reconstruct_time_just_before_midnight():
    now = datetime(2024, 3, 15, 23, 59, 59)
    assert reconstruct_time("235959", now) == datetime(2024, 3, 15, 23, 59, 59)
    assert reconstruct_time("000000", now) == datetime(2024, 3, 15, 0, 0, 0)


def test_reconstruct_date():
    assert reconstruct_date("20240315", date(2024, 1, 1)) == date(2024, 3, 15)


@pytest.mark.parametrize("raw", [None, "", "2024031", "202403155", "20241340"])
def test_reconstruct_date_falls_back_to_today(raw):
    today = date(2024, 3, 15)
    assert reconstruct_date(raw, today) == today


def test_reconstruct_date_without_reference_uses_today():
    assert reconstruct_date(None) == date.today()


def test_format_date():
    assert format_date(date(2024, 3, 5)) == "20240305"
