from datetime import date, datetime

from painel_gastos.utils.formatting import (
    format_brl,
    format_clock,
    format_countdown,
    format_day_label,
    format_point_label,
)


def test_format_brl():
    assert format_brl(1234.5) == "R$ 1.234,50"
    assert format_brl(-80) == "-R$ 80,00"


def test_format_point_label_hides_non_positive_values():
    assert format_point_label(50) == "R$ 50,00"
    assert format_point_label(0) == ""
    assert format_point_label(-1) == ""


def test_format_day_label():
    assert format_day_label(date(2026, 1, 5)) == "05/01"


def test_format_clock():
    assert format_clock(datetime(2026, 1, 6, 9, 5, 3)) == "09:05:03"
    assert format_clock(None) == "--:--:--"


def test_format_countdown():
    assert format_countdown(60_000) == "01:00"
    assert format_countdown(59_999) == "00:59"
    assert format_countdown(0) == "00:00"
    assert format_countdown(-500) == "00:00"
