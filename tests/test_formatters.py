from decimal import Decimal

import pytest

from receipt_admin.formatters import (
    display_name,
    format_currency,
    format_date,
    format_datetime,
    receipt_no_label,
    to_input_date,
    username_label,
)


@pytest.mark.parametrize(
    "amount,expected",
    [
        (1234.5, "1.234,50 TL"),
        (None, "0,00 TL"),
        (0, "0,00 TL"),
        (136.36, "136,36 TL"),
        (1234567.891, "1.234.567,89 TL"),
        ("99.5", "99,50 TL"),
        (Decimal("0.005"), "0,01 TL"),
        (-42, "-42,00 TL"),
        ("not a number", "0,00 TL"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_date_plain_iso():
    assert format_date("2024-03-05") == "05.03.2024"


@pytest.mark.parametrize("value", ["", None])
def test_format_date_empty(value):
    assert format_date(value) == ""


def test_format_date_converts_utc_timestamps_to_istanbul():
    assert format_date("2024-03-05T22:30:00Z") == "06.03.2024"
    assert format_datetime("2024-03-05T22:30:00Z") == "06.03.2024 01:30"


def test_format_date_unparseable_is_blank():
    assert format_date("??") == ""


def test_to_input_date():
    assert to_input_date("2024-03-05").isoformat() == "2024-03-05"
    assert to_input_date("") is None


def test_display_name_fallbacks():
    assert display_name({"telegram_username": "ali", "first_name": "Ali"}) == "ali"
    assert display_name({"first_name": "Ayşe", "last_name": None}) == "Ayşe"
    assert display_name({"first_name": "Ayşe", "last_name": "Kaya"}) == "Ayşe Kaya"
    assert display_name({}) == "Anonim"


def test_receipt_no_label():
    assert receipt_no_label("F-1") == "F-1"
    assert receipt_no_label(None) == "N/A"


def test_username_label_uses_anonymous_fallback():
    assert username_label("ali") == "ali"
    assert username_label(None) == "Anonim"
    assert username_label("") == "Anonim"
