# receipt_admin/formatters.py
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union
from zoneinfo import ZoneInfo

import dateparser

from .config import ANONYMOUS_LABEL, CURRENCY_SUFFIX, DISPLAY_TIMEZONE, MISSING_LABEL

Amount = Union[int, float, str, Decimal, None]

CENTS = Decimal("0.01")


def _to_decimal(amount: Amount) -> Decimal:
    if amount is None or amount == "":
        return Decimal("0")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return Decimal("0")
    if not value.is_finite():
        return Decimal("0")
    return value


def format_currency(amount: Amount) -> str:
    """Turkish money format: dot thousands, comma decimals, "TL" suffix."""
    value = _to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    # 1,234.50 -> 1.234,50
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{text} {CURRENCY_SUFFIX}"


def parse_datetime_any(value: Any) -> Optional[datetime]:
    """Parse an API date/timestamp into a datetime; naive for plain dates."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    # anything else the bot may have stored, e.g. "05/03/2024"
    return dateparser.parse(
        text,
        settings={"DATE_ORDER": "DMY", "PREFER_DAY_OF_MONTH": "first"},
    )


def _localize(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(ZoneInfo(DISPLAY_TIMEZONE))


def format_date(value: Any) -> str:
    dt = parse_datetime_any(value)
    if dt is None:
        return ""
    return _localize(dt).strftime("%d.%m.%Y")


def format_datetime(value: Any) -> str:
    dt = parse_datetime_any(value)
    if dt is None:
        return ""
    return _localize(dt).strftime("%d.%m.%Y %H:%M")


def to_input_date(value: Any) -> Optional[date]:
    """Calendar date for a date picker widget, or None."""
    dt = parse_datetime_any(value)
    if dt is None:
        return None
    return _localize(dt).date()


def _field(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def display_name(row: Any) -> str:
    """Submitter label: username, else full name, else anonymous."""
    username = _field(row, "telegram_username")
    if username:
        return username
    full = f"{_field(row, 'first_name') or ''} {_field(row, 'last_name') or ''}".strip()
    return full or ANONYMOUS_LABEL


def username_label(username: Optional[str]) -> str:
    return username or ANONYMOUS_LABEL


def receipt_no_label(value: Optional[str]) -> str:
    return value or MISSING_LABEL
