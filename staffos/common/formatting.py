"""Display helpers shared by every view — dates, money, labels."""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from staffos.common.constants import CURRENCY_SYMBOL, EMPTY_DATE, EMPTY_MONEY

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Coerce an ISO string / datetime / date into a ``date`` (None when blank or malformed)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_datetime(value: Union[datetime, str]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def format_date(value: DateLike) -> str:
    """en-GB short date: ``5 Mar 2026``; ``-`` when empty."""
    parsed = parse_date(value)
    if parsed is None:
        return EMPTY_DATE
    return f"{parsed.day} {parsed.strftime('%b')} {parsed.year}"


def format_datetime(value: Union[datetime, str]) -> str:
    """en-GB date with 24h time: ``5 Mar 2026, 14:05``."""
    parsed = parse_datetime(value)
    return f"{format_date(parsed)}, {parsed.strftime('%H:%M')}"


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def format_currency(value: Any) -> str:
    """GBP with thousands separators and no decimals: ``£50,000``."""
    amount = _to_decimal(value)
    if amount is None:
        return EMPTY_MONEY
    rounded = int(amount.quantize(Decimal("1")))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(rounded):,}"


def humanize(value: Optional[str]) -> str:
    """``interview_scheduled`` → ``Interview Scheduled``."""
    if not value:
        return ""
    return value.replace("_", " ").title()


def percentage(part: int, whole: int) -> int:
    """Rounded whole-number percentage; 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return math.floor(part / whole * 100 + 0.5)
