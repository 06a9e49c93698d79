# utils/coerce.py
from datetime import date, datetime, timezone
from typing import Any, Optional


def canonical_text(value: Any) -> str:
    """String form used when comparing loosely typed values.

    Whole floats lose their ``.0`` so that ``1234``, ``1234.0`` and ``"1234"``
    all read as ``"1234"``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def utcnow() -> datetime:
    # naive UTC, which is what pymongo hands back and SQLite stores
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        # timestamp columns are naive UTC
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if not text:
        return None
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None)
    return parsed


def format_booking_date(value: Any) -> Any:
    """Render a booking date as YYYY-MM-DD; unparseable values pass through."""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            return value
        return parsed.strftime("%Y-%m-%d") if parsed else value
    return value


def render_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
