import math
from datetime import date, datetime, timezone
from typing import Optional

from app.exceptions import ValidationError


def utc_now() -> str:
    """ISO-8601 timestamp used for every created_at / recorded_at field."""
    return datetime.now(timezone.utc).isoformat()


def today() -> str:
    return date.today().isoformat()


def require_fields(details: dict, *fields: str) -> None:
    """Raise ValidationError naming every required field that is missing or blank."""
    missing = []
    for field in fields:
        value = details.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise ValidationError(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")


def parse_number(value, field: str, allow_negative: bool = False) -> float:
    """Coerce a numeric field, rejecting booleans, NaN, infinities and non-numeric strings."""
    if value is None:
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    if not allow_negative and number < 0:
        raise ValidationError(f"{field} must not be negative")
    return number


def parse_id(value, field: str) -> int:
    """Coerce an id coming from a path, query or JSON body."""
    if value is None or value == "":
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")


def parse_date(value: Optional[str], field: str = "date") -> date:
    """Parse a YYYY-MM-DD date string."""
    if not value:
        raise ValidationError(f"{field} is required")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")
