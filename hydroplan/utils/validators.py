from datetime import date, datetime, timezone

from hydroplan.errors import ValidationError


def parse_int(payload: dict, field: str, required: bool = False, positive: bool = False):
    value = payload.get(field)
    if value is None:
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise ValidationError(f"{field} must be an integer")
    value = int(value)
    if positive and value <= 0:
        raise ValidationError(f"{field} must be > 0")
    return value


def parse_number(payload: dict, field: str, min_value=None, max_value=None):
    value = payload.get(field)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    if min_value is not None and value < min_value:
        raise ValidationError(f"{field} must be >= {min_value}")
    if max_value is not None and value > max_value:
        raise ValidationError(f"{field} must be <= {max_value}")
    return value


def parse_enum(payload: dict, field: str, enum_cls):
    value = payload.get(field)
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field} must be one of: {allowed}")


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_datetime(payload: dict, field: str):
    """ISO-8601 timestamp, converted to naive UTC."""
    value = payload.get(field)
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 datetime")
    try:
        # 3.10 fromisoformat does not accept the Z suffix
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be an ISO-8601 datetime")
    return to_naive_utc(parsed)


def parse_date(payload: dict, field: str):
    """Calendar date from a date, a datetime or an ISO string (UTC day)."""
    value = payload.get(field)
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_naive_utc(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 date")
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        return parse_datetime(payload, field).date()
    except ValueError:
        raise ValidationError(f"{field} must be an ISO-8601 date")


def ensure_time_order(start_time, end_time):
    if start_time is not None and end_time is not None and start_time >= end_time:
        raise ValidationError(
            "start_time must be less than end_time",
            details=[{"path": "start_time", "message": "start_time must be less than end_time"}],
        )
