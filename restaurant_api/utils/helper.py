import datetime
import math


def to_utc(dt: datetime.datetime) -> datetime.datetime:
    # If dt is None, return as-is
    if dt is None:
        return dt
    # If dt is naive, attach UTC offset
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def utc_now() -> datetime.datetime:
    """Current UTC time truncated to whole seconds, the resolution timestamps are stored at."""
    return datetime.datetime.utcnow().replace(microsecond=0)


def _round_half_away(num: float) -> int:
    return int(num + math.copysign(0.5, num))


def to_fixed(num: float, precision: int = 2) -> float:
    """Round half away from zero at ``precision`` decimal places.

    Works on the binary float, so values such as 2.005 (stored as 2.00499...)
    are not guaranteed to round up.
    """
    output = math.pow(10, precision)
    return float(_round_half_away(num * output)) / output
