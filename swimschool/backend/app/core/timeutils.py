import re

from .errors import FormatError

TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)", re.ASCII)
MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str) -> int:
    """Return minutes since midnight for a zero-padded ``HH:MM`` string."""
    match = TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise FormatError(f"Time must be in HH:MM format, got {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    # no wraparound past midnight
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise FormatError(f"Minutes out of range for a single day: {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def intervals_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Half-open ``[start, end)`` comparison; touching endpoints do not overlap."""
    return start_a < end_b and end_a > start_b


__all__ = ["time_to_minutes", "minutes_to_time", "intervals_overlap", "TIME_PATTERN"]
