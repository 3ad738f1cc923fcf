"""Ski season gate: are lifts presumed open on a given date."""

from datetime import date


def parse_month_day(value: str) -> tuple[int, int]:
    """Parse a "MM-DD" season boundary into (month, day)."""
    try:
        month_str, day_str = value.strip().split("-")
        month, day = int(month_str), int(day_str)
    except ValueError:
        raise ValueError(f"Invalid season boundary {value!r}, expected MM-DD")

    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ValueError(f"Invalid season boundary {value!r}, expected MM-DD")
    return month, day


def is_season_open(target_date: date, start: str, end: str) -> bool:
    """
    Check if a date falls within the ski season.

    Boundaries and the date are compared as month*100+day. When the start
    is later in the year than the end the season wraps over New Year.

    Args:
        target_date: Day to check
        start: First season day as "MM-DD" (e.g. "12-01")
        end: Last season day as "MM-DD" (e.g. "04-15")

    Returns:
        True when lifts are presumed open
    """
    start_month, start_day = parse_month_day(start)
    end_month, end_day = parse_month_day(end)
    start_val = start_month * 100 + start_day
    end_val = end_month * 100 + end_day
    val = target_date.month * 100 + target_date.day

    if start_val > end_val:
        return val >= start_val or val <= end_val
    return start_val <= val <= end_val
