"""Target date parsing for the entry points."""

from datetime import date, timedelta


def tomorrow(today: date | None = None) -> date:
    """The default ski day: tomorrow in local time."""
    return (today or date.today()) + timedelta(days=1)


def resolve_target_date(value: str | None, today: date | None = None) -> date:
    """Parse a YYYY-MM-DD date, defaulting to tomorrow when empty."""
    if not value or not value.strip():
        return tomorrow(today)
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
