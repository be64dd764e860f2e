"""Day index resolution relative to a week's start date.

A week can begin on any weekday, so "Tuesday" is day 0 in one plan and day 6
in another. Every before/after comparison goes through get_day_index; day
names are never compared directly.
"""

from datetime import date, datetime, timedelta

from mealwise.plans.constants import CANONICAL_DAYS

UNRESOLVED_DAY_INDEX = -1

WeekStart = date | datetime | str


def parse_week_start(week_start: WeekStart) -> date | None:
    """Normalize a week start to a calendar date.

    Accepts a date, a datetime, or an ISO string (date or datetime form; only
    the date part is used).

    Args:
        week_start: Week start in any accepted form

    Returns:
        The calendar date, or None if the value cannot be parsed
    """
    if isinstance(week_start, datetime):
        return week_start.date()
    if isinstance(week_start, date):
        return week_start
    try:
        return date.fromisoformat(week_start.strip()[:10])
    except (AttributeError, ValueError):
        return None


def ordered_days(week_start: WeekStart) -> tuple[str, ...]:
    """Day names in chronological order for the week starting on week_start.

    Returns an empty tuple when week_start cannot be parsed.
    """
    start = parse_week_start(week_start)
    if start is None:
        return ()
    # date.weekday() is 0=Monday; CANONICAL_DAYS is Sunday-first
    offset = (start.weekday() + 1) % 7
    return CANONICAL_DAYS[offset:] + CANONICAL_DAYS[:offset]


def get_day_index(day_name: str | None, week_start: WeekStart) -> int:
    """Get the chronological index (0-6) of a day within a week.

    Matching is exact-case against canonical English day names.

    Args:
        day_name: "Monday", "Tuesday", ...
        week_start: Date the week starts on

    Returns:
        0-6 where 0 is the first day of the week, or -1 if the day name or
        the week start cannot be resolved
    """
    days = ordered_days(week_start)
    if not day_name or day_name not in days:
        return UNRESOLVED_DAY_INDEX
    return days.index(day_name)


def date_for_day_index(week_start: WeekStart, day_index: int) -> date | None:
    """Calendar date of the day at day_index in the week."""
    start = parse_week_start(week_start)
    if start is None or not 0 <= day_index < 7:
        return None
    return start + timedelta(days=day_index)
