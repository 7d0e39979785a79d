"""
Time-Window Resolution

Maps a named time filter or explicit bounds to an inclusive day interval
and derives the equal-length period that precedes it.
"""

from datetime import date, timedelta
from typing import Optional, Union

import structlog

from agency_dashboard.core.exceptions import InvalidRange, UnknownFilter, ValidationError
from agency_dashboard.core.models import TimeFilter, TimeWindow

logger = structlog.get_logger(__name__)


def parse_filter(token: Union[str, TimeFilter]) -> TimeFilter:
    """Convert a filter token to a ``TimeFilter``, raising ``UnknownFilter``"""
    if isinstance(token, TimeFilter):
        return token
    try:
        return TimeFilter(str(token).strip().lower())
    except ValueError:
        raise UnknownFilter(
            f"Unknown time filter: {token!r}",
            details={"allowed": [f.value for f in TimeFilter]},
        ) from None


def make_window(start: date, end: date) -> TimeWindow:
    """Build a window from explicit bounds, rejecting reversed ranges"""
    if end < start:
        raise InvalidRange(
            "End date precedes start date",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )
    return TimeWindow(start=start, end=end)


def resolve_time_window(
    time_filter: Optional[Union[str, TimeFilter]] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> TimeWindow:
    """
    Resolve a time filter or explicit range to a concrete window.

    Explicit ``start``/``end`` take precedence over the filter token.

    Args:
        time_filter: Filter token (today, yesterday, 7d, 30d, mtd, ytd, custom)
        start: Explicit inclusive start date
        end: Explicit inclusive end date
        today: Reference day, defaults to the current date

    Returns:
        TimeWindow with inclusive bounds

    Raises:
        InvalidRange: ``end`` precedes ``start``
        UnknownFilter: token not recognised and no explicit bounds given
        ValidationError: only one bound given, or ``custom`` without bounds
    """
    if start is not None and end is not None:
        return make_window(start, end)

    if start is not None or end is not None:
        raise ValidationError("Both start and end dates are required for an explicit range")

    if time_filter is None:
        raise UnknownFilter("A time filter or an explicit date range is required")

    resolved = parse_filter(time_filter)
    today = today or date.today()

    if resolved is TimeFilter.TODAY:
        window = TimeWindow(start=today, end=today)
    elif resolved is TimeFilter.YESTERDAY:
        yesterday = today - timedelta(days=1)
        window = TimeWindow(start=yesterday, end=yesterday)
    elif resolved is TimeFilter.LAST_7_DAYS:
        window = TimeWindow(start=today - timedelta(days=7), end=today)
    elif resolved is TimeFilter.LAST_30_DAYS:
        window = TimeWindow(start=today - timedelta(days=30), end=today)
    elif resolved is TimeFilter.MONTH_TO_DATE:
        window = TimeWindow(start=today.replace(day=1), end=today)
    elif resolved is TimeFilter.YEAR_TO_DATE:
        window = TimeWindow(start=today.replace(month=1, day=1), end=today)
    else:
        raise ValidationError("The custom filter requires explicit start and end dates")

    logger.debug(
        "Time window resolved",
        time_filter=resolved.value,
        start=window.start.isoformat(),
        end=window.end.isoformat(),
    )
    return window


def previous_period(window: TimeWindow) -> TimeWindow:
    """
    Window of identical length ending the day before ``window.start``.

    A single-day window compares against the day before, a 7d window
    (eight calendar days) against the eight days before it.

    The shift is the inclusive day count, not ``end - start``. Shifting by
    ``end - start`` would compare ``today`` with itself and make longer
    windows overlap the current one on their first day.
    """
    shift = timedelta(days=window.days)
    return TimeWindow(start=window.start - shift, end=window.end - shift)
