"""Timezone-aware open/closed evaluation for place opening hours."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.logger import get_logger
from app.schemas.place import OpeningHours

logger = get_logger(__name__)

_DAYS_PER_WEEK = 7


def _resolve_zone(timezone_id: str) -> ZoneInfo:
    try:
        return ZoneInfo(timezone_id)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
        logger.warning("Unknown timezone id, falling back to UTC: %s", timezone_id)
        return ZoneInfo("UTC")


def local_clock(timezone_id: str, now: datetime | None = None) -> tuple[int, int, int]:
    """Return ``(weekday, hour, minute)`` at ``now`` in the given timezone.

    Weekday follows the Places convention where 0 is Sunday. A naive ``now``
    is read as UTC.
    """
    instant = now or datetime.now(UTC)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)

    local = instant.astimezone(_resolve_zone(timezone_id))
    weekday = (local.weekday() + 1) % _DAYS_PER_WEEK
    return weekday, local.hour, local.minute


def is_place_open(
    opening_hours: OpeningHours | None,
    timezone_id: str,
    now: datetime | None = None,
) -> bool:
    """Decide whether a place is open at ``now``.

    Missing schedule data counts as open. A provider ``open_now`` flag wins
    over the periods.
    """
    if opening_hours is None:
        return True

    if isinstance(opening_hours.open_now, bool):
        return opening_hours.open_now

    if not opening_hours.periods:
        return True

    today, hour, minute = local_clock(timezone_id, now)
    current_minutes = hour * 60 + minute
    yesterday = (today + _DAYS_PER_WEEK - 1) % _DAYS_PER_WEEK

    for period in opening_hours.periods:
        open_minutes = period.open.minutes
        close_minutes = period.close.minutes
        crosses_midnight = close_minutes < open_minutes

        if period.open.day == today:
            if crosses_midnight:
                if current_minutes >= open_minutes or current_minutes < close_minutes:
                    return True
            elif open_minutes <= current_minutes < close_minutes:
                return True

        # A same-day close earlier than the open rolls over into the next day.
        close_day = period.close.day
        if crosses_midnight and close_day == period.open.day:
            close_day = (close_day + 1) % _DAYS_PER_WEEK

        if period.open.day == yesterday and close_day == today and current_minutes < close_minutes:
            return True

    return False


def open_status_text(is_open: bool) -> str:
    return "Open now" if is_open else "Closed"
