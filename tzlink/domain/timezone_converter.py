"""
Conversions between absolute instants and the wall clock of IANA timezones.

Every function here is pure apart from ``resolve_host_timezone``, which reads
the timezone of the executing environment. Unknown zone names are not caught:
pendulum raises ``InvalidTimezone`` and the error reaches the caller.
"""

from datetime import datetime
from typing import Iterable, List

import pendulum
from pendulum import DateTime
from pendulum.tz.exceptions import InvalidTimezone

from .models import WORLD_CITIES, CityClock, LocalTime, WorldCity

LABEL_FORMAT = "MMM D, YYYY [at] h:mm A zz"
CLOCK_TIME_FORMAT = "h:mm A"
CLOCK_DATE_FORMAT = "MMM D"
LOCALE = "en"


def to_instant(value: datetime, timezone: str | None = None) -> DateTime:
    """
    Normalize a datetime to a UTC pendulum instant.

    Args:
        value: Aware or naive datetime (stdlib or pendulum)
        timezone: Zone used to read a naive value; UTC when omitted

    Returns:
        The same point in time as a UTC ``DateTime``
    """
    return pendulum.instance(value, tz=timezone or "UTC").in_timezone("UTC")


def to_local(instant: datetime, timezone: str) -> LocalTime:
    """
    Read an instant on the wall clock of ``timezone``.

    Args:
        instant: Absolute point in time
        timezone: IANA timezone identifier

    Returns:
        LocalTime with hour, minute, weekday (0=Monday) and display label
    """
    local = to_instant(instant).in_timezone(timezone)
    return LocalTime(
        hour=local.hour,
        minute=local.minute,
        weekday=int(local.day_of_week),
        label=local.format(LABEL_FORMAT, locale=LOCALE),
    )


def format_in_timezone(instant: datetime, timezone: str) -> str:
    """Format an instant as e.g. ``Mar 12, 2024 at 10:00 AM EDT``."""
    return to_local(instant, timezone).label


def resolve_host_timezone() -> str:
    """Return the IANA name of the timezone the process runs in."""
    return pendulum.local_timezone().name


def is_valid_timezone(timezone: str) -> bool:
    """Check whether ``timezone`` names a zone in the IANA database."""
    if not timezone:
        return False
    try:
        pendulum.timezone(timezone)
    except (InvalidTimezone, ValueError):
        return False
    return True


def world_clock(now: datetime, cities: Iterable[WorldCity] = WORLD_CITIES) -> List[CityClock]:
    """
    Read ``now`` on the clocks of several cities.

    Args:
        now: Reference instant, supplied by the caller
        cities: Cities to show, in display order

    Returns:
        One CityClock per city, in the order given
    """
    instant = to_instant(now)
    clocks: List[CityClock] = []

    for city in cities:
        local = instant.in_timezone(city.timezone)
        clocks.append(
            CityClock(
                city=city,
                time_label=local.format(CLOCK_TIME_FORMAT, locale=LOCALE),
                date_label=local.format(CLOCK_DATE_FORMAT, locale=LOCALE),
            )
        )

    return clocks
