"""
Domain models for regions, business hours and meeting suggestions.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple

from pendulum import DateTime


MONDAY_TO_FRIDAY: FrozenSet[int] = frozenset(range(5))  # 0=Monday, 6=Sunday


@dataclass(frozen=True)
class Region:
    """A named place whose working day is judged in its own IANA timezone."""
    name: str
    timezone: str

    def __str__(self) -> str:
        return f"{self.name} ({self.timezone})"


@dataclass(frozen=True)
class BusinessHoursWindow:
    """
    Working hours applied uniformly to every region.

    Invariant: 0 <= start_hour < end_hour <= 24 and work days within 0..6.
    The end hour is exclusive, so 9-17 covers 09:00 up to 16:59.
    """
    start_hour: int = 9
    end_hour: int = 17
    work_days: FrozenSet[int] = field(default_factory=lambda: MONDAY_TO_FRIDAY)

    def __post_init__(self):
        if not 0 <= self.start_hour <= 23:
            raise ValueError(f"start_hour must be between 0 and 23, got {self.start_hour}")
        if not 1 <= self.end_hour <= 24:
            raise ValueError(f"end_hour must be between 1 and 24, got {self.end_hour}")
        if self.end_hour <= self.start_hour:
            raise ValueError(
                f"end_hour {self.end_hour} must be later than start_hour {self.start_hour}"
            )
        invalid_days = sorted(day for day in self.work_days if day not in range(7))
        if invalid_days:
            raise ValueError(f"work_days must be between 0 and 6, got {invalid_days}")
        # Accept any iterable of weekdays but store an immutable set.
        object.__setattr__(self, "work_days", frozenset(self.work_days))

    def contains(self, hour: int, weekday: int) -> bool:
        """Check whether a local hour on a local weekday is inside the window."""
        return self.start_hour <= hour < self.end_hour and weekday in self.work_days


@dataclass(frozen=True)
class LocalTime:
    """An instant as seen on the wall clock of one timezone."""
    hour: int
    minute: int
    weekday: int  # 0=Monday, 6=Sunday
    label: str


@dataclass(frozen=True)
class RegionStatus:
    """Business-hours verdict for one region at one instant."""
    region: Region
    local_time_label: str
    is_business_hours: bool
    local_hour: int
    weekday: int


@dataclass(frozen=True)
class MeetingSuggestion:
    """
    A candidate meeting instant ranked by business-hours coverage.

    ``offset_hours`` is the displacement from the base instant the search
    started from; ``score`` is the share of regions inside business hours.
    """
    instant: DateTime
    score: float
    statuses: Tuple[RegionStatus, ...]
    offset_hours: int

    @property
    def business_hours_count(self) -> int:
        """Number of regions inside business hours at this instant."""
        return sum(1 for status in self.statuses if status.is_business_hours)

    def regions_in_hours(self) -> List[str]:
        """Names of the regions that are inside business hours."""
        return [status.region.name for status in self.statuses if status.is_business_hours]


@dataclass(frozen=True)
class WorldCity:
    """A city shown on the world clock."""
    name: str
    timezone: str
    country: str


@dataclass(frozen=True)
class CityClock:
    """Formatted wall-clock reading for one city."""
    city: WorldCity
    time_label: str
    date_label: str


@dataclass(frozen=True)
class EventTimes:
    """An event instant rendered for its viewer and for its organiser."""
    viewer_label: str
    event_label: str


DEFAULT_REGIONS: Tuple[Region, ...] = (
    Region(name="US East Coast", timezone="America/New_York"),
    Region(name="US West Coast", timezone="America/Los_Angeles"),
    Region(name="Europe", timezone="Europe/London"),
    Region(name="Asia Pacific", timezone="Asia/Tokyo"),
    Region(name="Pakistan", timezone="Asia/Karachi"),
    Region(name="Australia", timezone="Australia/Sydney"),
)

WORLD_CITIES: Tuple[WorldCity, ...] = (
    WorldCity(name="New York", timezone="America/New_York", country="USA"),
    WorldCity(name="London", timezone="Europe/London", country="UK"),
    WorldCity(name="Tokyo", timezone="Asia/Tokyo", country="Japan"),
    WorldCity(name="Sydney", timezone="Australia/Sydney", country="Australia"),
    WorldCity(name="Islamabad", timezone="Asia/Karachi", country="Pakistan"),
    WorldCity(name="Moscow", timezone="Europe/Moscow", country="Russia"),
    WorldCity(name="Berlin", timezone="Europe/Berlin", country="Germany"),
    WorldCity(name="Beijing", timezone="Asia/Shanghai", country="China"),
)
