"""
Domain layer - Pure scheduling logic without I/O or clock access.
"""

from .business_hours import BusinessHoursClassifier
from .meeting_finder import OptimalMeetingTimeFinder
from .models import (
    DEFAULT_REGIONS,
    WORLD_CITIES,
    BusinessHoursWindow,
    CityClock,
    EventTimes,
    LocalTime,
    MeetingSuggestion,
    Region,
    RegionStatus,
    WorldCity,
)
from .nl_parser import NaturalLanguageTimeParser
from .slug import generate_slug, is_valid_slug

__all__ = [
    "DEFAULT_REGIONS",
    "WORLD_CITIES",
    "BusinessHoursClassifier",
    "BusinessHoursWindow",
    "CityClock",
    "EventTimes",
    "LocalTime",
    "MeetingSuggestion",
    "NaturalLanguageTimeParser",
    "OptimalMeetingTimeFinder",
    "Region",
    "RegionStatus",
    "WorldCity",
    "generate_slug",
    "is_valid_slug",
]
