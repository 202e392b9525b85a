"""
tzlink - scheduling intelligence for shareable timezone links.
"""

__version__ = "0.1.0"

from .domain.models import DEFAULT_REGIONS, BusinessHoursWindow, MeetingSuggestion, Region, RegionStatus
from .domain.slug import is_valid_slug
from .services.scheduling import (
    SchedulingService,
    generate_slug,
    get_business_hours_status,
    get_optimal_meeting_times,
    parse_natural_language,
)

__all__ = [
    "DEFAULT_REGIONS",
    "BusinessHoursWindow",
    "MeetingSuggestion",
    "Region",
    "RegionStatus",
    "SchedulingService",
    "__version__",
    "generate_slug",
    "get_business_hours_status",
    "get_optimal_meeting_times",
    "is_valid_slug",
    "parse_natural_language",
]
