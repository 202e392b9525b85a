"""
Service layer helpers that wire configuration and domain logic.
"""

from .scheduling import (
    SchedulingService,
    generate_slug,
    get_business_hours_status,
    get_default_service,
    get_optimal_meeting_times,
    parse_natural_language,
)

__all__ = [
    "SchedulingService",
    "generate_slug",
    "get_business_hours_status",
    "get_default_service",
    "get_optimal_meeting_times",
    "parse_natural_language",
]
