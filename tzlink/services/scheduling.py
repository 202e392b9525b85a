"""
Application service exposing the scheduling engine to the outer layers.

The service wires the parser, classifier and meeting finder from
configuration and offers the operations the UI and the link pages consume.
It never reads the clock: every reference time is passed in by the caller,
which keeps the whole engine deterministic under test.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from pendulum import DateTime

from ..config import AppConfig
from ..domain import slug
from ..domain.business_hours import BusinessHoursClassifier
from ..domain.meeting_finder import OptimalMeetingTimeFinder
from ..domain.models import (
    DEFAULT_REGIONS,
    WORLD_CITIES,
    CityClock,
    EventTimes,
    MeetingSuggestion,
    Region,
    RegionStatus,
    WorldCity,
)
from ..domain.nl_parser import NaturalLanguageTimeParser
from ..domain.timezone_converter import format_in_timezone, world_clock

logger = logging.getLogger(__name__)


class SchedulingService:
    """
    Facade over the scheduling engine.

    Components are injected so tests can use fixed timezones and windows;
    ``from_config`` builds them from an ``AppConfig``.
    """

    def __init__(
        self,
        parser: NaturalLanguageTimeParser,
        classifier: BusinessHoursClassifier,
        finder: OptimalMeetingTimeFinder,
        regions: Sequence[Region] = DEFAULT_REGIONS,
        world_cities: Sequence[WorldCity] = WORLD_CITIES,
    ) -> None:
        self._parser = parser
        self._classifier = classifier
        self._finder = finder
        self._regions = tuple(regions)
        self._world_cities = tuple(world_cities)

    @classmethod
    def from_config(cls, config: AppConfig) -> "SchedulingService":
        """Build the service and its components from configuration."""
        classifier = BusinessHoursClassifier(window=config.business_hours.to_window())
        finder = OptimalMeetingTimeFinder(
            classifier=classifier,
            window_hours=config.search.window_hours,
            max_results=config.search.max_results,
        )
        parser = NaturalLanguageTimeParser(timezone=config.resolved_timezone())

        logger.debug(
            "Scheduling service ready: timezone=%s, %d regions, business hours %d-%d",
            parser.timezone,
            len(config.regions),
            config.business_hours.start_hour,
            config.business_hours.end_hour,
        )

        return cls(
            parser=parser,
            classifier=classifier,
            finder=finder,
            regions=config.get_regions(),
            world_cities=config.get_world_cities(),
        )

    @property
    def timezone(self) -> str:
        """Timezone natural-language phrases are read in."""
        return self._parser.timezone

    @property
    def regions(self) -> tuple[Region, ...]:
        return self._regions

    def parse_natural_language(self, text: str, now: datetime) -> Optional[DateTime]:
        """Parse a phrase like "tomorrow 2 pm"; None when not understood."""
        return self._parser.parse(text, now)

    def get_business_hours_status(
        self,
        instant: datetime,
        regions: Sequence[Region] | None = None,
    ) -> List[RegionStatus]:
        """Classify ``instant`` for the given or configured regions."""
        return self._classifier.classify(instant, self._resolve_regions(regions))

    def get_optimal_meeting_times(
        self,
        base_instant: datetime,
        regions: Sequence[Region] | None = None,
    ) -> List[MeetingSuggestion]:
        """Rank meeting times around ``base_instant`` for the given or configured regions."""
        return self._finder.find_optimal(base_instant, self._resolve_regions(regions))

    def generate_slug(self, title: str, when: date) -> str:
        """Slug for a shared event link; uniqueness is the caller's concern."""
        return slug.generate_slug(title, when)

    def describe_event(
        self,
        instant: datetime,
        viewer_timezone: str,
        event_timezone: str,
    ) -> EventTimes:
        """
        Render an event for a link viewer.

        Args:
            instant: Event start
            viewer_timezone: Timezone of the person opening the link
            event_timezone: Timezone the organiser scheduled the event in

        Returns:
            EventTimes with both labels
        """
        return EventTimes(
            viewer_label=format_in_timezone(instant, viewer_timezone),
            event_label=format_in_timezone(instant, event_timezone),
        )

    def world_clock(self, now: datetime) -> List[CityClock]:
        """Read ``now`` on the configured world clock cities."""
        return world_clock(now, self._world_cities)

    def _resolve_regions(self, regions: Sequence[Region] | None) -> Sequence[Region]:
        # An explicitly empty list is honoured rather than replaced by defaults.
        return self._regions if regions is None else regions


_default_service: SchedulingService | None = None


def get_default_service() -> SchedulingService:
    """Service built from default settings, created on first use."""
    global _default_service
    if _default_service is None:
        _default_service = SchedulingService.from_config(AppConfig())
    return _default_service


def parse_natural_language(text: str, now: datetime) -> Optional[DateTime]:
    """Parse a phrase with the default service; None when unrecognised."""
    return get_default_service().parse_natural_language(text, now)


def get_business_hours_status(
    instant: datetime,
    regions: Sequence[Region] | None = None,
) -> List[RegionStatus]:
    """Business-hours status per region from the default service."""
    return get_default_service().get_business_hours_status(instant, regions)


def get_optimal_meeting_times(
    base_instant: datetime,
    regions: Sequence[Region] | None = None,
) -> List[MeetingSuggestion]:
    """Ranked meeting times from the default service."""
    return get_default_service().get_optimal_meeting_times(base_instant, regions)


def generate_slug(title: str, when: date) -> str:
    """Slug for a shared event link."""
    return slug.generate_slug(title, when)
