"""
Tests for the SchedulingService orchestration layer.
"""

import pendulum
import pytest
from pendulum.tz.exceptions import InvalidTimezone

import tzlink
from tzlink.config import AppConfig
from tzlink.domain.models import Region, WorldCity
from tzlink.services import scheduling
from tzlink.services.scheduling import SchedulingService


NY = Region(name="NY", timezone="America/New_York")
LONDON = Region(name="London", timezone="Europe/London")


def _build_service(**overrides) -> SchedulingService:
    settings = {"timezone": "UTC"}
    settings.update(overrides)
    return SchedulingService.from_config(AppConfig(**settings))


def test_parse_natural_language():
    """Phrases are read in the configured timezone."""
    service = _build_service()

    result = service.parse_natural_language("tomorrow 2 pm", pendulum.datetime(2024, 3, 10, 10, tz="UTC"))

    assert result == pendulum.datetime(2024, 3, 11, 14, tz="UTC")
    assert service.timezone == "UTC"


def test_parse_natural_language_unrecognised():
    """Unknown phrases return None."""
    service = _build_service()

    assert service.parse_natural_language("whenever", pendulum.datetime(2024, 3, 10, tz="UTC")) is None


def test_business_hours_status_uses_configured_regions():
    """Without explicit regions the configured list is classified."""
    service = _build_service(regions=[
        {"name": "NY", "timezone": "America/New_York"},
        {"name": "Tokyo", "timezone": "Asia/Tokyo"},
    ])

    statuses = service.get_business_hours_status(pendulum.parse("2024-03-12T14:00:00Z"))

    assert [(s.region.name, s.is_business_hours) for s in statuses] == [("NY", True), ("Tokyo", False)]


def test_business_hours_status_with_explicit_regions():
    """Explicit regions override the configured ones, even when empty."""
    service = _build_service()
    instant = pendulum.parse("2024-03-12T14:00:00Z")

    assert len(service.get_business_hours_status(instant)) == 6
    assert [s.region for s in service.get_business_hours_status(instant, [LONDON])] == [LONDON]
    assert service.get_business_hours_status(instant, []) == []


def test_business_hours_window_from_config():
    """Configured business hours reach the classifier."""
    service = _build_service(business_hours={"start_hour": 6, "end_hour": 12})

    statuses = service.get_business_hours_status(pendulum.parse("2024-03-12T14:00:00Z"), [NY, LONDON])

    assert [s.is_business_hours for s in statuses] == [True, False]


def test_optimal_meeting_times():
    """End-to-end search yields the shared New York/London hours."""
    service = _build_service()
    base = pendulum.parse("2024-06-10T12:00:00Z")

    suggestions = service.get_optimal_meeting_times(base, [NY, LONDON])

    assert [s.offset_hours for s in suggestions] == [1, 2, 3]
    assert all(s.score == 1.0 for s in suggestions)


def test_optimal_meeting_times_respects_search_config():
    """max_results from the configuration limits the list."""
    service = _build_service(search={"max_results": 2})

    suggestions = service.get_optimal_meeting_times(pendulum.parse("2024-06-10T12:00:00Z"), [NY, LONDON])

    assert [s.offset_hours for s in suggestions] == [1, 2]


def test_generate_slug():
    """Slugs are delegated to the slug generator."""
    service = _build_service()

    assert service.generate_slug("Weekly Sync!", pendulum.datetime(2024, 3, 12, tz="UTC")) == "weekly-sync-mar-12"


def test_describe_event():
    """An event is rendered for the viewer and in its original zone."""
    service = _build_service()

    times = service.describe_event(
        pendulum.parse("2024-03-12T14:00:00Z"),
        viewer_timezone="Asia/Tokyo",
        event_timezone="America/New_York",
    )

    assert times.viewer_label == "Mar 12, 2024 at 11:00 PM JST"
    assert times.event_label == "Mar 12, 2024 at 10:00 AM EDT"


def test_world_clock_uses_configured_cities():
    """The world clock shows the configured cities only."""
    service = _build_service(world_cities=[{"name": "Berlin", "timezone": "Europe/Berlin", "country": "Germany"}])

    clocks = service.world_clock(pendulum.parse("2024-03-12T14:00:00Z"))

    assert [c.city for c in clocks] == [WorldCity(name="Berlin", timezone="Europe/Berlin", country="Germany")]
    assert clocks[0].time_label == "3:00 PM"


def test_invalid_timezone_propagates():
    """An unknown zone in a caller-supplied region is a hard failure."""
    service = _build_service()

    with pytest.raises(InvalidTimezone):
        service.get_business_hours_status(pendulum.parse("2024-03-12T14:00:00Z"), [Region("Nowhere", "Mars/Base")])


def test_module_level_functions(monkeypatch):
    """The package-level helpers use a default-configured service."""
    monkeypatch.setattr(scheduling, "_default_service", None)
    monkeypatch.setattr("tzlink.config.resolve_host_timezone", lambda: "UTC")

    now = pendulum.datetime(2024, 3, 11, tz="UTC")

    assert tzlink.parse_natural_language("next monday 9 am", now) == pendulum.datetime(2024, 3, 18, 9, tz="UTC")
    assert len(tzlink.get_business_hours_status(pendulum.parse("2024-03-12T14:00:00Z"))) == 6
    assert [s.offset_hours for s in tzlink.get_optimal_meeting_times(pendulum.parse("2024-06-10T12:00:00Z"), [NY, LONDON])] == [1, 2, 3]
    assert tzlink.generate_slug("Weekly Sync!", now) == "weekly-sync-mar-11"
    assert tzlink.is_valid_slug(tzlink.generate_slug("Weekly Sync!", now))
