"""
Tests for timezone conversion helpers.
"""

from datetime import datetime, timedelta

import pendulum
import pytest
from pendulum.tz.exceptions import InvalidTimezone

from tzlink.domain.models import WORLD_CITIES, WorldCity
from tzlink.domain.timezone_converter import (
    format_in_timezone,
    is_valid_timezone,
    resolve_host_timezone,
    to_instant,
    to_local,
    world_clock,
)


INSTANT = pendulum.parse("2024-03-12T14:00:00Z")  # Tuesday


class TestToLocal:
    """Tests for to_local."""

    def test_new_york_after_dst_start(self):
        """Test New York is on EDT (UTC-4) two days after the switch."""
        local = to_local(INSTANT, "America/New_York")

        assert local.hour == 10
        assert local.minute == 0
        assert local.weekday == 1  # Tuesday
        assert local.label == "Mar 12, 2024 at 10:00 AM EDT"

    def test_tokyo_late_evening(self):
        """Test a zone ahead of UTC."""
        local = to_local(INSTANT, "Asia/Tokyo")

        assert local.hour == 23
        assert local.label == "Mar 12, 2024 at 11:00 PM JST"

    def test_weekday_follows_local_date(self):
        """Test the weekday is read on the local calendar, not in UTC."""
        sunday_evening_utc = pendulum.parse("2024-03-10T23:00:00Z")

        local = to_local(sunday_evening_utc, "Australia/Sydney")

        assert local.weekday == 0  # Monday morning in Sydney
        assert local.hour == 10

    def test_naive_datetime_is_read_as_utc(self):
        """Test stdlib naive datetimes are taken as UTC."""
        local = to_local(datetime(2024, 3, 12, 14, 0), "Europe/London")

        assert local.hour == 14

    def test_unknown_timezone_propagates(self):
        """Test an invalid zone is not masked."""
        with pytest.raises(InvalidTimezone):
            to_local(INSTANT, "Mars/Olympus_Mons")


class TestHelpers:
    """Tests for the remaining helpers."""

    def test_format_in_timezone(self):
        """Test the label format used for links."""
        assert format_in_timezone(INSTANT, "Europe/London") == "Mar 12, 2024 at 2:00 PM GMT"

    def test_to_instant_converts_to_utc(self):
        """Test naive values are read in the given zone and returned in UTC."""
        instant = to_instant(datetime(2024, 3, 12, 10, 0), "America/New_York")

        assert instant == pendulum.datetime(2024, 3, 12, 14, tz="UTC")
        assert instant.utcoffset() == timedelta(0)

    def test_is_valid_timezone(self):
        """Test timezone validation."""
        assert is_valid_timezone("Europe/Berlin")
        assert is_valid_timezone("UTC")
        assert not is_valid_timezone("Mars/Olympus_Mons")
        assert not is_valid_timezone("")

    def test_resolve_host_timezone(self, monkeypatch):
        """Test the host zone comes from pendulum's local timezone."""
        monkeypatch.setattr(pendulum, "local_timezone", lambda: pendulum.timezone("Asia/Tokyo"))

        assert resolve_host_timezone() == "Asia/Tokyo"


class TestWorldClock:
    """Tests for world_clock."""

    def test_default_cities_in_order(self):
        """Test every default city is shown, in order."""
        clocks = world_clock(INSTANT)

        assert [c.city for c in clocks] == list(WORLD_CITIES)
        assert clocks[0].time_label == "10:00 AM"
        assert clocks[0].date_label == "Mar 12"

    def test_date_rolls_over(self):
        """Test a city already on the next day."""
        sydney = WorldCity(name="Sydney", timezone="Australia/Sydney", country="Australia")

        clocks = world_clock(INSTANT, [sydney])

        assert clocks[0].time_label == "1:00 AM"
        assert clocks[0].date_label == "Mar 13"
