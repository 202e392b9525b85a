"""
Tests for the optimal meeting time finder.
"""

from datetime import datetime

import pendulum
import pytest

from tzlink.domain.meeting_finder import OptimalMeetingTimeFinder
from tzlink.domain.models import DEFAULT_REGIONS, Region


NY = Region(name="NY", timezone="America/New_York")
LONDON = Region(name="London", timezone="Europe/London")
BERLIN = Region(name="Berlin", timezone="Europe/Berlin")

BASE = pendulum.parse("2024-06-10T12:00:00Z")  # Monday


class TestOptimalMeetingTimeFinder:
    """Tests for OptimalMeetingTimeFinder."""

    def test_new_york_and_london(self):
        """Test only the three hours both cities share are suggested."""
        finder = OptimalMeetingTimeFinder()

        suggestions = finder.find_optimal(BASE, [NY, LONDON])

        # Offset 0 is 08:00 in New York; offset +4 is 17:00 in London.
        assert [s.offset_hours for s in suggestions] == [1, 2, 3]
        assert [s.score for s in suggestions] == [1.0, 1.0, 1.0]
        assert [s.instant for s in suggestions] == [BASE.add(hours=1), BASE.add(hours=2), BASE.add(hours=3)]
        assert all(s.business_hours_count == 2 for s in suggestions)

    def test_ties_keep_chronological_order(self):
        """Test equal scores are ordered by ascending offset after better ones."""
        finder = OptimalMeetingTimeFinder()

        suggestions = finder.find_optimal(BASE, [NY, LONDON, BERLIN])

        # Full overlap at 13:00 and 14:00 UTC, two of three from 08:00 to 15:00 UTC.
        assert [s.offset_hours for s in suggestions] == [1, 2, -4, -3, -2]
        assert [round(s.score, 3) for s in suggestions] == [1.0, 1.0, 0.667, 0.667, 0.667]

    def test_max_results(self):
        """Test the result list is cut after max_results entries."""
        finder = OptimalMeetingTimeFinder(max_results=3)

        suggestions = finder.find_optimal(BASE, [NY, LONDON, BERLIN])

        assert [s.offset_hours for s in suggestions] == [1, 2, -4]

    def test_window_hours(self):
        """Test a narrower scan window limits the candidates."""
        finder = OptimalMeetingTimeFinder(window_hours=2)

        suggestions = finder.find_optimal(BASE, [NY, LONDON, BERLIN])

        assert [s.offset_hours for s in suggestions] == [1, 2, -2, -1, 0]

    def test_half_coverage_is_excluded(self):
        """Test a score of exactly 0.5 never makes the list."""
        finder = OptimalMeetingTimeFinder()

        suggestions = finder.find_optimal(BASE, [NY, LONDON])

        assert 0 not in [s.offset_hours for s in suggestions]
        assert all(s.score > 0.5 for s in suggestions)

    def test_weekend_yields_empty_list(self):
        """Test no suggestions when every candidate falls on a weekend."""
        finder = OptimalMeetingTimeFinder()
        saturday = pendulum.parse("2024-06-15T12:00:00Z")

        assert finder.find_optimal(saturday, [NY, LONDON]) == []

    def test_empty_regions(self):
        """Test no regions yields no suggestions."""
        assert OptimalMeetingTimeFinder().find_optimal(BASE, []) == []

    def test_default_regions_properties(self):
        """Test ranking invariants with the shipped regions."""
        finder = OptimalMeetingTimeFinder()

        suggestions = finder.find_optimal(pendulum.parse("2024-03-12T14:00:00Z"))

        assert len(suggestions) <= 5
        for suggestion in suggestions:
            assert 0.5 < suggestion.score <= 1.0
            assert len(suggestion.statuses) == len(DEFAULT_REGIONS)
        for first, second in zip(suggestions, suggestions[1:]):
            assert first.score >= second.score
            if first.score == second.score:
                assert first.offset_hours < second.offset_hours

    def test_naive_base_is_read_as_utc(self):
        """Test a stdlib naive base time is taken as UTC."""
        finder = OptimalMeetingTimeFinder()

        suggestions = finder.find_optimal(datetime(2024, 6, 10, 12, 0), [NY, LONDON])

        assert [s.instant for s in suggestions] == [BASE.add(hours=1), BASE.add(hours=2), BASE.add(hours=3)]

    def test_invalid_arguments(self):
        """Test constructor validation."""
        with pytest.raises(ValueError):
            OptimalMeetingTimeFinder(window_hours=-1)

        with pytest.raises(ValueError):
            OptimalMeetingTimeFinder(max_results=0)
