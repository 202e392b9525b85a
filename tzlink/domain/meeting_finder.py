"""
Search for meeting times that suit as many regions as possible.

This is pure domain logic: the base instant is always supplied by the caller
and nothing here reads the clock.
"""

import logging
from datetime import datetime
from typing import List, Sequence

from pendulum import DateTime

from .business_hours import BusinessHoursClassifier
from .models import DEFAULT_REGIONS, MeetingSuggestion, Region
from .timezone_converter import to_instant

logger = logging.getLogger(__name__)


MIN_SCORE = 0.5  # exclusive


class OptimalMeetingTimeFinder:
    """
    Ranks hourly candidates around a base instant by business-hours coverage.

    Algorithm:
    1. Generate candidates base + k hours for k = -window_hours .. +window_hours
    2. Score each candidate: regions inside business hours / all regions
    3. Drop candidates scoring 0.5 or less
    4. Sort by score descending; equal scores stay in chronological order
    5. Keep the first ``max_results``
    """

    def __init__(
        self,
        classifier: BusinessHoursClassifier | None = None,
        window_hours: int = 12,
        max_results: int = 5
    ):
        if window_hours < 0:
            raise ValueError(f"window_hours must not be negative, got {window_hours}")
        if max_results < 1:
            raise ValueError(f"max_results must be at least 1, got {max_results}")

        self.classifier = classifier or BusinessHoursClassifier()
        self.window_hours = window_hours
        self.max_results = max_results

    def find_optimal(
        self,
        base_instant: datetime,
        regions: Sequence[Region] = DEFAULT_REGIONS
    ) -> List[MeetingSuggestion]:
        """
        Find the best meeting times around ``base_instant``.

        Args:
            base_instant: Centre of the search window
            regions: Regions whose business hours count towards the score

        Returns:
            Up to ``max_results`` suggestions; empty if nothing clears 0.5
        """
        regions = list(regions)
        if not regions:
            return []

        candidates = [
            suggestion
            for suggestion in self._score_candidates(to_instant(base_instant), regions)
            if suggestion.score > MIN_SCORE
        ]

        # Offset as secondary key keeps ties chronological regardless of
        # the order the candidates were evaluated in.
        ranked = sorted(candidates, key=lambda s: (-s.score, s.offset_hours))

        logger.debug(
            "Scanned %d candidates around %s for %d regions, %d above threshold",
            2 * self.window_hours + 1,
            base_instant,
            len(regions),
            len(candidates),
        )

        return ranked[:self.max_results]

    def _score_candidates(self, base: DateTime, regions: List[Region]) -> List[MeetingSuggestion]:
        """Score every hourly candidate in ascending offset order."""
        suggestions: List[MeetingSuggestion] = []

        for offset in range(-self.window_hours, self.window_hours + 1):
            candidate = base.add(hours=offset)
            statuses = tuple(self.classifier.classify(candidate, regions))
            in_hours = sum(1 for status in statuses if status.is_business_hours)

            suggestions.append(
                MeetingSuggestion(
                    instant=candidate,
                    score=in_hours / len(statuses),
                    statuses=statuses,
                    offset_hours=offset,
                )
            )

        return suggestions
