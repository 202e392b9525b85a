"""
Business-hours classification across several regions.
"""

from datetime import datetime
from typing import List, Sequence

from .models import DEFAULT_REGIONS, BusinessHoursWindow, Region, RegionStatus
from .timezone_converter import to_local


class BusinessHoursClassifier:
    """
    Decides, per region, whether an instant falls inside business hours.

    The result is a plain per-region map: one status per input region, in
    input order, duplicates included.
    """

    def __init__(self, window: BusinessHoursWindow | None = None):
        self.window = window or BusinessHoursWindow()

    def classify(
        self,
        instant: datetime,
        regions: Sequence[Region] = DEFAULT_REGIONS
    ) -> List[RegionStatus]:
        """
        Classify an instant for each region.

        Args:
            instant: Absolute point in time
            regions: Regions to check, in display order

        Returns:
            List of RegionStatus, same length and order as ``regions``
        """
        statuses: List[RegionStatus] = []

        for region in regions:
            local = to_local(instant, region.timezone)
            statuses.append(
                RegionStatus(
                    region=region,
                    local_time_label=local.label,
                    is_business_hours=self.window.contains(local.hour, local.weekday),
                    local_hour=local.hour,
                    weekday=local.weekday,
                )
            )

        return statuses

    def is_business_hours(self, instant: datetime, timezone: str) -> bool:
        """Check a single timezone."""
        local = to_local(instant, timezone)
        return self.window.contains(local.hour, local.weekday)
