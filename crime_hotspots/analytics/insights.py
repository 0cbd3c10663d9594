"""
Insight generation: temporal and categorical incident statistics.

Analyzes:
- Peak incident hours
- Day-of-week and monthly trends
- Crime type and area distribution
- Simple patrol-planning heuristics (predicted peak hours, high-risk days)

Everything here is descriptive: "predicted" peak hours are simply the
busiest hours observed so far.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ..config.hotspot_config import HotspotConfig
from ..data.records import IncidentRecord

logger = logging.getLogger(__name__)

DAY_NAMES = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']
MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


@dataclass(frozen=True)
class HourCount:
    hour: int
    count: int


@dataclass(frozen=True)
class DayCount:
    day: str
    count: int


@dataclass(frozen=True)
class MonthCount:
    month: str
    count: int


@dataclass(frozen=True)
class CrimeTypeCount:
    type: str
    count: int


@dataclass(frozen=True)
class AreaCount:
    area: str
    count: int


@dataclass(frozen=True)
class InsightBundle:
    """All statistics derived from one record set."""
    peak_hours: List[HourCount]
    day_wise_trends: List[DayCount]
    top_crime_types: List[CrimeTypeCount]
    monthly_trends: List[MonthCount]
    area_statistics: List[AreaCount]
    predicted_peak_hours: List[int]
    high_risk_days: List[DayCount]
    total_records: int
    generated_at: datetime
    total_hotspots: int = field(default=0)


def _ranked(counts: Counter) -> List:
    # sorted() is stable, so ties keep first-seen order
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


class InsightService:
    """
    Generate incident patterns and statistical insights.

    Time Complexity: O(n) counting per statistic plus O(k log k) ranking
    where k is the number of distinct keys.
    """

    def __init__(self, config: Optional[HotspotConfig] = None):
        self.config = config or HotspotConfig()

    def generate_insights(self, records: List[IncidentRecord],
                          generated_at: Optional[datetime] = None) -> InsightBundle:
        """Generate the full insight bundle for a record set."""
        day_trends = self.get_day_wise_trends(records)
        peak_hours = self.get_peak_hours(records)

        bundle = InsightBundle(
            peak_hours=peak_hours,
            day_wise_trends=day_trends,
            top_crime_types=self.get_top_crime_types(records),
            monthly_trends=self.get_monthly_trends(records),
            area_statistics=self.get_area_statistics(records),
            predicted_peak_hours=[bucket.hour for bucket in
                                  peak_hours[:self.config.predicted_peak_hour_count]],
            high_risk_days=self._above_average_days(day_trends),
            total_records=len(records),
            generated_at=generated_at or datetime.now(timezone.utc)
        )

        logger.debug(f"Generated insights for {len(records)} records")
        return bundle

    def get_peak_hours(self, records: List[IncidentRecord]) -> List[HourCount]:
        """
        Count incidents per hour of day.

        Returns all 24 hours ranked by count; ties keep the lower hour first.
        """
        hour_counts = Counter(record.hour for record in records)
        hours = [HourCount(hour=hour, count=hour_counts.get(hour, 0)) for hour in range(24)]
        return sorted(hours, key=lambda bucket: bucket.count, reverse=True)

    def get_day_wise_trends(self, records: List[IncidentRecord]) -> List[DayCount]:
        """Count incidents per day of week, Sunday first."""
        day_counts = Counter(record.day_of_week for record in records)
        return [DayCount(day=day, count=day_counts.get(index, 0))
                for index, day in enumerate(DAY_NAMES)]

    def get_top_crime_types(self, records: List[IncidentRecord],
                            limit: Optional[int] = None) -> List[CrimeTypeCount]:
        """Most frequent crime types, at most ``limit`` entries."""
        if limit is None:
            limit = self.config.top_crime_types_limit
        type_counts = Counter(record.crime_type for record in records)
        return [CrimeTypeCount(type=crime_type, count=count)
                for crime_type, count in _ranked(type_counts)[:limit]]

    def get_monthly_trends(self, records: List[IncidentRecord]) -> List[MonthCount]:
        """Count incidents per calendar month, January first."""
        month_counts = Counter(record.month for record in records)
        return [MonthCount(month=month, count=month_counts.get(index, 0))
                for index, month in enumerate(MONTH_NAMES)]

    def get_area_statistics(self, records: List[IncidentRecord]) -> List[AreaCount]:
        """Incident counts per area, busiest first."""
        area_counts = Counter(record.area for record in records)
        return [AreaCount(area=area, count=count) for area, count in _ranked(area_counts)]

    def get_predicted_peak_hours(self, records: List[IncidentRecord]) -> List[int]:
        """Busiest hours for patrol planning."""
        peak_hours = self.get_peak_hours(records)[:self.config.predicted_peak_hour_count]
        return [bucket.hour for bucket in peak_hours]

    def get_high_risk_days(self, records: List[IncidentRecord]) -> List[str]:
        """Names of days with more incidents than the daily mean."""
        return [bucket.day for bucket in self._above_average_days(self.get_day_wise_trends(records))]

    @staticmethod
    def calculate_trend_change(current: List[IncidentRecord], previous: List[IncidentRecord]) -> float:
        """
        Percentage change in incident count between two periods.

        Returns 100 when the previous period is empty and the current one is
        not, 0 when both are empty.
        """
        if not previous:
            return 100.0 if current else 0.0

        change = (len(current) - len(previous)) / len(previous) * 100
        return round(change, 2)

    @staticmethod
    def _above_average_days(day_trends: List[DayCount]) -> List[DayCount]:
        average = sum(bucket.count for bucket in day_trends) / 7
        return [bucket for bucket in day_trends if bucket.count > average]


def generate_insights(records: List[IncidentRecord],
                      config: Optional[HotspotConfig] = None,
                      generated_at: Optional[datetime] = None) -> InsightBundle:
    """Generate insights for a record set with the given configuration."""
    return InsightService(config).generate_insights(records, generated_at)
