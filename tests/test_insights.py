"""
Tests for temporal and categorical insight generation.
"""

from datetime import date, datetime, timezone

import pytest

from crime_hotspots.analytics.insights import (
    AreaCount, CrimeTypeCount, DayCount, HourCount, InsightService, generate_insights
)
from crime_hotspots.config.hotspot_config import HotspotConfig


@pytest.fixture()
def service():
    return InsightService()


@pytest.fixture()
def hourly_records(record_factory):
    return [
        record_factory("A", time="14:30"),
        record_factory("B", time="14:45"),
        record_factory("C", time="22:00"),
    ]


class TestPeakHours:

    def test_busiest_hours_first(self, service, hourly_records):
        peak_hours = service.get_peak_hours(hourly_records)

        assert len(peak_hours) == 24
        assert peak_hours[0] == HourCount(hour=14, count=2)
        assert peak_hours[1] == HourCount(hour=22, count=1)
        # Zero-count hours follow in clock order
        assert [bucket.hour for bucket in peak_hours[2:5]] == [0, 1, 2]

    def test_predicted_peak_hours(self, service, hourly_records):
        assert service.get_predicted_peak_hours(hourly_records) == [14, 22, 0]

    def test_time_with_seconds(self, service, record_factory):
        peak_hours = service.get_peak_hours([record_factory(time="07:05:59")])
        assert peak_hours[0] == HourCount(hour=7, count=1)

    def test_empty_records(self, service):
        assert service.get_predicted_peak_hours([]) == [0, 1, 2]


class TestDayAndMonthTrends:

    def test_day_order_starts_sunday(self, service, sample_records):
        trends = service.get_day_wise_trends(sample_records)

        assert [bucket.day for bucket in trends] == [
            'Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday'
        ]
        # 2025-01-19 is a Sunday, 20th Monday, 21st Tuesday
        assert [bucket.count for bucket in trends] == [1, 1, 1, 0, 0, 0, 0]

    def test_high_risk_days_are_above_daily_mean(self, service, record_factory):
        records = (
            [record_factory(f"S{i}", record_date=date(2025, 1, 19)) for i in range(3)] +
            [record_factory("M0", record_date=date(2025, 1, 20))]
        )
        # Mean is 4 / 7, so only Sunday and Monday exceed it
        assert service.get_high_risk_days(records) == ['Sunday', 'Monday']

    def test_uniform_week_has_no_high_risk_days(self, service, record_factory):
        records = [record_factory(f"D{i}", record_date=date(2025, 1, 19 + i)) for i in range(7)]
        assert service.get_high_risk_days(records) == []

    def test_monthly_trends(self, service, record_factory):
        records = [
            record_factory("A", record_date=date(2025, 1, 5)),
            record_factory("B", record_date=date(2024, 12, 31)),
            record_factory("C", record_date=date(2025, 12, 1)),
        ]
        trends = service.get_monthly_trends(records)

        assert len(trends) == 12
        assert trends[0].month == 'Jan'
        assert trends[0].count == 1
        assert trends[11].month == 'Dec'
        assert trends[11].count == 2


class TestCategoricalStatistics:

    def test_top_crime_types_ranked(self, service, record_factory):
        records = [
            record_factory("A", crime_type="Theft"),
            record_factory("B", crime_type="Assault"),
            record_factory("C", crime_type="Assault"),
            record_factory("D", crime_type="Robbery"),
        ]
        assert service.get_top_crime_types(records) == [
            CrimeTypeCount(type="Assault", count=2),
            CrimeTypeCount(type="Theft", count=1),
            CrimeTypeCount(type="Robbery", count=1),
        ]

    def test_top_crime_types_limit(self, service, record_factory):
        records = [record_factory(f"R{i}", crime_type=f"Type {i}") for i in range(15)]

        assert len(service.get_top_crime_types(records)) == 10
        assert len(service.get_top_crime_types(records, limit=3)) == 3
        assert service.get_top_crime_types(records, limit=0) == []

    def test_area_statistics(self, service, sample_records):
        assert service.get_area_statistics(sample_records) == [
            AreaCount(area="Downtown", count=2),
            AreaCount(area="Uptown", count=1),
        ]


class TestTrendChange:

    def test_increase(self, record_factory):
        current = [record_factory(f"C{i}") for i in range(3)]
        previous = [record_factory(f"P{i}") for i in range(2)]
        assert InsightService.calculate_trend_change(current, previous) == 50.0

    def test_decrease_is_rounded(self, record_factory):
        current = [record_factory("C0")]
        previous = [record_factory(f"P{i}") for i in range(3)]
        assert InsightService.calculate_trend_change(current, previous) == -66.67

    def test_empty_previous_period(self, record_factory):
        assert InsightService.calculate_trend_change([record_factory()], []) == 100.0
        assert InsightService.calculate_trend_change([], []) == 0.0


class TestGenerateInsights:

    def test_bundle(self, sample_records):
        generated_at = datetime(2025, 2, 1, tzinfo=timezone.utc)
        bundle = generate_insights(sample_records, generated_at=generated_at)

        assert bundle.total_records == 3
        assert bundle.generated_at == generated_at
        assert bundle.peak_hours[0] == HourCount(hour=14, count=2)
        assert bundle.predicted_peak_hours == [14, 22, 0]
        assert bundle.high_risk_days == [
            DayCount(day='Sunday', count=1),
            DayCount(day='Monday', count=1),
            DayCount(day='Tuesday', count=1),
        ]
        assert bundle.top_crime_types[0] == CrimeTypeCount(type="Theft", count=1)
        assert bundle.total_hotspots == 0

    def test_empty_records(self):
        bundle = generate_insights([])

        assert bundle.total_records == 0
        assert all(bucket.count == 0 for bucket in bundle.day_wise_trends)
        assert bundle.high_risk_days == []
        assert bundle.top_crime_types == []
        assert bundle.area_statistics == []

    def test_config_controls_prediction_count(self, hourly_records):
        config = HotspotConfig(predicted_peak_hour_count=1)
        assert generate_insights(hourly_records, config).predicted_peak_hours == [14]
