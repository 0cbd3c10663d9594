"""
Temporal and categorical incident analytics.
"""

from .insights import (
    InsightService,
    InsightBundle,
    HourCount,
    DayCount,
    MonthCount,
    CrimeTypeCount,
    AreaCount,
    generate_insights
)

__all__ = [
    'InsightService',
    'InsightBundle',
    'HourCount',
    'DayCount',
    'MonthCount',
    'CrimeTypeCount',
    'AreaCount',
    'generate_insights'
]
