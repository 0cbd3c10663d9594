"""
Multi-criteria filtering and free-text search over incident records.
"""

import datetime
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from .records import IncidentRecord


@dataclass(frozen=True)
class FilterCriteria:
    """Filter values; every criterion left as None matches all records."""

    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    crime_types: Optional[FrozenSet[str]] = None
    areas: Optional[FrozenSet[str]] = None
    zones: Optional[FrozenSet[str]] = None
    police_stations: Optional[FrozenSet[str]] = None
    is_accident: Optional[bool] = None
    is_sensitive_zone: Optional[bool] = None

    def validate(self) -> None:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")

    def matches(self, record: IncidentRecord) -> bool:
        if self.start_date and record.date < self.start_date:
            return False
        if self.end_date and record.date > self.end_date:
            return False
        if self.crime_types and record.crime_type not in self.crime_types:
            return False
        if self.areas and record.area not in self.areas:
            return False
        if self.zones and record.zone not in self.zones:
            return False
        if self.police_stations and record.police_station not in self.police_stations:
            return False
        if self.is_accident is not None and record.is_accident != self.is_accident:
            return False
        if self.is_sensitive_zone is not None and record.is_sensitive_zone != self.is_sensitive_zone:
            return False
        return True


def matches_query(record: IncidentRecord, query: str) -> bool:
    """Case-insensitive substring search across the record's text fields."""
    needle = query.strip().lower()
    if not needle:
        return True
    haystack = (record.id, record.crime_type, record.area, record.zone,
                record.police_station, record.description or '')
    return any(needle in value.lower() for value in haystack)


def filter_records(records: List[IncidentRecord],
                   criteria: Optional[FilterCriteria] = None,
                   query: str = '') -> List[IncidentRecord]:
    """
    Return the records matching every criterion and the search query.

    Input order is preserved.
    """
    criteria = criteria or FilterCriteria()
    criteria.validate()
    return [
        record for record in records
        if criteria.matches(record) and matches_query(record, query)
    ]
