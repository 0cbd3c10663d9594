"""
Record validation and sanitization.

The engines in ``crime_hotspots.algorithms`` and ``crime_hotspots.analytics``
assume well-formed input; everything that checks field ranges lives here.
"""

import datetime
import logging
import re
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .records import IncidentRecord

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$')
_SCRIPT_PATTERN = re.compile(r'<script[^>]*>.*?</script>', re.IGNORECASE | re.DOTALL)
_TAG_PATTERN = re.compile(r'<[^>]+>')

DEFAULT_VALID_BOUNDS = {
    'min_lat': 28.4,
    'max_lat': 28.9,
    'min_lng': 76.8,
    'max_lng': 77.4
}


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == value


def validate_record(record: IncidentRecord,
                    today: Optional[datetime.date] = None) -> Tuple[bool, List[str]]:
    """
    Validate a single record for data integrity.

    Args:
        record: Record to check
        today: Reference date for the future-date check (defaults to today)

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []
    today = today or datetime.date.today()

    if _is_blank(record.id):
        errors.append('FIR ID is required')

    if _is_blank(record.crime_type):
        errors.append('Crime type is required')

    if record.date is None:
        errors.append('Date is required')
    elif not isinstance(record.date, datetime.date):
        errors.append('Invalid date format')
    else:
        record_date = record.date.date() if isinstance(record.date, datetime.datetime) else record.date
        if record_date > today:
            errors.append('Date cannot be in the future')

    if not isinstance(record.time, str) or not TIME_PATTERN.match(record.time):
        errors.append('Time must be in HH:MM or HH:MM:SS format')

    if not _is_number(record.latitude):
        errors.append('Latitude must be a valid number')
    elif not -90 <= record.latitude <= 90:
        errors.append('Latitude must be between -90 and 90')

    if not _is_number(record.longitude):
        errors.append('Longitude must be a valid number')
    elif not -180 <= record.longitude <= 180:
        errors.append('Longitude must be between -180 and 180')

    if _is_blank(record.area):
        errors.append('Area is required')

    if _is_blank(record.zone):
        errors.append('Zone is required')

    if _is_blank(record.police_station):
        errors.append('Police station is required')

    if not isinstance(record.is_accident, bool):
        errors.append('is_accident must be a boolean value')

    if not isinstance(record.is_sensitive_zone, bool):
        errors.append('is_sensitive_zone must be a boolean value')

    return len(errors) == 0, errors


def validate_batch(records: List[IncidentRecord],
                   today: Optional[datetime.date] = None
                   ) -> Tuple[List[IncidentRecord], List[Tuple[IncidentRecord, List[str]]]]:
    """Split records into valid ones and invalid ones paired with their errors."""
    valid_records = []
    invalid_records = []

    for record in records:
        is_valid, errors = validate_record(record, today)
        if is_valid:
            valid_records.append(record)
        else:
            invalid_records.append((record, errors))

    if invalid_records:
        logger.warning(f"{len(invalid_records)} of {len(records)} records failed validation")

    return valid_records, invalid_records


def find_duplicates(records: List[IncidentRecord]) -> List[IncidentRecord]:
    """Return every record whose id appears more than once."""
    id_counts = Counter(record.id for record in records)
    return [record for record in records if id_counts[record.id] > 1]


def sanitize_text(text: Optional[str]) -> str:
    """Remove script blocks and HTML tags from a text value."""
    if not text:
        return ''
    text = _SCRIPT_PATTERN.sub('', text)
    text = _TAG_PATTERN.sub('', text)
    return text.strip()


def sanitize_record(record: IncidentRecord) -> IncidentRecord:
    """Return a copy of the record with all free-text fields sanitized."""
    return replace(
        record,
        id=sanitize_text(record.id),
        crime_type=sanitize_text(record.crime_type),
        area=sanitize_text(record.area),
        zone=sanitize_text(record.zone),
        police_station=sanitize_text(record.police_station),
        description=sanitize_text(record.description) if record.description else None
    )


def is_valid_geo_location(latitude: float, longitude: float,
                          bounds: Optional[Dict[str, float]] = None) -> bool:
    """
    Check whether coordinates fall inside an operational region.

    Args:
        latitude, longitude: Point to check
        bounds: Dictionary with min_lat, max_lat, min_lng, max_lng
            (defaults to the Delhi region)

    Returns:
        True if the point is inside the bounds (edges inclusive)
    """
    valid_bounds = bounds or DEFAULT_VALID_BOUNDS
    return (valid_bounds['min_lat'] <= latitude <= valid_bounds['max_lat'] and
            valid_bounds['min_lng'] <= longitude <= valid_bounds['max_lng'])


def generate_validation_report(records: List[IncidentRecord],
                               today: Optional[datetime.date] = None) -> Dict:
    """Summarise validation results for a batch of records."""
    valid_records, invalid_records = validate_batch(records, today)
    duplicates = find_duplicates(records)

    error_counts: Dict[str, int] = {}
    for _, errors in invalid_records:
        for error in errors:
            error_counts[error] = error_counts.get(error, 0) + 1

    return {
        'total': len(records),
        'valid': len(valid_records),
        'invalid': len(invalid_records),
        'duplicates': len(duplicates),
        'errors': error_counts
    }
