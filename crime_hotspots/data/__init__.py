"""
Incident data model, intake and utilities.

This module contains:
- The IncidentRecord model
- CSV / GeoJSON loading and CSV export
- Record validation and sanitization
- In-memory repository and record filtering
- Distance calculations
"""

from .records import IncidentRecord
from .data_loader import (
    parse_incident_csv,
    load_incident_csv,
    load_incident_geojson,
    export_records_csv
)
from .validation import (
    validate_record,
    validate_batch,
    find_duplicates,
    sanitize_record,
    is_valid_geo_location,
    generate_validation_report
)
from .repository import IncidentRepository, BatchResult
from .filters import FilterCriteria, filter_records
from .distance_utils import haversine_distance

__all__ = [
    'IncidentRecord',
    'parse_incident_csv',
    'load_incident_csv',
    'load_incident_geojson',
    'export_records_csv',
    'validate_record',
    'validate_batch',
    'find_duplicates',
    'sanitize_record',
    'is_valid_geo_location',
    'generate_validation_report',
    'IncidentRepository',
    'BatchResult',
    'FilterCriteria',
    'filter_records',
    'haversine_distance'
]
