"""
Incident data loading: CSV and GeoJSON import, CSV export.
"""

import csv
import json
import logging
import os
import re
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from .records import IncidentRecord

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = [
    'id', 'crimetype', 'date', 'time', 'latitude', 'longitude',
    'area', 'zone', 'policestation'
]

EXPORT_COLUMNS = [
    'id', 'crimeType', 'date', 'time', 'latitude', 'longitude', 'area', 'zone',
    'policeStation', 'description', 'isAccident', 'isSensitiveZone'
]

_ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_SLASH_DATE = re.compile(r'^\d{2}/\d{2}/\d{4}$')


def parse_date(value: str) -> Optional[date]:
    """
    Parse a date in YYYY-MM-DD, DD/MM/YYYY or MM/DD/YYYY format.

    Slash dates are read day-first; the month-first reading is only used when
    the day-first one is impossible (e.g. 12/25/2025).
    """
    if _ISO_DATE.match(value):
        try:
            return datetime.strptime(value, '%Y-%m-%d').date()
        except ValueError:
            return None

    if _SLASH_DATE.match(value):
        for fmt in ('%d/%m/%Y', '%m/%d/%Y'):
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue

    return None


def _required(data: Dict[str, str], key: str, message: str) -> str:
    value = data.get(key, '').strip()
    if not value:
        raise ValueError(message)
    return value


def _coordinate(data: Dict[str, str], key: str, limit: float, name: str) -> float:
    raw = data.get(key, '')
    try:
        value = float(str(raw).strip())
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw}")
    if not -limit <= value <= limit:
        raise ValueError(f"Invalid {name}: {raw}")
    return value


def _flag(data: Dict[str, str], key: str) -> bool:
    return str(data.get(key, '')).strip().lower() == 'true'


def build_record(data: Dict[str, str]) -> IncidentRecord:
    """
    Convert a row of lower-cased field names to an IncidentRecord.

    Raises:
        ValueError: If a required field is missing or malformed
    """
    record_id = _required(data, 'id', 'FIR ID is required')
    crime_type = _required(data, 'crimetype', 'Crime type is required')

    date_str = _required(data, 'date', 'Date is required')
    record_date = parse_date(date_str)
    if record_date is None:
        raise ValueError(f"Invalid date format: {date_str}")

    time_str = _required(data, 'time', 'Time is required')
    latitude = _coordinate(data, 'latitude', 90, 'latitude')
    longitude = _coordinate(data, 'longitude', 180, 'longitude')

    area = _required(data, 'area', 'Area is required')
    zone = _required(data, 'zone', 'Zone is required')
    police_station = _required(data, 'policestation', 'Police station is required')

    description = str(data.get('description', '')).strip() or None

    return IncidentRecord(
        id=record_id,
        crime_type=crime_type,
        date=record_date,
        time=time_str,
        latitude=latitude,
        longitude=longitude,
        area=area,
        zone=zone,
        police_station=police_station,
        is_accident=_flag(data, 'isaccident'),
        is_sensitive_zone=_flag(data, 'issensitivezone'),
        description=description
    )


def _tokenize_line(line: str) -> List[str]:
    # One physical line at a time: an unbalanced quote ends with its own row
    return next(csv.reader([line]), [])


def parse_incident_csv(csv_content: str) -> Tuple[List[IncidentRecord], List[str]]:
    """
    Parse CSV text into incident records.

    Expected header (case-insensitive):
        id,crimeType,date,time,latitude,longitude,area,zone,policeStation,
        description,isAccident,isSensitiveZone

    Args:
        csv_content: Raw CSV text

    Returns:
        Tuple of (parsed records, error messages). Row errors are reported as
        "Row <n>: <message>" where the header is row 1.
    """
    records: List[IncidentRecord] = []
    errors: List[str] = []

    if not csv_content or not csv_content.strip():
        errors.append('CSV content is empty')
        return records, errors

    lines = [line for line in csv_content.splitlines() if line.strip()]
    if len(lines) < 2:
        errors.append('CSV must contain at least headers and one data row')
        return records, errors

    header = [column.strip().lower() for column in _tokenize_line(lines[0])]

    missing_headers = [h for h in REQUIRED_HEADERS if h not in header]
    if missing_headers:
        errors.append(f"Missing required headers: {', '.join(missing_headers)}")
        return records, errors

    rows = []
    for line in lines[1:]:
        fields = _tokenize_line(line)[:len(header)]
        rows.append(fields + [''] * (len(header) - len(fields)))
    frame = pd.DataFrame(rows, columns=header, dtype=str)

    for position, row in enumerate(frame.to_dict(orient='records')):
        row_number = position + 2
        try:
            records.append(build_record({k: str(v) for k, v in row.items()}))
        except ValueError as e:
            errors.append(f"Row {row_number}: {e}")

    if errors:
        logger.warning(f"CSV import rejected {len(errors)} rows")
    logger.info(f"Parsed {len(records)} incident records from CSV")
    return records, errors


def load_incident_csv(data_path: Union[str, os.PathLike]) -> Tuple[List[IncidentRecord], List[str]]:
    """
    Load incident records from a CSV file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Incident data file not found: {data_path}")

    logger.info(f"Loading incident data from: {data_path}")
    with open(data_path, 'r', encoding='utf-8') as f:
        return parse_incident_csv(f.read())


def load_incident_geojson(data_path: Union[str, os.PathLike],
                          bounds: Optional[Dict[str, float]] = None) -> List[IncidentRecord]:
    """
    Load incident records from a GeoJSON file of Point features.

    Feature properties use the same field names as the CSV header; the
    coordinates come from the geometry.

    Args:
        data_path: Path to the GeoJSON file
        bounds: Optional min_lat/max_lat/min_lng/max_lng filter

    Returns:
        List of incident records

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a GeoJSON FeatureCollection
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Incident data file not found: {data_path}")

    logger.info(f"Loading incident data from: {data_path}")

    try:
        with open(data_path, 'r', encoding='utf-8') as f:
            collection = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in incident data file: {e}")

    if 'features' not in collection:
        raise ValueError("Incident data must be in GeoJSON format with 'features' key")

    records = []
    skipped = 0
    for feature in collection['features']:
        geometry = feature.get('geometry') or {}
        if geometry.get('type') != 'Point' or len(geometry.get('coordinates', [])) < 2:
            skipped += 1
            continue

        lng, lat = geometry['coordinates'][0], geometry['coordinates'][1]
        if bounds and not (bounds['min_lat'] <= lat <= bounds['max_lat'] and
                           bounds['min_lng'] <= lng <= bounds['max_lng']):
            continue

        properties = {str(k).lower(): '' if v is None else str(v)
                      for k, v in (feature.get('properties') or {}).items()}
        properties['latitude'] = str(lat)
        properties['longitude'] = str(lng)
        try:
            records.append(build_record(properties))
        except ValueError as e:
            logger.debug(f"Skipping feature: {e}")
            skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} malformed features")
    logger.info(f"Loaded {len(records)} incident records")
    return records


def export_records_csv(records: List[IncidentRecord]) -> str:
    """Serialise records to CSV text readable by ``parse_incident_csv``."""
    rows = [
        {
            'id': record.id,
            'crimeType': record.crime_type,
            'date': record.date.isoformat(),
            'time': record.time,
            'latitude': record.latitude,
            'longitude': record.longitude,
            'area': record.area,
            'zone': record.zone,
            'policeStation': record.police_station,
            'description': record.description or '',
            'isAccident': 'true' if record.is_accident else 'false',
            'isSensitiveZone': 'true' if record.is_sensitive_zone else 'false'
        }
        for record in records
    ]
    frame = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    return frame.to_csv(index=False, lineterminator='\n')
