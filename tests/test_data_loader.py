"""
Tests for CSV/GeoJSON import and CSV export.
"""

import json
from datetime import date

import pytest

from crime_hotspots.data.data_loader import (
    export_records_csv, load_incident_csv, load_incident_geojson, parse_date, parse_incident_csv
)

HEADER = "id,crimeType,date,time,latitude,longitude,area,zone,policeStation,description,isAccident,isSensitiveZone"


def csv_text(*rows):
    return "\n".join((HEADER,) + rows)


class TestParseDate:

    def test_iso(self):
        assert parse_date("2025-01-20") == date(2025, 1, 20)

    def test_day_first(self):
        assert parse_date("05/01/2025") == date(2025, 1, 5)

    def test_month_first_fallback(self):
        assert parse_date("12/25/2025") == date(2025, 12, 25)

    def test_invalid(self):
        assert parse_date("2025-13-40") is None
        assert parse_date("yesterday") is None


class TestParseIncidentCsv:

    def test_valid_rows(self):
        records, errors = parse_incident_csv(csv_text(
            "FIR001,Theft,2025-01-20,14:30,28.5355,77.3910,Downtown,Zone A,Central PS,Phone snatched,false,true",
            "FIR002,Accident,20/01/2025,09:15,28.5360,77.3920,Downtown,Zone A,Central PS,,TRUE,false",
        ))

        assert errors == []
        assert [record.id for record in records] == ['FIR001', 'FIR002']
        first, second = records
        assert first.latitude == 28.5355
        assert first.description == 'Phone snatched'
        assert first.is_sensitive_zone is True
        assert first.is_accident is False
        assert second.date == date(2025, 1, 20)
        assert second.description is None
        assert second.is_accident is True

    def test_headers_are_case_insensitive(self):
        text = ("ID,CRIMETYPE,DATE,TIME,LATITUDE,LONGITUDE,AREA,ZONE,POLICESTATION\n"
                "FIR001,Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS")
        records, errors = parse_incident_csv(text)
        assert errors == []
        assert records[0].crime_type == 'Theft'
        assert records[0].is_accident is False

    def test_quoted_fields(self):
        records, errors = parse_incident_csv(csv_text(
            'FIR001,Theft,2025-01-20,14:30,28.5,77.3,"Lajpat Nagar, Block C",Zone A,Central PS,'
            '"Victim said ""help"", then ran",false,false',
        ))
        assert errors == []
        assert records[0].area == 'Lajpat Nagar, Block C'
        assert records[0].description == 'Victim said "help", then ran'

    def test_empty_content(self):
        assert parse_incident_csv("") == ([], ['CSV content is empty'])
        assert parse_incident_csv("   \n  ") == ([], ['CSV content is empty'])

    def test_header_only(self):
        records, errors = parse_incident_csv(HEADER + "\n")
        assert records == []
        assert errors == ['CSV must contain at least headers and one data row']

    def test_missing_headers(self):
        records, errors = parse_incident_csv("id,crimeType,date\nFIR001,Theft,2025-01-20")
        assert records == []
        assert len(errors) == 1
        assert errors[0].startswith('Missing required headers: time, latitude')

    def test_bad_rows_are_reported_by_row_number(self):
        records, errors = parse_incident_csv(csv_text(
            "FIR001,Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS,,false,false",
            "FIR002,Theft,2025-01-20,14:30,abc,77.3,Downtown,Zone A,Central PS,,false,false",
            "FIR003,Theft,2025-01-20,14:30,95,77.3,Downtown,Zone A,Central PS,,false,false",
            "FIR004,Theft,not-a-date,14:30,28.5,77.3,Downtown,Zone A,Central PS,,false,false",
            ",Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS,,false,false",
        ))

        assert [record.id for record in records] == ['FIR001']
        assert errors == [
            'Row 3: Invalid latitude: abc',
            'Row 4: Invalid latitude: 95',
            'Row 5: Invalid date format: not-a-date',
            'Row 6: FIR ID is required',
        ]

    def test_unbalanced_quote_only_affects_its_row(self):
        records, errors = parse_incident_csv(csv_text(
            "FIR001,Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS,,false,false",
            'FIR009,"Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS,,false,false',
            "FIR002,Assault,2025-01-21,15:00,28.5,77.3,Downtown,Zone A,Central PS,,false,false",
            "FIR003,Robbery,2025-01-22,16:00,28.5,77.3,Downtown,Zone A,Central PS,,false,false",
        ))

        assert [record.id for record in records] == ['FIR001', 'FIR002', 'FIR003']
        assert errors == ['Row 3: Date is required']

    def test_quoted_comma_in_header(self):
        text = ('id,crimeType,date,time,latitude,longitude,area,zone,policeStation,"notes, free text",isAccident\n'
                'FIR001,Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS,"late, dark",true')
        records, errors = parse_incident_csv(text)

        assert errors == []
        assert records[0].is_accident is True

    def test_short_rows_are_padded(self):
        records, errors = parse_incident_csv(
            "id,crimeType,date,time,latitude,longitude,area,zone,policeStation,isAccident\n"
            "FIR001,Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS"
        )
        assert errors == []
        assert records[0].is_accident is False

    def test_blank_lines_are_ignored(self):
        records, errors = parse_incident_csv(
            HEADER + "\n\n"
            "FIR001,Theft,2025-01-20,14:30,28.5,77.3,Downtown,Zone A,Central PS,,false,false\n\n"
        )
        assert errors == []
        assert len(records) == 1


class TestLoadIncidentCsv:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_incident_csv(tmp_path / "missing.csv")

    def test_bundled_sample_data(self):
        import os
        import crime_hotspots.data

        path = os.path.join(os.path.dirname(crime_hotspots.data.__file__), 'sample_incidents.csv')
        records, errors = load_incident_csv(path)

        assert errors == []
        assert len(records) == 15
        assert sum(record.is_accident for record in records) == 2


class TestLoadIncidentGeojson:

    @staticmethod
    def feature(record_id, lng, lat, **properties):
        props = {
            "id": record_id, "crimeType": "Theft", "date": "2025-01-20", "time": "14:30",
            "area": "Downtown", "zone": "Zone A", "policeStation": "Central PS"
        }
        props.update(properties)
        return {"type": "Feature", "geometry": {"type": "Point", "coordinates": [lng, lat]},
                "properties": props}

    def write(self, tmp_path, features):
        path = tmp_path / "incidents.geojson"
        path.write_text(json.dumps({"type": "FeatureCollection", "features": features}))
        return path

    def test_loads_points(self, tmp_path):
        path = self.write(tmp_path, [
            self.feature("FIR001", 77.39, 28.53, isAccident=True),
            self.feature("FIR002", 77.20, 28.61),
        ])
        records = load_incident_geojson(path)

        assert [record.id for record in records] == ['FIR001', 'FIR002']
        assert (records[0].latitude, records[0].longitude) == (28.53, 77.39)
        assert records[0].is_accident is True

    def test_bounds_filter(self, tmp_path):
        path = self.write(tmp_path, [
            self.feature("DELHI", 77.20, 28.61),
            self.feature("MUMBAI", 72.87, 19.07),
        ])
        records = load_incident_geojson(path, {'min_lat': 28.4, 'max_lat': 28.9,
                                               'min_lng': 76.8, 'max_lng': 77.4})
        assert [record.id for record in records] == ['DELHI']

    def test_skips_malformed_features(self, tmp_path):
        line = {"type": "Feature", "geometry": {"type": "LineString", "coordinates": [[77, 28], [77.1, 28.1]]},
                "properties": {}}
        path = self.write(tmp_path, [line, self.feature("", 77.2, 28.6), self.feature("OK", 77.2, 28.6)])
        assert [record.id for record in load_incident_geojson(path)] == ['OK']

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.geojson"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_incident_geojson(path)

    def test_missing_features_key(self, tmp_path):
        path = tmp_path / "empty.geojson"
        path.write_text(json.dumps({"type": "FeatureCollection"}))
        with pytest.raises(ValueError, match="features"):
            load_incident_geojson(path)


class TestExportRecordsCsv:

    def test_export_can_be_reimported(self, sample_records, record_factory):
        records = sample_records + [
            record_factory("FIR004", description='Crash, "minor"', is_accident=True)
        ]
        exported = export_records_csv(records)

        assert exported.splitlines()[0] == HEADER
        reimported, errors = parse_incident_csv(exported)
        assert errors == []
        assert reimported == records

    def test_export_empty(self):
        assert export_records_csv([]).strip() == HEADER
