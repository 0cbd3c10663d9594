"""
pytest configuration and shared fixtures.

Records use dates in the past so repository validation (which rejects
future dates) accepts them regardless of when the suite runs.
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from crime_hotspots.data.records import IncidentRecord


def make_record(record_id="FIR001", crime_type="Theft", record_date=date(2025, 1, 20),
                time="14:30", latitude=28.5355, longitude=77.3910, area="Downtown",
                zone="Zone A", police_station="Central PS", **kwargs) -> IncidentRecord:
    """Build a valid record, overriding only what a test cares about."""
    return IncidentRecord(
        id=record_id,
        crime_type=crime_type,
        date=record_date,
        time=time,
        latitude=latitude,
        longitude=longitude,
        area=area,
        zone=zone,
        police_station=police_station,
        **kwargs
    )


@pytest.fixture()
def record_factory():
    return make_record


@pytest.fixture()
def sample_records():
    """Two incidents ~0.11 km apart downtown and one further north."""
    return [
        make_record("FIR001", "Theft", date(2025, 1, 20), "14:30", 28.5355, 77.3910, "Downtown"),
        make_record("FIR002", "Assault", date(2025, 1, 21), "14:45", 28.5360, 77.3920, "Downtown"),
        make_record("FIR003", "Robbery", date(2025, 1, 19), "22:00", 28.6100, 77.3100, "Uptown",
                    zone="Zone B", police_station="North PS"),
    ]


@pytest.fixture()
async def client(sample_records):
    """
    HTTPX async test client wired to the FastAPI app.

    The global service is reset to ``sample_records`` for every test.
    """
    from api.main import app
    from api.services.hotspot_service import hotspot_service

    hotspot_service.clear()
    hotspot_service.add_records(sample_records)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    hotspot_service.clear()
