"""
Pydantic schemas for the crime hotspot API.
"""

import datetime
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crime_hotspots.data.records import IncidentRecord
from crime_hotspots.data.validation import TIME_PATTERN


class IncidentRecordSchema(BaseModel):
    """A single incident report."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1, description="Unique FIR identifier")
    crime_type: str = Field(..., min_length=1, description="Crime category")
    date: datetime.date = Field(..., description="Date of the incident")
    time: str = Field(..., description="Time of the incident (HH:MM or HH:MM:SS)")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    area: str = Field(..., min_length=1)
    zone: str = Field(..., min_length=1)
    police_station: str = Field(..., min_length=1)
    is_accident: bool = False
    is_sensitive_zone: bool = False
    description: Optional[str] = None

    @field_validator('time')
    @classmethod
    def validate_time_format(cls, v):
        """Validate the time is HH:MM or HH:MM:SS."""
        if not TIME_PATTERN.match(v):
            raise ValueError('Time must be in HH:MM or HH:MM:SS format')
        return v

    def to_record(self) -> IncidentRecord:
        return IncidentRecord(**self.model_dump())


class RecordBatchRequest(BaseModel):
    """Request model for adding records."""
    records: List[IncidentRecordSchema] = Field(..., description="Records to add")


class CsvImportRequest(BaseModel):
    """Request model for CSV import."""
    content: str = Field(..., description="Raw CSV text including the header row")


class ImportResponse(BaseModel):
    """Outcome of a record import."""
    success: bool = Field(..., description="Whether at least one record was added and none failed")
    message: str = Field(..., description="Status message")
    added: int = Field(..., description="Number of records stored")
    failed: int = Field(..., description="Number of records rejected")
    errors: List[str] = Field(default_factory=list, description="Parse and validation errors")
    total_records: int = Field(..., description="Records held after the import")


class HotspotSchema(BaseModel):
    """A detected hotspot zone."""
    model_config = ConfigDict(from_attributes=True)

    zone_id: str
    zone_name: str
    center_lat: float
    center_lng: float
    record_count: int
    severity: str = Field(..., description="'low', 'medium' or 'high'")
    percentage: float = Field(..., description="Share of all incidents in this zone")
    last_updated: datetime.datetime


class HotspotListResponse(BaseModel):
    """Response model for hotspot detection."""
    success: bool = True
    total_records: int = Field(..., description="Records analysed")
    count: int = Field(..., description="Number of hotspots")
    hotspots: List[HotspotSchema]


class HotspotStatisticsResponse(BaseModel):
    """Hotspot counts per severity."""
    model_config = ConfigDict(from_attributes=True)

    total_hotspots: int
    high_risk: int
    medium_risk: int
    low_risk: int
    total_records: int
    top_zone: Optional[str] = None


class HourCountSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    hour: int
    count: int


class DayCountSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    day: str
    count: int


class MonthCountSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    month: str
    count: int


class CrimeTypeCountSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    type: str
    count: int


class AreaCountSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    area: str
    count: int


class InsightResponse(BaseModel):
    """Temporal and categorical statistics."""
    model_config = ConfigDict(from_attributes=True)

    peak_hours: List[HourCountSchema]
    day_wise_trends: List[DayCountSchema]
    top_crime_types: List[CrimeTypeCountSchema]
    monthly_trends: List[MonthCountSchema]
    area_statistics: List[AreaCountSchema]
    predicted_peak_hours: List[int]
    high_risk_days: List[DayCountSchema]
    total_records: int
    total_hotspots: int
    generated_at: datetime.datetime


class NearbyResponse(BaseModel):
    """Records within a radius of a point."""
    latitude: float
    longitude: float
    radius_km: float
    count: int
    records: List[IncidentRecordSchema]


class ClusterSchema(BaseModel):
    """A group of records around a seed incident."""
    size: int
    center_lat: float
    center_lng: float
    record_ids: List[str]


class ClusterResponse(BaseModel):
    radius_km: float
    cluster_count: int
    clusters: List[ClusterSchema]


class BoundsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


class CenterResponse(BaseModel):
    """Centroid of the records; lat/lng are null when there are none."""
    lat: Optional[float] = None
    lng: Optional[float] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    records_loaded: bool = Field(..., description="Whether any incident data is loaded")
    record_count: int = Field(..., description="Number of incident records held")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
