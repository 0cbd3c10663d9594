"""
FastAPI routes for hotspot detection, analytics and record management.
"""

import datetime
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from api.schemas.hotspots import (
    BoundsResponse,
    CenterResponse,
    ClusterResponse,
    CsvImportRequest,
    ErrorResponse,
    HealthResponse,
    HotspotListResponse,
    HotspotSchema,
    HotspotStatisticsResponse,
    ImportResponse,
    IncidentRecordSchema,
    InsightResponse,
    NearbyResponse,
    RecordBatchRequest
)
from api.services.hotspot_service import hotspot_service
from crime_hotspots.data.filters import FilterCriteria

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/hotspots", tags=["hotspots"])

BAD_REQUEST = {400: {"model": ErrorResponse}}


def get_filter_criteria(
    start_date: Optional[datetime.date] = Query(default=None, description="Earliest incident date"),
    end_date: Optional[datetime.date] = Query(default=None, description="Latest incident date"),
    crime_type: Optional[List[str]] = Query(default=None, description="Crime types to include"),
    area: Optional[List[str]] = Query(default=None, description="Areas to include"),
    zone: Optional[List[str]] = Query(default=None, description="Zones to include"),
    police_station: Optional[List[str]] = Query(default=None, description="Police stations to include"),
    is_accident: Optional[bool] = Query(default=None),
    is_sensitive_zone: Optional[bool] = Query(default=None)
) -> FilterCriteria:
    """Build filter criteria from query parameters."""
    return FilterCriteria(
        start_date=start_date,
        end_date=end_date,
        crime_types=frozenset(crime_type) if crime_type else None,
        areas=frozenset(area) if area else None,
        zones=frozenset(zone) if zone else None,
        police_stations=frozenset(police_station) if police_station else None,
        is_accident=is_accident,
        is_sensitive_zone=is_sensitive_zone
    )


def _bad_request(e: ValueError) -> HTTPException:
    logger.warning(f"Rejected request: {e}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check():
    """
    Check the health status of the hotspot service.

    Returns:
        HealthResponse: Service health information
    """
    return hotspot_service.get_health_status()


@router.get("/hotspots", response_model=HotspotListResponse, responses=BAD_REQUEST,
            summary="Detect Hotspots")
async def get_hotspots(criteria: FilterCriteria = Depends(get_filter_criteria),
                       q: str = Query(default="", description="Free-text search")):
    """
    Detect hotspot zones over the stored (optionally filtered) incidents.

    Hotspots are sorted by incident count, highest first.
    """
    try:
        hotspots, total_records = hotspot_service.get_hotspots(criteria, q)
    except ValueError as e:
        raise _bad_request(e)

    return HotspotListResponse(
        total_records=total_records,
        count=len(hotspots),
        hotspots=[HotspotSchema.model_validate(hotspot) for hotspot in hotspots]
    )


@router.get("/hotspots/geojson", response_model=Dict[str, Any], responses=BAD_REQUEST,
            summary="Hotspots as GeoJSON")
async def get_hotspots_geojson(criteria: FilterCriteria = Depends(get_filter_criteria),
                               q: str = Query(default="")):
    """Return hotspots as a GeoJSON FeatureCollection for mapping applications."""
    try:
        return hotspot_service.get_hotspots_geojson(criteria, q)
    except ValueError as e:
        raise _bad_request(e)


@router.get("/hotspots/statistics", response_model=HotspotStatisticsResponse, responses=BAD_REQUEST,
            summary="Hotspot Statistics")
async def get_hotspot_statistics(criteria: FilterCriteria = Depends(get_filter_criteria),
                                 q: str = Query(default="")):
    """Count hotspots per severity level."""
    try:
        return HotspotStatisticsResponse.model_validate(hotspot_service.get_statistics(criteria, q))
    except ValueError as e:
        raise _bad_request(e)


@router.get("/insights", response_model=InsightResponse, responses=BAD_REQUEST,
            summary="Incident Insights")
async def get_insights(criteria: FilterCriteria = Depends(get_filter_criteria),
                       q: str = Query(default="")):
    """
    Temporal and categorical statistics: peak hours, day and month trends,
    top crime types, area counts and patrol-planning hints.
    """
    try:
        return InsightResponse.model_validate(hotspot_service.get_insights(criteria, q))
    except ValueError as e:
        raise _bad_request(e)


@router.get("/nearby", response_model=NearbyResponse, responses=BAD_REQUEST,
            summary="Incidents Near a Point")
async def get_nearby(lat: float = Query(..., ge=-90, le=90),
                     lng: float = Query(..., ge=-180, le=180),
                     radius_km: float = Query(default=1.0, ge=0, description="Search radius in km")):
    """Find incidents within a radius (inclusive) of a point."""
    try:
        records = hotspot_service.find_nearby(lat, lng, radius_km)
    except ValueError as e:
        raise _bad_request(e)

    return NearbyResponse(
        latitude=lat,
        longitude=lng,
        radius_km=radius_km,
        count=len(records),
        records=[IncidentRecordSchema.model_validate(record) for record in records]
    )


@router.get("/clusters", response_model=ClusterResponse, responses=BAD_REQUEST,
            summary="Incident Clusters")
async def get_clusters(radius_km: Optional[float] = Query(default=None, gt=0,
                                                          description="Grouping radius in km")):
    """Group incidents around seed incidents, largest group first."""
    try:
        clusters = hotspot_service.get_clusters(radius_km)
    except ValueError as e:
        raise _bad_request(e)

    return ClusterResponse(
        radius_km=radius_km if radius_km is not None else hotspot_service.config.cluster_radius_km,
        cluster_count=len(clusters),
        clusters=clusters
    )


@router.get("/bounds", response_model=BoundsResponse, summary="Incident Bounds")
async def get_bounds():
    """Bounding box of the stored incidents (the configured region when empty)."""
    return BoundsResponse.model_validate(hotspot_service.get_bounds())


@router.get("/center", response_model=CenterResponse, summary="Incident Centroid")
async def get_center():
    """Centroid of the stored incidents; null coordinates when there are none."""
    center = hotspot_service.get_center()
    if center is None:
        return CenterResponse()
    return CenterResponse(lat=center.lat, lng=center.lng)


@router.get("/map", response_class=HTMLResponse, responses=BAD_REQUEST, summary="Hotspot Map")
async def get_map(criteria: FilterCriteria = Depends(get_filter_criteria),
                  q: str = Query(default=""),
                  heatmap: bool = Query(default=True, description="Include the incident heatmap layer")):
    """Interactive HTML map of the hotspots."""
    try:
        return HTMLResponse(content=hotspot_service.render_map(criteria, q, heatmap))
    except ValueError as e:
        raise _bad_request(e)


@router.post("/records", response_model=ImportResponse, summary="Add Incident Records")
async def add_records(request: RecordBatchRequest):
    """
    Add a batch of incident records.

    Records failing validation or reusing an existing id are rejected
    individually; the rest are stored.
    """
    result = hotspot_service.add_records([record.to_record() for record in request.records])
    return ImportResponse(
        success=result.failed == 0 and result.added > 0,
        message=f"Added {result.added} records, rejected {result.failed}",
        added=result.added,
        failed=result.failed,
        errors=result.errors,
        total_records=len(hotspot_service.repository)
    )


@router.post("/records/import", response_model=ImportResponse, summary="Import CSV Records")
async def import_records(request: CsvImportRequest):
    """
    Import incident records from CSV text.

    Expected header:
        id,crimeType,date,time,latitude,longitude,area,zone,policeStation,
        description,isAccident,isSensitiveZone
    """
    result, parse_errors = hotspot_service.import_csv(request.content)
    errors = parse_errors + result.errors
    failed = len(parse_errors) + result.failed
    return ImportResponse(
        success=not errors and result.added > 0,
        message=f"Imported {result.added} records, rejected {failed}",
        added=result.added,
        failed=failed,
        errors=errors,
        total_records=len(hotspot_service.repository)
    )


@router.get("/records/export", response_class=PlainTextResponse, responses=BAD_REQUEST,
            summary="Export CSV Records")
async def export_records(criteria: FilterCriteria = Depends(get_filter_criteria),
                         q: str = Query(default="")):
    """Export the (optionally filtered) incidents as CSV."""
    try:
        content = hotspot_service.export_csv(criteria, q)
    except ValueError as e:
        raise _bad_request(e)

    filename = f"fir-export-{datetime.date.today().isoformat()}.csv"
    return PlainTextResponse(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.delete("/records", summary="Clear Incident Records")
async def clear_records():
    """Remove every stored incident."""
    removed = hotspot_service.clear()
    return {"success": True, "removed": removed}


@router.get("/", summary="API Information")
async def get_api_info():
    """
    Get information about the Crime Hotspot API.

    Returns:
        dict: API information and available endpoints
    """
    grid = hotspot_service.config.grid
    return {
        "api": "Crime Hotspot API",
        "version": "1.0.0",
        "description": "Grid-based hotspot detection and incident analytics",
        "endpoints": {
            "GET /api/hotspots/hotspots": "Detect hotspot zones",
            "GET /api/hotspots/hotspots/geojson": "Hotspots as GeoJSON",
            "GET /api/hotspots/hotspots/statistics": "Hotspot counts per severity",
            "GET /api/hotspots/insights": "Temporal and categorical statistics",
            "GET /api/hotspots/nearby": "Incidents within a radius of a point",
            "GET /api/hotspots/clusters": "Incident groups around seed incidents",
            "GET /api/hotspots/bounds": "Bounding box of the incidents",
            "GET /api/hotspots/center": "Centroid of the incidents",
            "GET /api/hotspots/map": "Interactive HTML hotspot map",
            "POST /api/hotspots/records": "Add incident records",
            "POST /api/hotspots/records/import": "Import incident records from CSV",
            "GET /api/hotspots/records/export": "Export incident records as CSV",
            "DELETE /api/hotspots/records": "Remove all incident records",
            "GET /api/hotspots/health": "Check service health status",
            "GET /api/hotspots/": "This information endpoint"
        },
        "grid_region": grid.as_bounds(),
        "cell_size_degrees": {
            "latitude": grid.lat_grid_size,
            "longitude": grid.lng_grid_size
        }
    }
