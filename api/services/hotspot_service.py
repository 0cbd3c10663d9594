"""
Service layer for the crime hotspot API.
"""

import logging
import os
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

import geojson

import crime_hotspots.data
from crime_hotspots.algorithms.bounds import Bounds, Center, calculate_bounds, get_center
from crime_hotspots.algorithms.hotspots import Hotspot, HotspotStatistics, detect_hotspots, hotspot_statistics
from crime_hotspots.algorithms.proximity import cluster_records, find_nearby_records
from crime_hotspots.analytics.insights import InsightBundle, InsightService
from crime_hotspots.config.hotspot_config import HotspotConfig
from crime_hotspots.data.data_loader import export_records_csv, load_incident_csv, parse_incident_csv
from crime_hotspots.data.filters import FilterCriteria, filter_records
from crime_hotspots.data.records import IncidentRecord
from crime_hotspots.data.repository import BatchResult, IncidentRepository
from crime_hotspots.visualization.hotspot_map import HotspotMapVisualizer
from api.schemas.hotspots import ClusterSchema, HealthResponse

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
DATA_PATH_ENV = "CRIME_HOTSPOTS_DATA_PATH"


class CrimeHotspotService:
    """
    Service class that provides hotspot detection and analytics for the API.
    """

    def __init__(self, config: Optional[HotspotConfig] = None, data_path: Optional[str] = None):
        """
        Initialize the hotspot service.

        Args:
            config: Engine configuration (defaults to the Delhi region)
            data_path: CSV to preload; falls back to $CRIME_HOTSPOTS_DATA_PATH,
                then to the bundled sample data
        """
        self.config = config or HotspotConfig()
        self.config.validate()
        self.repository = IncidentRepository()
        self.insight_service = InsightService(self.config)
        self.visualizer = HotspotMapVisualizer(self.config)
        self.data_path = data_path or self._get_data_path()

        self._initialize()

    def _get_data_path(self) -> str:
        """Get the path to the incident data file."""
        env_path = os.environ.get(DATA_PATH_ENV)
        if env_path:
            return env_path
        data_dir = os.path.dirname(os.path.abspath(crime_hotspots.data.__file__))
        return os.path.join(data_dir, 'sample_incidents.csv')

    def _initialize(self) -> None:
        """Preload incident data if the data file exists."""
        logger.info("Initializing crime hotspot service...")

        if not os.path.exists(self.data_path):
            logger.warning(f"Incident data file not found at {self.data_path}")
            return

        records, errors = load_incident_csv(self.data_path)
        for error in errors:
            logger.warning(f"Skipped row while loading {self.data_path}: {error}")

        result = self.repository.add_batch(records)
        logger.info(f"Service initialized with {result.added} incident records")

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the hotspot service."""
        record_count = len(self.repository)
        return HealthResponse(
            status="healthy" if record_count else "degraded",
            version=API_VERSION,
            records_loaded=record_count > 0,
            record_count=record_count
        )

    def get_records(self, criteria: Optional[FilterCriteria] = None, query: str = '') -> List[IncidentRecord]:
        """Return stored records matching the filter criteria and search query."""
        return filter_records(self.repository.get_all(), criteria, query)

    def get_hotspots(self, criteria: Optional[FilterCriteria] = None,
                     query: str = '') -> Tuple[List[Hotspot], int]:
        """
        Detect hotspots over the filtered records.

        Returns:
            Tuple of (hotspots, number of records analysed)
        """
        records = self.get_records(criteria, query)
        return detect_hotspots(records, self.config), len(records)

    def get_hotspots_geojson(self, criteria: Optional[FilterCriteria] = None,
                             query: str = '') -> Dict[str, Any]:
        """Hotspots as a GeoJSON FeatureCollection of points."""
        hotspots, _ = self.get_hotspots(criteria, query)
        features = [
            geojson.Feature(
                id=hotspot.zone_id,
                geometry=geojson.Point((hotspot.center_lng, hotspot.center_lat)),
                properties={
                    "zone_id": hotspot.zone_id,
                    "zone_name": hotspot.zone_name,
                    "record_count": hotspot.record_count,
                    "severity": hotspot.severity,
                    "percentage": round(hotspot.percentage, 2),
                    "last_updated": hotspot.last_updated.isoformat()
                }
            )
            for hotspot in hotspots
        ]
        return geojson.FeatureCollection(features)

    def get_statistics(self, criteria: Optional[FilterCriteria] = None, query: str = '') -> HotspotStatistics:
        hotspots, _ = self.get_hotspots(criteria, query)
        return hotspot_statistics(hotspots)

    def get_insights(self, criteria: Optional[FilterCriteria] = None, query: str = '') -> InsightBundle:
        """Generate insights, including the hotspot count for the same records."""
        records = self.get_records(criteria, query)
        bundle = self.insight_service.generate_insights(records)
        hotspots = detect_hotspots(records, self.config)
        return replace(bundle, total_hotspots=len(hotspots))

    def find_nearby(self, latitude: float, longitude: float, radius_km: float) -> List[IncidentRecord]:
        if radius_km < 0:
            raise ValueError("radius_km must not be negative")
        return find_nearby_records(self.repository.get_all(), latitude, longitude, radius_km)

    def get_clusters(self, radius_km: Optional[float] = None) -> List[ClusterSchema]:
        """Group stored records around seed incidents."""
        radius_km = radius_km if radius_km is not None else self.config.cluster_radius_km
        if radius_km <= 0:
            raise ValueError("radius_km must be positive")

        clusters = cluster_records(self.repository.get_all(), radius_km)
        summaries = []
        for cluster in clusters:
            center = get_center(cluster)
            summaries.append(ClusterSchema(
                size=len(cluster),
                center_lat=center.lat,
                center_lng=center.lng,
                record_ids=[record.id for record in cluster]
            ))
        return summaries

    def get_bounds(self) -> Bounds:
        return calculate_bounds(self.repository.get_all(), self.config.grid)

    def get_center(self) -> Optional[Center]:
        return get_center(self.repository.get_all())

    def render_map(self, criteria: Optional[FilterCriteria] = None, query: str = '',
                   show_heatmap: bool = True) -> str:
        """Render the hotspot map for the filtered records as HTML."""
        records = self.get_records(criteria, query)
        hotspots = detect_hotspots(records, self.config)
        hotspot_map = self.visualizer.create_hotspot_map(hotspots, records, show_heatmap)
        return self.visualizer.render_html(hotspot_map)

    def add_records(self, records: List[IncidentRecord]) -> BatchResult:
        return self.repository.add_batch(records)

    def import_csv(self, content: str) -> Tuple[BatchResult, List[str]]:
        """
        Parse CSV text and store the valid rows.

        Returns:
            Tuple of (batch result, CSV parse errors)
        """
        records, parse_errors = parse_incident_csv(content)
        result = self.repository.add_batch(records)
        return result, parse_errors

    def export_csv(self, criteria: Optional[FilterCriteria] = None, query: str = '') -> str:
        return export_records_csv(self.get_records(criteria, query))

    def clear(self) -> int:
        """Remove every stored record, returning how many were removed."""
        removed = len(self.repository)
        self.repository.clear()
        logger.info(f"Cleared {removed} incident records")
        return removed


# Global service instance
hotspot_service = CrimeHotspotService()
