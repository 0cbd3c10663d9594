"""
Hotspot visualization tools for creating interactive HTML maps.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import folium
import numpy as np
from folium.plugins import HeatMap

from ..algorithms.bounds import calculate_bounds, get_center
from ..algorithms.hotspots import Hotspot, hotspot_statistics
from ..config.hotspot_config import HotspotConfig
from ..data.records import IncidentRecord

logger = logging.getLogger(__name__)

SEVERITY_COLORS = {
    'high': '#D7263D',    # red
    'medium': '#F49D37',  # orange
    'low': '#3F88C5'      # blue
}


class HotspotMapVisualizer:
    """
    Create interactive HTML maps of incident hotspots.
    """

    def __init__(self, config: Optional[HotspotConfig] = None):
        """
        Initialize hotspot visualizer.

        Args:
            config: Hotspot configuration for region and styling options
        """
        self.config = config or HotspotConfig()

    def create_hotspot_map(self, hotspots: List[Hotspot],
                           records: Optional[List[IncidentRecord]] = None,
                           show_heatmap: bool = True) -> folium.Map:
        """
        Create a map with one circle per hotspot, framed on the incidents.

        Args:
            hotspots: Hotspots to draw
            records: Incident records used for framing and the heatmap layer
            show_heatmap: Whether to add an incident density heatmap

        Returns:
            Folium map object
        """
        records = records or []

        center = get_center(records)
        if center is None:
            grid = self.config.grid
            location = ((grid.min_lat + grid.max_lat) / 2, (grid.min_lng + grid.max_lng) / 2)
        else:
            location = center.as_tuple()

        m = folium.Map(location=location, zoom_start=12, tiles=self.config.map_style)

        if show_heatmap and records:
            self._add_incident_heatmap(m, records)

        for hotspot in hotspots:
            self._add_hotspot_marker(m, hotspot)

        self._add_legend(m, hotspots)

        bounds = calculate_bounds(records, self.config.grid)
        m.fit_bounds(bounds.as_folium_bounds())

        logger.debug(f"Created hotspot map with {len(hotspots)} hotspots")
        return m

    def _add_incident_heatmap(self, m: folium.Map, records: List[IncidentRecord]) -> None:
        """Add incident density heatmap overlay to map."""
        points = np.array([[record.latitude, record.longitude] for record in records])

        max_points = self.config.max_heatmap_points
        if len(points) > max_points:
            rng = np.random.default_rng(0)
            points = points[rng.choice(len(points), max_points, replace=False)]

        HeatMap(
            points.tolist(),
            name='Incident Density',
            radius=15,
            blur=20,
            gradient={
                0.0: 'blue',
                0.3: 'lime',
                0.5: 'yellow',
                0.7: 'orange',
                1.0: 'red'
            }
        ).add_to(m)

        logger.debug(f"Added incident heatmap with {len(points)} points")

    def _add_hotspot_marker(self, m: folium.Map, hotspot: Hotspot) -> None:
        """Add a hotspot as a circle sized by its share of incidents."""
        color = SEVERITY_COLORS.get(hotspot.severity, '#000000')
        folium.CircleMarker(
            location=[hotspot.center_lat, hotspot.center_lng],
            radius=6 + min(hotspot.percentage, 50) / 2,
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.6,
            popup=self._create_hotspot_popup(hotspot),
            tooltip=f"{hotspot.zone_name}: {hotspot.record_count} incidents"
        ).add_to(m)

    def _create_hotspot_popup(self, hotspot: Hotspot) -> str:
        """Create HTML popup content for a hotspot."""
        return f"""
        <div style="width: 180px;">
            <h4>{hotspot.zone_name}</h4>
            <p><strong>Incidents:</strong> {hotspot.record_count}</p>
            <p><strong>Severity:</strong> {hotspot.severity.title()}</p>
            <p><strong>Share:</strong> {hotspot.percentage:.1f}%</p>
        </div>
        """

    def _add_legend(self, m: folium.Map, hotspots: List[Hotspot]) -> None:
        """Add legend explaining severity colors."""
        stats = hotspot_statistics(hotspots)
        counts = {'high': stats.high_risk, 'medium': stats.medium_risk, 'low': stats.low_risk}

        legend_items = []
        for severity, color in SEVERITY_COLORS.items():
            legend_items.append(f"""
                <div style="margin-bottom: 6px;">
                    <span style="background-color: {color};
                                 width: 12px; height: 12px; border-radius: 6px;
                                 display: inline-block; margin-right: 8px;"></span>
                    <strong>{severity.title()}</strong> ({counts[severity]})
                </div>
            """)

        legend_html = f"""
        <div style="position: fixed;
                   bottom: 50px; left: 50px; width: 180px; height: auto;
                   background-color: white; border:2px solid grey; z-index:9999;
                   font-size:14px; padding: 10px;">
            <h4 style="margin-top: 0;">Hotspot Severity</h4>
            {''.join(legend_items)}
        </div>
        """
        m.get_root().add_child(folium.Element(legend_html))

    def render_html(self, map_obj: folium.Map) -> str:
        """Render a map to a standalone HTML document."""
        return map_obj.get_root().render()

    def save_map(self, map_obj: folium.Map, filepath: Union[str, Path]) -> None:
        """
        Save interactive map to HTML file.

        Args:
            map_obj: Folium map object
            filepath: Output file path
        """
        try:
            Path(filepath).parent.mkdir(parents=True, exist_ok=True)
            map_obj.save(str(filepath))
            logger.info(f"Interactive map saved to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save map to {filepath}: {e}")
            raise
