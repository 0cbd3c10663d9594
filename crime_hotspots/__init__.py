"""
Crime Hotspot Engine

Grid-based hotspot detection and incident analytics for geotagged crime
reports (FIRs).

## Quick Start

```python
from crime_hotspots import HotspotConfig, load_incident_csv, detect_hotspots, generate_insights

config = HotspotConfig.create_default_config()

records, errors = load_incident_csv("path/to/incidents.csv")

hotspots = detect_hotspots(records, config)
insights = generate_insights(records, config)

print(hotspots[0].zone_name, hotspots[0].severity)
print(insights.predicted_peak_hours)
```

## Main Components

- **detect_hotspots**: Grid partitioning and severity classification
- **find_nearby_records / cluster_records**: Radius search and seed-based grouping
- **calculate_bounds / get_center**: Map framing helpers
- **InsightService**: Temporal and categorical statistics
- **IncidentRepository**: Validated in-memory record store
- **HotspotMapVisualizer**: Interactive map generation

## Architecture

- `algorithms/`: Grid, hotspot, proximity and bounds algorithms
- `analytics/`: Insight aggregation
- `data/`: Record model, loading, validation, filtering and distance utilities
- `visualization/`: Map generation
- `config/`: Configuration management
"""

from .config import GridConfig, SeverityThresholds, HotspotConfig
from .data import (
    IncidentRecord,
    IncidentRepository,
    FilterCriteria,
    filter_records,
    haversine_distance,
    load_incident_csv,
    load_incident_geojson,
    parse_incident_csv,
    export_records_csv
)
from .algorithms import (
    Hotspot,
    Bounds,
    Center,
    detect_hotspots,
    hotspot_statistics,
    find_nearby_records,
    cluster_records,
    calculate_bounds,
    get_center
)
from .analytics import InsightService, InsightBundle, generate_insights
from .visualization import HotspotMapVisualizer

# Version information
__version__ = "1.0.0"
__author__ = "Crime Hotspot Mapping Team"

# Public API
__all__ = [
    # Configuration
    'GridConfig',
    'SeverityThresholds',
    'HotspotConfig',

    # Data
    'IncidentRecord',
    'IncidentRepository',
    'FilterCriteria',
    'filter_records',
    'load_incident_csv',
    'load_incident_geojson',
    'parse_incident_csv',
    'export_records_csv',

    # Core algorithms
    'haversine_distance',
    'Hotspot',
    'Bounds',
    'Center',
    'detect_hotspots',
    'hotspot_statistics',
    'find_nearby_records',
    'cluster_records',
    'calculate_bounds',
    'get_center',

    # Analytics
    'InsightService',
    'InsightBundle',
    'generate_insights',

    # Visualization
    'HotspotMapVisualizer',

    # Metadata
    '__version__',
    '__author__'
]
