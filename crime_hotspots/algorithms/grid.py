"""
Grid partitioning of a bounding region into fixed-size rectangular cells.

Cells are generated row-major by stepping from the region's minimum corner;
each record is assigned by a linear scan in generation order to the first
cell whose half-open bounds [min, max) contain it.

Time Complexity: O(records × cells). A spatial index would make assignment
sub-linear but would also change which cell wins on shared edges.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..config.hotspot_config import GridConfig
from ..data.records import IncidentRecord

logger = logging.getLogger(__name__)


@dataclass
class GridCell:
    """A rectangular zone and the records that fall inside it."""
    id: str
    index: int
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float
    center_lat: float
    center_lng: float
    records: List[IncidentRecord] = field(default_factory=list)

    @property
    def record_count(self) -> int:
        return len(self.records)

    def contains(self, latitude: float, longitude: float) -> bool:
        return (self.min_lat <= latitude < self.max_lat and
                self.min_lng <= longitude < self.max_lng)


def create_grid(config: GridConfig) -> List[GridCell]:
    """
    Create cells covering the configured region.

    The running latitude/longitude accumulates by the cell size, so the
    floating-point stepping decides how many rows and columns are produced.

    Args:
        config: Grid region and cell size

    Returns:
        Cells in row-major generation order
    """
    cells = []
    cell_index = 0

    lat = config.min_lat
    while lat < config.max_lat:
        lng = config.min_lng
        while lng < config.max_lng:
            min_lat, max_lat = lat, lat + config.lat_grid_size
            min_lng, max_lng = lng, lng + config.lng_grid_size
            cells.append(GridCell(
                id=f"GRID_{cell_index}",
                index=cell_index,
                min_lat=min_lat,
                max_lat=max_lat,
                min_lng=min_lng,
                max_lng=max_lng,
                center_lat=(min_lat + max_lat) / 2,
                center_lng=(min_lng + max_lng) / 2
            ))
            cell_index += 1
            lng += config.lng_grid_size
        lat += config.lat_grid_size

    logger.debug(f"Created grid with {len(cells)} cells")
    return cells


def assign_records_to_grid(records: List[IncidentRecord], cells: List[GridCell]) -> int:
    """
    Assign each record to the first cell containing it.

    Args:
        records: Records to place
        cells: Cells in generation order (modified in place)

    Returns:
        Number of records that fell outside every cell
    """
    outside = 0
    for record in records:
        for cell in cells:
            if cell.contains(record.latitude, record.longitude):
                cell.records.append(record)
                break
        else:
            outside += 1

    if outside:
        logger.debug(f"{outside} records fell outside the grid region")
    return outside
