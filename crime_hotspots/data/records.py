"""
Incident record model shared by every engine in the package.
"""

from dataclasses import dataclass
import datetime
from typing import Optional


@dataclass(frozen=True)
class IncidentRecord:
    """A single validated, geotagged incident report (FIR)."""

    id: str
    crime_type: str
    date: datetime.date
    time: str  # HH:MM or HH:MM:SS
    latitude: float
    longitude: float
    area: str
    zone: str
    police_station: str
    is_accident: bool = False
    is_sensitive_zone: bool = False
    description: Optional[str] = None

    @property
    def hour(self) -> int:
        """Hour of day (0-23) taken from the leading field of ``time``."""
        return int(self.time.split(':')[0])

    @property
    def day_of_week(self) -> int:
        """Day of week with Sunday as 0."""
        return self.date.isoweekday() % 7

    @property
    def month(self) -> int:
        """Month index with January as 0."""
        return self.date.month - 1
