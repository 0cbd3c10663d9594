"""
Configuration management for hotspot detection.
"""

from .hotspot_config import GridConfig, SeverityThresholds, HotspotConfig

__all__ = [
    'GridConfig',
    'SeverityThresholds',
    'HotspotConfig'
]
