"""
Visualization tools for hotspot maps.
"""

from .hotspot_map import HotspotMapVisualizer, SEVERITY_COLORS

__all__ = ['HotspotMapVisualizer', 'SEVERITY_COLORS']
