"""
World state management for the mechanic validator.

This module provides:
- Arena: Spatial bounds and clamping
- proximity: distance() / within(), the only geometry primitive
- ZoneRegistry: Anchors, towers and derived diagonal points
- EngineState: Central session state
"""

from .arena import Arena
from .proximity import distance, within, within_radius
from .zones import Zone, ZoneKind, ZoneRegistry, in_safe_region
from .state import EngineState

__all__ = [
    "Arena",
    "distance",
    "within",
    "within_radius",
    "Zone",
    "ZoneKind",
    "ZoneRegistry",
    "in_safe_region",
    "EngineState",
]
