"""
Core types and constants for the mechanic validator.
"""

# Instead of from engine.core.types import DebuffTag, you can do: from engine.core import DebuffTag
from .types import (
    Point,
    Role,
    PerfectionKind,
    Duration,
    DebuffTag,
    TowerElement,
    ConceptionKind,
    Perfection,
    Conception,
    Buff,
    Classification,
)
from .errors import UnknownEntityError
from .validation import CheckResult, ValidationReport


__all__ = [
    "Point",
    "Role",
    "PerfectionKind",
    "Duration",
    "DebuffTag",
    "TowerElement",
    "ConceptionKind",
    "Perfection",
    "Conception",
    "Buff",
    "Classification",
    "UnknownEntityError",
    "CheckResult",
    "ValidationReport",
]
