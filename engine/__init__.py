"""
High Concept mechanic validator engine.

Usage:
    from engine import MechanicEngine, EngineConfig

    engine = MechanicEngine(EngineConfig(seed=7))
    engine.auto_solve()
    print(engine.check_solution().passed)
"""

from .config import EngineConfig
from .core import CheckResult, Classification, DebuffTag, UnknownEntityError
from .environment import AdvanceResult, MechanicEngine
from .snapshot import Snapshot
from .world import EngineState

__all__ = [
    "EngineConfig",
    "CheckResult",
    "Classification",
    "DebuffTag",
    "UnknownEntityError",
    "AdvanceResult",
    "MechanicEngine",
    "Snapshot",
    "EngineState",
]
