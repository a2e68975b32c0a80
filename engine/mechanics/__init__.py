"""
Mechanics module - Rule resolution systems.

This module provides the resolvers that drive a session:
- assignment: Fisher-Yates tag and Perfection assignment
- FusionResolver: Pairs Perfection holders into Conceptions
- CornerAssignmentResolver: Scarce corner allocation for phase 1.2
- PhaseValidator: Per sub-phase rule checks
- PhaseStateMachine: Sub-phase transitions and phase advance
- AutoSolver: Computes a passing layout

Resolvers keep no session state - they take an EngineState and return
results. Only the fusion resolver and the state machine write to it.
"""

from .assignment import (
    assign_perfection,
    assign_tags,
    choose_required_conception,
    fisher_yates,
    required_conception_for,
)
from .fusion import FUSION_RADIUS, FusionResolver, FusionResult, compatible_kinds, derive_conception
from .corners import CornerAssignment, CornerAssignmentResolver, resolve_corners
from .validator import PhaseValidator
from .phases import PHASE_SOLVED, SUB_PHASE_ADVANCED, PhaseStateMachine
from .solver import AutoSolver

__all__ = [
    "assign_perfection",
    "assign_tags",
    "choose_required_conception",
    "fisher_yates",
    "required_conception_for",
    "FUSION_RADIUS",
    "FusionResolver",
    "FusionResult",
    "compatible_kinds",
    "derive_conception",
    "CornerAssignment",
    "CornerAssignmentResolver",
    "resolve_corners",
    "PhaseValidator",
    "PHASE_SOLVED",
    "SUB_PHASE_ADVANCED",
    "PhaseStateMachine",
    "AutoSolver",
]
