"""
AutoSolver - Computes a passing layout for the current sub-phase.

The solver mirrors PhaseValidator rule for rule and reuses its tables, the
zone registry and the corner resolver. Whenever a rule changes in the
validator it has to change here too; the test suite walks every reachable
sub-phase with solve-then-check to catch drift.

Layout conventions:
- Players without a job stand on their phase-0 anchor. No anchor is inside
  a tower radius in either tower layout.
- Fusion pairs share a fusion spot; spots are far more than the fusion radius
  apart and far from every anchor.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, List, Optional

from ..core.types import Duration, Point
from .corners import CornerAssignmentResolver
from .fusion import compatible_kinds
from .validator import REQUIRED_CONCEPTIONS, SPREAD_ANCHORS

if TYPE_CHECKING:
    from ..entities.player import Player
    from ..world.state import EngineState


FUSION_SPOTS: List[Point] = [(100.0, 275.0), (450.0, 275.0)]
SAFE_SPOTS: List[Point] = [(60.0, 60.0), (100.0, 60.0), (60.0, 100.0), (100.0, 100.0)]


class AutoSolver:
    """
    Diagnostic placement for every player.

    Usage:
        solver = AutoSolver()
        positions = solver.solve(state)   # entity id -> (x, y)
        solver.apply(state)               # move everyone there
    """

    def __init__(self, corners: Optional[CornerAssignmentResolver] = None):
        self.corners = corners or CornerAssignmentResolver()

    def solve(self, state: EngineState) -> Dict[int, Point]:
        """
        Compute a passing position per player without touching state.

        Returns:
            Entity id -> position
        """
        positions = self._parked(state)
        key = (state.phase, state.sub_phase)

        if key in ((1, 0), (2, 0)):
            positions.update(self._fusion_layout(state))
        elif key in ((1, 1), (2, 1)):
            positions.update(self._tower_layout(state))
        elif key == (1, 2):
            positions.update(self._splicer_layout(state))

        return positions

    def apply(self, state: EngineState) -> Dict[int, Point]:
        """Move every player to its solved position; tags and buffs are untouched."""
        positions = self.solve(state)
        for entity_id, pos in positions.items():
            state.require_entity(entity_id).position = pos
        return positions

    # ========================================================================
    # LAYOUTS
    # ========================================================================

    def _parked(self, state: EngineState) -> Dict[int, Point]:
        """Everyone on their phase-0 anchor; this alone solves phase 0."""
        return {
            p.id: state.zones.anchor(SPREAD_ANCHORS[p.tag]).position
            for p in state.players
        }

    def _fusion_layout(self, state: EngineState) -> Dict[int, Point]:
        positions: Dict[int, Point] = {}
        if state.required_conception is None:
            return positions

        needed = REQUIRED_CONCEPTIONS[state.phase] - len(state.conception_holders())
        if needed <= 0:
            return positions

        # Only the kinds behind the required Conception are paired. In phase 1
        # the spare holder stays parked on its corner, out of fusion range.
        first_kind, second_kind = compatible_kinds(state.required_conception)
        firsts = state.perfection_holders(kinds=[first_kind])
        seconds = state.perfection_holders(kinds=[second_kind])

        pairs = list(zip(firsts, seconds))[:(needed + 1) // 2]
        for spot, (a, b) in zip(FUSION_SPOTS, pairs):
            positions[a.id] = spot
            positions[b.id] = spot
        return positions

    def _tower_layout(self, state: EngineState) -> Dict[int, Point]:
        positions: Dict[int, Point] = {}
        soakers = [
            p for p in state.conception_holders()
            if not p.conception_kind.is_failure
        ]
        for tower in state.zones.towers:
            match = self._take_matching(soakers, tower.element)
            if match is not None:
                positions[match.id] = tower.position
        return positions

    def _splicer_layout(self, state: EngineState) -> Dict[int, Point]:
        positions: Dict[int, Point] = {}
        for player in state.players_with_duration(Duration.LONG):
            positions[player.id] = state.zones.home_corner(player.tag.family).position

        assignment = self.corners.assign(state)
        for entity_id, corner in assignment.corners.items():
            if corner is not None:
                positions[entity_id] = state.zones.diagonal(corner).position

        for spot, player in zip(SAFE_SPOTS, state.conception_holders()):
            positions[player.id] = spot
        return positions

    @staticmethod
    def _take_matching(candidates: List[Player], element) -> Optional[Player]:
        for index, player in enumerate(candidates):
            if player.conception_kind.tower_element == element:
                return candidates.pop(index)
        return None
