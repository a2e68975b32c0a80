"""
PhaseStateMachine - Owns (phase, sub-phase, solved).

This module handles:
- Building a fresh randomized state (reset)
- Committing check results: sub-phase transitions and the solved flag
- Advancing to the next phase and applying its entry effects

Transitions only move forward. The only way back is a new state.
"""

from __future__ import annotations
import random
from typing import List, Optional, Sequence

from ..core.types import (
    FINAL_PHASE,
    TERMINAL_SUB_PHASE,
    DebuffTag,
)
from ..core.validation import CheckResult
from ..entities.roster import create_roster
from ..world.arena import Arena
from ..world.state import EngineState
from ..world.zones import ZoneRegistry
from .assignment import assign_perfection, assign_tags, required_conception_for

SUB_PHASE_ADVANCED = "SUB_PHASE_ADVANCED"
PHASE_SOLVED = "PHASE_SOLVED"

TOWER_COUNTS = {1: 2, 2: 4}


class PhaseStateMachine:
    """
    Applies phase rules to an EngineState.

    Usage:
        machine = PhaseStateMachine()
        state = machine.new_state(seed=7)
        result = validator.check(state)
        machine.apply_check(state, result)
        rejection = machine.advance(state)
    """

    def __init__(self, zone_tolerance: float = 80.0):
        """
        Initialize the state machine.

        Args:
            zone_tolerance: Radius for every zone of new states
        """
        self.zone_tolerance = zone_tolerance

    # ========================================================================
    # RESET
    # ========================================================================

    def new_state(
            self,
            seed: Optional[int] = None,
            tags: Optional[Sequence[DebuffTag]] = None,
            rng: Optional[random.Random] = None,
    ) -> EngineState:
        """
        Build a fresh phase-0 state.

        Args:
            seed: Seed for the session RNG
            tags: Fixed tag per roster slot; drawn with Fisher-Yates when omitted
            rng: Use this RNG instead of seeding a new one

        Returns:
            New EngineState at phase 0
        """
        rng = rng or random.Random(seed)
        if tags is None:
            tags = assign_tags(rng)

        arena = Arena()
        state = EngineState(
            players=create_roster(tags, arena),
            zones=ZoneRegistry(tolerance=self.zone_tolerance, center=arena.center),
            arena=arena,
            seed=seed,
        )
        state.rng = rng
        return state

    # ========================================================================
    # CHECK COMMIT
    # ========================================================================

    def apply_check(self, state: EngineState, result: CheckResult) -> None:
        """
        Commit a check result to state.

        Precondition failures change nothing. Otherwise classifications and
        violations are stored; a pass either advances the sub-phase or marks
        the phase solved.
        """
        if result.precondition_failed:
            return

        state.classifications = dict(result.classifications)
        state.last_violations = list(result.violations)

        if not result.passed:
            state.solved = False
            return

        if result.pending:
            return

        if state.sub_phase >= TERMINAL_SUB_PHASE[state.phase]:
            state.solved = True
            result.transition = PHASE_SOLVED
            return

        self._enter_sub_phase(state, state.sub_phase + 1)
        result.transition = SUB_PHASE_ADVANCED

    # ========================================================================
    # PHASE ADVANCE
    # ========================================================================

    def advance(self, state: EngineState) -> List[str]:
        """
        Move to the next phase.

        Args:
            state: Current state (modified in-place only on success)

        Returns:
            Empty list on success, otherwise a single violation
        """
        if not state.solved:
            return ["Solve the current phase first!"]
        if state.phase >= FINAL_PHASE:
            return ["Already at final phase!"]

        state.solved = False
        state.phase += 1
        state.sub_phase = 0
        state.reset_classifications()
        self._enter_phase(state)
        return []

    def _enter_phase(self, state: EngineState) -> None:
        if state.phase == 2:
            # Phase 1 Conceptions are spent on the first tower set.
            for player in state.players:
                player.clear_buff()

        assign_perfection(state, state.phase)
        state.required_conception = required_conception_for(state)

        state.zones.indicators_visible = False
        state.zones.regenerate_towers(
            TOWER_COUNTS[state.phase],
            state.required_conception.tower_element,
        )

    def _enter_sub_phase(self, state: EngineState, sub_phase: int) -> None:
        state.sub_phase = sub_phase
        if (state.phase, sub_phase) == (1, 2):
            state.zones.clear_towers()
            state.zones.indicators_visible = True
