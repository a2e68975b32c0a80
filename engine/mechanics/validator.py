"""
PhaseValidator - One rule set per (phase, sub-phase).

This module handles:
- Running the fusion resolver ahead of the fusion sub-phases
- Checking every player against the zones the current rules demand
- Collecting violations and per-player classifications

The validator never moves the phase; it returns a CheckResult and leaves
transitions to the PhaseStateMachine. The only state it writes is the
fusion committed at the start of a fusion sub-phase.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Optional, Set, Tuple

from ..core.types import DebuffTag, Duration, PerfectionKind
from ..core.validation import CheckResult, ValidationReport
from ..world.zones import SAFE_REGION_LIMIT, in_safe_region
from .corners import CornerAssignmentResolver
from .fusion import FusionResolver, compatible_kinds

if TYPE_CHECKING:
    from ..world.state import EngineState


# Phase 0: where each tag resolves.
SPREAD_ANCHORS: Dict[DebuffTag, str] = {
    DebuffTag.ALPHA_SHORT: "A",
    DebuffTag.BETA_SHORT: "B",
    DebuffTag.GAMMA_SHORT: "C",
    DebuffTag.MULTISPLICE: "2",
    DebuffTag.ALPHA_LONG: "2",
    DebuffTag.SUPERSPLICE: "3",
    DebuffTag.BETA_LONG: "3",
    DebuffTag.GAMMA_LONG: "3",
}

# Exact head counts for the two stack markers (set by the splicer on each).
STACK_MARKERS: Tuple[Tuple[str, int], ...] = (
    ("2", DebuffTag.MULTISPLICE.stack_size),
    ("3", DebuffTag.SUPERSPLICE.stack_size),
)

FUSION_SUB_PHASES: FrozenSet[Tuple[int, int]] = frozenset({(1, 0), (2, 0)})

# Conception holders needed before a fusion sub-phase can advance.
REQUIRED_CONCEPTIONS: Dict[int, int] = {1: 2, 2: 4}


def requires_towers(phase: int, sub_phase: int) -> bool:
    """Every sub-phase of phases 1 and 2 reads towers except splicer positioning."""
    return phase in (1, 2) and (phase, sub_phase) != (1, 2)


def allowed_fusion_kinds(state: EngineState) -> Optional[FrozenSet[PerfectionKind]]:
    """Phase 2 only fuses the two kinds behind the required Conception."""
    if state.phase == 2 and state.required_conception is not None:
        return frozenset(compatible_kinds(state.required_conception))
    return None


class PhaseValidator:
    """
    Stateless rule checker.

    Usage:
        validator = PhaseValidator()
        result = validator.check(state)
        if not result.passed:
            for line in result.violations:
                print(line)
    """

    def __init__(
            self,
            fusion: Optional[FusionResolver] = None,
            corners: Optional[CornerAssignmentResolver] = None,
    ):
        self.fusion = fusion or FusionResolver()
        self.corners = corners or CornerAssignmentResolver()
        self._rules: Dict[Tuple[int, int], Callable[[EngineState, ValidationReport], None]] = {
            (0, 0): self._check_spread,
            (1, 0): self._check_fusion,
            (1, 1): self._check_towers,
            (1, 2): self._check_splicers,
            (2, 0): self._check_fusion,
            (2, 1): self._check_towers,
        }

    def check(self, state: EngineState) -> CheckResult:
        """
        Validate the current (phase, sub-phase).

        Args:
            state: Current state (fusion sub-phases modify it in-place)

        Returns:
            CheckResult; a precondition failure leaves state untouched
        """
        key = (state.phase, state.sub_phase)
        rule = self._rules.get(key)
        if rule is None:
            return CheckResult.precondition(f"No rules for phase {state.phase}.{state.sub_phase}")

        if requires_towers(*key) and not state.zones.towers:
            return CheckResult.precondition("Towers not spawned yet - advance the phase first")

        report = ValidationReport([p.id for p in state.players])

        fusion = None
        if key in FUSION_SUB_PHASES:
            fusion = self.fusion.resolve(state, allowed_fusion_kinds(state))
            if fusion is not None:
                report.note(fusion.description)

        rule(state, report)

        result = report.to_result()
        result.fusion = fusion
        return result

    # ========================================================================
    # PHASE 0: SPREAD AND STACK
    # ========================================================================

    def _check_spread(self, state: EngineState, report: ValidationReport) -> None:
        for player in state.players:
            zone = state.zones.anchor(SPREAD_ANCHORS[player.tag])
            if zone.contains(player.position):
                report.mark_correct(player.id)
            else:
                report.violation(f"{player.label()} should be at {zone.label}", player.id)

        # One misplaced player is one violation; head counts only matter once
        # everyone stands on a valid anchor (markers 2 and 3 overlap).
        if not report.ok:
            return

        for marker, expected in STACK_MARKERS:
            zone = state.zones.anchor(marker)
            occupants = [p for p in state.players if zone.contains(p.position)]
            if len(occupants) == expected:
                continue
            members = " + ".join(
                tag.label for tag, name in SPREAD_ANCHORS.items() if name == marker
            )
            intruders = [p.id for p in occupants if SPREAD_ANCHORS[p.tag] != marker]
            report.violation(
                f"Marker {marker} should have {expected} players ({members}), "
                f"has {len(occupants)}",
                *intruders,
            )

    # ========================================================================
    # FUSION SUB-PHASES (1.0 and 2.0)
    # ========================================================================

    def _check_fusion(self, state: EngineState, report: ValidationReport) -> None:
        allowed = allowed_fusion_kinds(state)
        required = REQUIRED_CONCEPTIONS[state.phase]
        holders = state.conception_holders()
        eligible = state.perfection_holders(kinds=allowed)

        for player in holders:
            report.mark_correct(player.id)

        if state.phase == 2:
            self._check_idle_perfection(state, report, allowed)

        if len(holders) >= required:
            return

        if not holders:
            if eligible:
                report.violation(
                    "Players with Perfection need to fuse first! Stand two Perfection "
                    "holders close together and check again to fuse.",
                    *[p.id for p in eligible],
                )
            else:
                report.violation("No Perfection holders are left to fuse")
            return

        planned = self.fusion.plan(state, allowed)
        staged: Set[int] = {entity_id for pair in planned for entity_id in pair}
        unstaged = [p for p in eligible if p.id not in staged]

        for player in unstaged:
            report.violation(
                f"{player.buff_label()} is still unfused and has no partner in range",
                player.id,
            )
        if not unstaged and len(holders) + 2 * len(planned) < required:
            report.violation(
                f"Need {required} players with Conception, have {len(holders)}"
            )

        if planned and report.ok:
            report.pending = True
            report.note(
                f"Fusion in progress: {len(planned)} more pair(s) in range, "
                "check again to fuse the next pair"
            )

    def _check_idle_perfection(
            self,
            state: EngineState,
            report: ValidationReport,
            allowed: Optional[FrozenSet[PerfectionKind]],
    ) -> Set[int]:
        """Flag holders of the incompatible kind standing in a tower."""
        flagged: Set[int] = set()
        if allowed is None:
            return flagged
        for player in state.perfection_holders():
            if player.perfection_kind in allowed:
                continue
            towers = state.zones.towers_containing(player.position)
            if towers:
                report.violation(
                    f"{player.buff_label()} cannot make "
                    f"{state.required_conception.display} Conception and must stay "
                    f"out of {towers[0].label}",
                    player.id,
                )
                flagged.add(player.id)
            else:
                report.mark_correct(player.id)
        return flagged

    # ========================================================================
    # TOWER SOAKS (1.1 and 2.1)
    # ========================================================================

    def _check_towers(self, state: EngineState, report: ValidationReport) -> None:
        reported: Set[int] = set()

        for player in state.conception_holders():
            if player.conception_kind.is_failure:
                report.violation(
                    f"{player.buff_label()} came from a failed fusion and cannot "
                    "soak any tower",
                    player.id,
                )
                reported.add(player.id)

        if state.phase == 2:
            reported |= self._check_idle_perfection(state, report, allowed_fusion_kinds(state))

        for tower in state.zones.towers:
            nearby = [p for p in state.players if tower.contains(p.position)]

            if not nearby:
                report.violation(f"{tower.label} ({tower.element}) is not being soaked!")
                continue

            if len(nearby) > 1:
                report.violation(
                    f"{tower.label} has too many players ({len(nearby)})",
                    *[p.id for p in nearby],
                )
                continue

            player = nearby[0]
            if player.id in reported:
                continue
            if not player.has_conception:
                report.violation(
                    f"{player.buff_label()} at {tower.label} has no Conception buff!",
                    player.id,
                )
            elif player.conception_kind.tower_element != tower.element:
                report.violation(
                    f"{player.name} has {player.conception_kind.display} Conception but "
                    f"{tower.label} requires {tower.element}!",
                    player.id,
                )
            else:
                report.mark_correct(player.id)

    # ========================================================================
    # PHASE 1.2: SPLICER POSITIONING
    # ========================================================================

    def _check_splicers(self, state: EngineState, report: ValidationReport) -> None:
        for player in state.players_with_duration(Duration.LONG):
            zone = state.zones.home_corner(player.tag.family)
            if zone.contains(player.position):
                report.mark_correct(player.id)
            else:
                report.violation(f"{player.label()} should be at {zone.label}", player.id)

        assignment = self.corners.assign(state)
        for problem in assignment.problems:
            report.violation(problem)

        for entity_id, corner in assignment.corners.items():
            if corner is None:
                report.mark_incorrect(entity_id)
                continue
            player = state.require_entity(entity_id)
            zone = state.zones.diagonal(corner)
            if zone.contains(player.position):
                report.mark_correct(entity_id)
            else:
                report.violation(f"{player.buff_label()} should be at {zone.label}", entity_id)

        for player in state.conception_holders():
            if in_safe_region(player.position):
                report.mark_correct(player.id)
            else:
                report.violation(
                    f"{player.buff_label()} should wait in the safe region "
                    f"(x < {SAFE_REGION_LIMIT:g}, y < {SAFE_REGION_LIMIT:g})",
                    player.id,
                )
