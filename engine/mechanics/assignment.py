"""
Random assignment of tags and Perfection kinds.

Every random draw of the engine goes through fisher_yates() or the same
session RNG, so a seeded session replays identically.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, TypeVar

from ..core.types import (
    ConceptionKind,
    DebuffTag,
    Duration,
    Perfection,
    PerfectionKind,
    SUCCESS_CONCEPTIONS,
)
from .fusion import compatible_kinds

if TYPE_CHECKING:
    from ..world.state import EngineState

T = TypeVar("T")

# Perfection pools per phase entry.
PHASE_ONE_KINDS: tuple = (PerfectionKind.ALPHA, PerfectionKind.BETA, PerfectionKind.GAMMA)
PHASE_TWO_KINDS: tuple = PHASE_ONE_KINDS * 2


def fisher_yates(items: Sequence[T], rng: random.Random) -> List[T]:
    """
    Return a uniformly shuffled copy of items.

    Walks the array from the end, swapping each slot with a uniformly drawn
    slot at or before it. The input sequence is left untouched.
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def assign_tags(rng: random.Random) -> List[DebuffTag]:
    """Draw one tag per roster slot; always a permutation of DebuffTag."""
    return fisher_yates(list(DebuffTag), rng)


def assign_perfection(state: EngineState, phase: int) -> Dict[int, PerfectionKind]:
    """
    Hand out Perfection buffs for a phase entry.

    Phase 1: the three short-tag players each receive one distinct kind.
    Phase 2: the six elemental players receive two of each kind.

    Existing buffs of the receivers are replaced and partners cleared.

    Returns:
        Entity id -> assigned kind
    """
    if phase == 1:
        receivers = state.players_with_duration(Duration.SHORT)
        pool = PHASE_ONE_KINDS
    elif phase == 2:
        receivers = [p for p in state.players if not p.tag.is_splicer]
        pool = PHASE_TWO_KINDS
    else:
        raise ValueError(f"Phase {phase} has no Perfection assignment")

    kinds = fisher_yates(pool, state.rng)
    assigned: Dict[int, PerfectionKind] = {}
    for player, kind in zip(receivers, kinds):
        player.clear_buff()
        player.buff = Perfection(kind)
        assigned[player.id] = kind
    return assigned


def choose_required_conception(
        kinds: Sequence[PerfectionKind],
        rng: random.Random,
) -> ConceptionKind:
    """
    Pick the Conception the phase's towers demand.

    Chooses uniformly among success Conceptions whose two Perfection kinds are
    both present in kinds. Falls back to WINGED when no pair is available.
    """
    present = set(kinds)
    candidates: List[ConceptionKind] = [
        conception for conception in SUCCESS_CONCEPTIONS
        if set(compatible_kinds(conception)) <= present
    ]
    if not candidates:
        return ConceptionKind.WINGED
    return candidates[rng.randrange(len(candidates))]


def required_conception_for(state: EngineState) -> Optional[ConceptionKind]:
    """Derive the required Conception from the current Perfection holders."""
    kinds = [p.perfection_kind for p in state.perfection_holders()]
    if not kinds:
        return None
    return choose_required_conception(kinds, state.rng)
