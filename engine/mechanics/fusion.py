"""
FusionResolver - Perfection pairing.

This module handles:
- Deriving a Conception from a pair of Perfection kinds
- Finding the first eligible pair in id order
- Committing exactly one fusion per invocation
- Planning which holders are staged for later fusions

Matching is first-match, not globally optimal: when several pairs are in
range at once, only the lowest-index pair fuses per call. Tests rely on this
ordering.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Set, Tuple

from ..core.types import Conception, ConceptionKind, PerfectionKind
from ..world.proximity import within_radius

if TYPE_CHECKING:
    from ..entities.player import Player
    from ..world.state import EngineState


FUSION_RADIUS = 100.0

# Keyed by the sorted pair of kind values.
CONCEPTION_TABLE: Dict[Tuple[str, str], ConceptionKind] = {
    ("alpha", "beta"): ConceptionKind.WINGED,
    ("alpha", "gamma"): ConceptionKind.AQUATIC,
    ("beta", "gamma"): ConceptionKind.SHOCKING,
    ("alpha", "alpha"): ConceptionKind.FIERY,
    ("beta", "beta"): ConceptionKind.TOXIC,
    ("gamma", "gamma"): ConceptionKind.GROWING,
}


def derive_conception(a: PerfectionKind, b: PerfectionKind) -> ConceptionKind:
    """Pure function of the sorted kind pair, so derive(a, b) == derive(b, a)."""
    key = tuple(sorted((a.value, b.value)))
    return CONCEPTION_TABLE[key]


def compatible_kinds(conception: ConceptionKind) -> Tuple[PerfectionKind, PerfectionKind]:
    """
    Get the two Perfection kinds that fuse into a success Conception.

    Raises:
        ValueError: For failure kinds, which have no distinct-kind recipe
    """
    for (a, b), kind in CONCEPTION_TABLE.items():
        if kind == conception and a != b:
            return PerfectionKind(a), PerfectionKind(b)
    raise ValueError(f"{conception} is not produced by two distinct kinds")


@dataclass
class FusionResult:
    """
    A committed fusion.

    Attributes:
        first_id: Lower entity id of the pair
        second_id: Higher entity id of the pair
        kinds: Perfection kinds of first and second
        conception: Resulting Conception kind
        description: Feedback line naming both players and the result
    """
    first_id: int
    second_id: int
    kinds: Tuple[PerfectionKind, PerfectionKind]
    conception: ConceptionKind
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first_id": self.first_id,
            "second_id": self.second_id,
            "kinds": [kind.value for kind in self.kinds],
            "conception": self.conception.value,
            "description": self.description,
        }


class FusionResolver:
    """
    Stateless resolver for Perfection fusion.

    Usage:
        resolver = FusionResolver()
        result = resolver.resolve(state, allowed_kinds={PerfectionKind.ALPHA, PerfectionKind.BETA})
        if result:
            print(result.description)
    """

    def __init__(self, radius: float = FUSION_RADIUS):
        """
        Initialize the fusion resolver.

        Args:
            radius: Pair distance must be strictly below this
        """
        self.radius = radius

    def eligible(
            self,
            state: EngineState,
            allowed_kinds: Optional[Iterable[PerfectionKind]] = None,
    ) -> List[Player]:
        """Unfused Perfection holders (optionally of allowed kinds), in id order."""
        return state.perfection_holders(kinds=allowed_kinds)

    def find_pair(
            self,
            candidates: List[Player],
            exclude: Optional[Set[int]] = None,
    ) -> Optional[Tuple[Player, Player]]:
        """
        Find the first pair (i, j), i < j, in range of each other.

        Args:
            candidates: Eligible players in id order
            exclude: Ids treated as already fused
        """
        exclude = exclude or set()
        for i in range(len(candidates)):
            first = candidates[i]
            if first.id in exclude:
                continue
            for j in range(i + 1, len(candidates)):
                second = candidates[j]
                if second.id in exclude:
                    continue
                if within_radius(first.position, second.position, self.radius):
                    return first, second
        return None

    def resolve(
            self,
            state: EngineState,
            allowed_kinds: Optional[Iterable[PerfectionKind]] = None,
    ) -> Optional[FusionResult]:
        """
        Commit at most one fusion.

        Args:
            state: Current state (modified in-place)
            allowed_kinds: Restrict candidates to these Perfection kinds

        Returns:
            The committed fusion, or None when no pair is in range
        """
        pair = self.find_pair(self.eligible(state, allowed_kinds))
        if pair is None:
            return None

        first, second = pair
        kinds = (first.perfection_kind, second.perfection_kind)
        conception = derive_conception(*kinds)

        first.buff = Conception(conception)
        second.buff = Conception(conception)
        first.fusion_partner = second.id
        second.fusion_partner = first.id

        description = (
            f"{first.name} ({kinds[0].display}) and {second.name} ({kinds[1].display}) "
            f"fused into {conception.display} Conception"
        )
        if conception.is_failure:
            description += " (failed fusion, cannot soak towers)"

        return FusionResult(
            first_id=first.id,
            second_id=second.id,
            kinds=kinds,
            conception=conception,
            description=description,
        )

    def plan(
            self,
            state: EngineState,
            allowed_kinds: Optional[Iterable[PerfectionKind]] = None,
    ) -> List[Tuple[int, int]]:
        """
        Predict the pairs later calls would fuse, without mutating anything.

        Applies the first-match rule repeatedly, treating already planned
        players as fused.

        Returns:
            Planned (first_id, second_id) pairs in commit order
        """
        candidates = self.eligible(state, allowed_kinds)
        planned: List[Tuple[int, int]] = []
        taken: Set[int] = set()
        while True:
            pair = self.find_pair(candidates, exclude=taken)
            if pair is None:
                return planned
            first, second = pair
            planned.append((first.id, second.id))
            taken.update((first.id, second.id))
