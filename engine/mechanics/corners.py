"""
CornerAssignmentResolver - Scarce corner allocation for splicer positioning.

Three corners (A, B, C) are shared by three roles:
- The priority role (the unused Perfection holder) reserves the home corner
  of its kind first, unconditionally.
- Multisplice walks clockwise (A -> B -> C) and takes the first free corner.
- Supersplice walks counter-clockwise (C -> B -> A) and takes the first free
  corner.

The assignment is a pure function of the current buffs and tags plus the
initial taken set; validator and solver both call it, so they always agree.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.types import DebuffTag, PerfectionKind
from ..world.zones import CORNERS, HOME_CORNERS

if TYPE_CHECKING:
    from ..entities.player import Player
    from ..world.state import EngineState


CLOCKWISE: Tuple[str, ...] = CORNERS
COUNTER_CLOCKWISE: Tuple[str, ...] = tuple(reversed(CORNERS))

# Scarce roles in resolution order, each with its traversal.
SCARCE_ROLES: Tuple[Tuple[DebuffTag, Tuple[str, ...]], ...] = (
    (DebuffTag.MULTISPLICE, CLOCKWISE),
    (DebuffTag.SUPERSPLICE, COUNTER_CLOCKWISE),
)


@dataclass
class CornerAssignment:
    """
    Result of a corner resolution.

    Attributes:
        priority_id: Entity id of the priority player (None if none exists)
        corners: Entity id -> assigned corner name, None when nothing was left
        problems: Why a role got no corner
    """
    priority_id: Optional[int]
    corners: Dict[int, Optional[str]] = field(default_factory=dict)
    problems: List[str] = field(default_factory=list)

    def corner_for(self, entity_id: int) -> Optional[str]:
        return self.corners.get(entity_id)


def first_free(order: Sequence[str], taken: Iterable[str]) -> Optional[str]:
    """Walk order and return the first corner not in taken."""
    taken = set(taken)
    for corner in order:
        if corner not in taken:
            return corner
    return None


def resolve_corners(
        priority_kind: Optional[PerfectionKind],
        taken: Iterable[str] = (),
) -> Dict[str, Optional[str]]:
    """
    Assign corners to the priority role and the two scarce roles.

    Args:
        priority_kind: Kind that fixes the priority role's home corner
        taken: Corners unavailable before resolution starts

    Returns:
        Role key ("priority", "multisplice", "supersplice") -> corner or None
    """
    reserved = set(taken)
    assignment: Dict[str, Optional[str]] = {}

    if priority_kind is None:
        assignment["priority"] = None
    else:
        home = HOME_CORNERS[priority_kind]
        # A taken home corner is not replaced by a guess.
        assignment["priority"] = None if home in reserved else home
        reserved.add(home)

    for tag, order in SCARCE_ROLES:
        corner = first_free(order, reserved)
        assignment[tag.value] = corner
        if corner is not None:
            reserved.add(corner)

    return assignment


class CornerAssignmentResolver:
    """
    Derives the diagonal assignment for the current state.

    Usage:
        assignment = CornerAssignmentResolver().assign(state)
        corner = assignment.corner_for(player.id)
    """

    def priority_player(self, state: EngineState) -> Optional[Player]:
        """The unused Perfection holder, if exactly one remains."""
        holders = state.perfection_holders()
        return holders[0] if len(holders) == 1 else None

    def assign(self, state: EngineState, taken: Iterable[str] = ()) -> CornerAssignment:
        """
        Resolve corners for the priority player and both splicers.

        Args:
            state: Current state (read only)
            taken: Corners unavailable before resolution starts

        Returns:
            CornerAssignment keyed by entity id
        """
        taken = tuple(taken)
        priority = self.priority_player(state)
        roles = resolve_corners(priority.perfection_kind if priority else None, taken)

        result = CornerAssignment(priority_id=priority.id if priority else None)
        if priority is None:
            count = len(state.perfection_holders())
            result.problems.append(
                f"Expected exactly one unused Perfection holder, found {count}"
            )
        else:
            result.corners[priority.id] = roles["priority"]
            if roles["priority"] is None:
                result.problems.append(
                    f"{priority.buff_label()} home corner "
                    f"{HOME_CORNERS[priority.perfection_kind]} is already taken"
                )

        for tag, _order in SCARCE_ROLES:
            splicer = state.player_with_tag(tag)
            result.corners[splicer.id] = roles[tag.value]
            if roles[tag.value] is None:
                result.problems.append(f"No free corner left for {splicer.label()}")

        return result
