"""
Roster construction.

Builds the eight players in party order and checks the tag invariant: the
tags handed in must be a permutation of the full tag set. Restored rosters
are also checked for consistent fusion links.
"""

from __future__ import annotations
from typing import List, Optional, Sequence

from ..core.types import DebuffTag, Role
from ..utils import IDGenerator
from ..world.arena import Arena
from .player import Player

ROSTER_ORDER: tuple = tuple(Role)


def validate_tag_permutation(tags: Sequence[DebuffTag]) -> None:
    """
    Raise ValueError unless tags contain every DebuffTag exactly once.
    """
    if len(tags) != len(DebuffTag) or set(tags) != set(DebuffTag):
        raise ValueError(
            f"Tags must be a permutation of {[t.value for t in DebuffTag]}, "
            f"got {[getattr(t, 'value', t) for t in tags]}"
        )


def validate_fusion_links(players: Sequence[Player]) -> None:
    """
    Raise ValueError unless Conceptions and fusion partners pair up.

    A Conception only comes out of a fusion, so every holder points at a
    partner who points back and holds a Conception too.
    """
    by_id = {p.id: p for p in players}
    for player in players:
        if player.fusion_partner is None:
            if player.has_conception:
                raise ValueError(f"{player.name} holds a Conception without a fusion partner")
            continue
        if not player.has_conception:
            raise ValueError(f"{player.name} has a fusion partner but no Conception")
        partner = by_id.get(player.fusion_partner)
        if partner is None or partner.id == player.id:
            raise ValueError(f"{player.name} has an invalid fusion partner: {player.fusion_partner}")
        if partner.fusion_partner != player.id or not partner.has_conception:
            raise ValueError(f"{player.name} and {partner.name} are not fused with each other")


def create_roster(tags: Sequence[DebuffTag], arena: Optional[Arena] = None) -> List[Player]:
    """
    Create the eight players.

    Args:
        tags: One tag per roster slot, in ROSTER_ORDER
        arena: Arena used for the default start circle

    Returns:
        Players with ids 0..7, standing on the start circle

    Raises:
        ValueError: If tags are not a permutation of the tag set
    """
    validate_tag_permutation(tags)
    arena = arena or Arena()
    ids = IDGenerator(start=0)

    players = []
    for index, (role, tag) in enumerate(zip(ROSTER_ORDER, tags)):
        players.append(Player(
            id=ids.next_id(),
            role=role,
            tag=tag,
            position=arena.circle_position(index, count=len(ROSTER_ORDER)),
        ))
    return players
