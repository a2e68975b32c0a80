"""
Entity definitions for the mechanic validator.

This module exports:
- Player (one participant)
- create_roster (builds the eight players from a tag permutation)
"""

from .player import Player
from .roster import ROSTER_ORDER, create_roster, validate_fusion_links, validate_tag_permutation

__all__ = [
    "Player",
    "ROSTER_ORDER",
    "create_roster",
    "validate_fusion_links",
    "validate_tag_permutation",
]
