"""
Core type definitions for the mechanic validator.

This module contains all fundamental types, enums, and constants used
throughout the engine. No logic beyond small lookups, just data structures.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union
from dataclasses import dataclass

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Arena position: (x, y) in arena pixels where:
# - X increases to the RIGHT
# - Y increases DOWNWARD (screen convention, origin at TOP-LEFT)
Point = Tuple[float, float]


# ============================================================================
# PLAYERS
# ============================================================================

class Role(Enum):
    """The eight party slots. Display only, the engine never branches on them."""
    MT = "MT"
    OT = "OT"
    H1 = "H1"
    H2 = "H2"
    D1 = "D1"
    D2 = "D2"
    D3 = "D3"
    D4 = "D4"

    def __str__(self) -> str:
        return self.value

    @property
    def category(self) -> str:
        """Get the party category (tank, healer or dps)."""
        if self in (Role.MT, Role.OT):
            return "tank"
        if self in (Role.H1, Role.H2):
            return "healer"
        return "dps"


# ============================================================================
# DEBUFFS AND BUFFS
# ============================================================================

class PerfectionKind(Enum):
    """
    The three debuff families.

    A family names both the element of a debuff tag and the kind of the
    Perfection buff left behind when that family resolves.
    """
    ALPHA = "alpha"
    BETA = "beta"
    GAMMA = "gamma"

    def __str__(self) -> str:
        return self.value

    @property
    def display(self) -> str:
        """Get the element shown for this Perfection kind."""
        return {
            PerfectionKind.ALPHA: "Fire",
            PerfectionKind.BETA: "Poison",
            PerfectionKind.GAMMA: "Plant",
        }[self]


class Duration(Enum):
    """Timer length of an elemental debuff."""
    SHORT = "short"
    LONG = "long"

    @property
    def seconds(self) -> int:
        """Flavor timer, never simulated."""
        return 8 if self == Duration.SHORT else 26


class DebuffTag(Enum):
    """The eight mutually exclusive initial tags, one per player."""
    ALPHA_SHORT = "alpha-short"
    ALPHA_LONG = "alpha-long"
    BETA_SHORT = "beta-short"
    BETA_LONG = "beta-long"
    GAMMA_SHORT = "gamma-short"
    GAMMA_LONG = "gamma-long"
    MULTISPLICE = "multisplice"
    SUPERSPLICE = "supersplice"

    def __str__(self) -> str:
        return self.value

    @property
    def family(self) -> Optional[PerfectionKind]:
        """Get the element family (None for splicers)."""
        return _TAG_FAMILIES.get(self)

    @property
    def duration(self) -> Optional[Duration]:
        """Get the timer length (None for splicers)."""
        return _TAG_DURATIONS.get(self)

    @property
    def is_splicer(self) -> bool:
        return self in (DebuffTag.MULTISPLICE, DebuffTag.SUPERSPLICE)

    @property
    def stack_size(self) -> int:
        """Number of players a splicer stack must hold (0 for elemental tags)."""
        return {DebuffTag.MULTISPLICE: 2, DebuffTag.SUPERSPLICE: 3}.get(self, 0)

    @property
    def label(self) -> str:
        """Human-readable tag name, e.g. 'Alpha 8s' or 'Multisplice'."""
        if self.is_splicer:
            return self.value.capitalize()
        return f"{self.family.value.capitalize()} {self.duration.seconds}s"


_TAG_FAMILIES = {
    DebuffTag.ALPHA_SHORT: PerfectionKind.ALPHA,
    DebuffTag.ALPHA_LONG: PerfectionKind.ALPHA,
    DebuffTag.BETA_SHORT: PerfectionKind.BETA,
    DebuffTag.BETA_LONG: PerfectionKind.BETA,
    DebuffTag.GAMMA_SHORT: PerfectionKind.GAMMA,
    DebuffTag.GAMMA_LONG: PerfectionKind.GAMMA,
}

_TAG_DURATIONS = {
    DebuffTag.ALPHA_SHORT: Duration.SHORT,
    DebuffTag.ALPHA_LONG: Duration.LONG,
    DebuffTag.BETA_SHORT: Duration.SHORT,
    DebuffTag.BETA_LONG: Duration.LONG,
    DebuffTag.GAMMA_SHORT: Duration.SHORT,
    DebuffTag.GAMMA_LONG: Duration.LONG,
}


class TowerElement(Enum):
    """Element a tower demands from its soaker."""
    WIND = "wind"
    WATER = "water"
    LIGHTNING = "lightning"

    def __str__(self) -> str:
        return self.value


class ConceptionKind(Enum):
    """
    Buffs produced by fusing two Perfection holders.

    Three success kinds each match one tower element; the three failure kinds
    come from pairing a Perfection kind with itself and match nothing.
    """
    WINGED = "winged"
    AQUATIC = "aquatic"
    SHOCKING = "shocking"
    FIERY = "fiery"
    TOXIC = "toxic"
    GROWING = "growing"

    def __str__(self) -> str:
        return self.value

    @property
    def is_failure(self) -> bool:
        return self.tower_element is None

    @property
    def tower_element(self) -> Optional[TowerElement]:
        """Get the tower element this Conception can soak (None for failures)."""
        return {
            ConceptionKind.WINGED: TowerElement.WIND,
            ConceptionKind.AQUATIC: TowerElement.WATER,
            ConceptionKind.SHOCKING: TowerElement.LIGHTNING,
        }.get(self)

    @property
    def display(self) -> str:
        return self.value.capitalize()


SUCCESS_CONCEPTIONS: Tuple[ConceptionKind, ...] = (
    ConceptionKind.WINGED,
    ConceptionKind.AQUATIC,
    ConceptionKind.SHOCKING,
)


@dataclass(frozen=True)
class Perfection:
    """Transient buff; precursor to fusion."""
    kind: PerfectionKind

    def describe(self) -> str:
        return f"{self.kind.display} Perfection"


@dataclass(frozen=True)
class Conception:
    """Buff produced by the fusion resolver."""
    kind: ConceptionKind

    def describe(self) -> str:
        return f"{self.kind.display} Conception"


Buff = Union[Perfection, Conception]


def buff_to_dict(buff: Optional[Buff]) -> Optional[Dict[str, Any]]:
    """Serialize a buff (or its absence) to a plain dict."""
    match buff:
        case None:
            return None
        case Perfection(kind=kind):
            return {"type": "perfection", "kind": kind.value}
        case Conception(kind=kind):
            return {"type": "conception", "kind": kind.value}
    raise TypeError(f"Unknown buff: {buff!r}")


def buff_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Buff]:
    """Deserialize a buff produced by buff_to_dict()."""
    if data is None:
        return None
    if data["type"] == "perfection":
        return Perfection(PerfectionKind(data["kind"]))
    if data["type"] == "conception":
        return Conception(ConceptionKind(data["kind"]))
    raise ValueError(f"Unknown buff type: {data['type']!r}")


# ============================================================================
# VALIDATION OUTPUT
# ============================================================================

class Classification(Enum):
    """Per-player verdict of the last check."""
    CORRECT = "correct"
    INCORRECT = "incorrect"
    NEUTRAL = "neutral"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# PHASES
# ============================================================================

FINAL_PHASE = 2

PHASE_NAMES: Dict[int, str] = {
    0: "Alpha Resolution",
    1: "Gamma Resolution",
    2: "Tower Soaking",
}

SUB_PHASE_NAMES: Dict[Tuple[int, int], str] = {
    (0, 0): "Spread and Stack",
    (1, 0): "Perfection Fusion",
    (1, 1): "Tower Soak",
    (1, 2): "Splicer Positioning",
    (2, 0): "Second Fusion",
    (2, 1): "Four Tower Soak",
}

# Last sub-phase of each phase; passing it marks the phase solved.
TERMINAL_SUB_PHASE: Dict[int, int] = {0: 0, 1: 2, 2: 1}
