"""
Zone registry - named reference points used as validation targets.

Two kinds of zones live here:
- Static anchors, reused every phase. Waymarks A, B and C are corner zones
  and double as the three corners of the splicer resolution; markers 2 and
  3 are plain anchors.
- Towers, regenerated on phase entry. Every tower of a phase carries the
  element matching the phase's required Conception.

Diagonal points and the safe region are derived from the anchors and the
arena center; they are not stored.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..core.types import Point, PerfectionKind, TowerElement
from .proximity import within


class ZoneKind(Enum):
    ANCHOR = "anchor"
    CORNER = "corner"
    TOWER = "tower"
    DIAGONAL = "diagonal"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Zone:
    """
    A named point with a tolerance radius.

    Attributes:
        name: Stable key ("A", "2", "tower-0", "diag-B")
        label: Display name used in violation text
        position: Center of the zone
        tolerance: Strict radius used by within()
        kind: Anchor, corner, tower or diagonal
        element: Required element (towers only)
    """
    name: str
    label: str
    position: Point
    tolerance: float
    kind: ZoneKind = ZoneKind.ANCHOR
    element: Optional[TowerElement] = None

    def contains(self, point: Point) -> bool:
        return within(point, self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "position": list(self.position),
            "tolerance": self.tolerance,
            "kind": self.kind.value,
            "element": self.element.value if self.element else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Zone:
        element = data.get("element")
        return cls(
            name=data["name"],
            label=data["label"],
            position=tuple(data["position"]),
            tolerance=data["tolerance"],
            kind=ZoneKind(data.get("kind", "anchor")),
            element=TowerElement(element) if element else None,
        )


# Waymark layout for the 550px arena.
ANCHOR_LAYOUT: Dict[str, Tuple[Point, str]] = {
    "A": ((550.0, 50.0), "A (NE Corner)"),
    "B": ((550.0, 550.0), "B (SE Corner)"),
    "C": ((50.0, 550.0), "4/C (SW Corner)"),
    "2": ((150.0, 50.0), "2 (North Wall)"),
    "3": ((50.0, 150.0), "3 (West Wall)"),
}

# Corner order used by the splicer resolution; walking forward is clockwise.
CORNERS: Tuple[str, ...] = ("A", "B", "C")

HOME_CORNERS: Dict[PerfectionKind, str] = {
    PerfectionKind.ALPHA: "A",
    PerfectionKind.BETA: "B",
    PerfectionKind.GAMMA: "C",
}

TOWER_LAYOUTS: Dict[int, List[Tuple[Point, str]]] = {
    2: [
        ((270.0, 120.0), "North Tower"),
        ((270.0, 380.0), "South Tower"),
    ],
    4: [
        ((270.0, 75.0), "North Tower"),
        ((270.0, 195.0), "Mid-North Tower"),
        ((270.0, 315.0), "Mid-South Tower"),
        ((270.0, 435.0), "South Tower"),
    ],
}

# Conception holders wait here during splicer positioning: x < 150 and y < 150.
SAFE_REGION_LIMIT = 150.0


def in_safe_region(point: Point, limit: float = SAFE_REGION_LIMIT) -> bool:
    return point[0] < limit and point[1] < limit


class ZoneRegistry:
    """
    Holds every zone the validator compares positions against.

    The registry owns the tower list; anchors are rebuilt from ANCHOR_LAYOUT
    and never change during a session.
    """

    def __init__(self, tolerance: float = 80.0, center: Point = (275.0, 275.0)):
        """
        Initialize the registry.

        Args:
            tolerance: Radius shared by anchors, towers and diagonals
            center: Arena center, used to derive diagonal points
        """
        self.tolerance = tolerance
        self.center = center
        self._anchors: Dict[str, Zone] = {
            name: Zone(
                name=name,
                label=label,
                position=pos,
                tolerance=tolerance,
                kind=ZoneKind.CORNER if name in CORNERS else ZoneKind.ANCHOR,
            )
            for name, (pos, label) in ANCHOR_LAYOUT.items()
        }
        self._towers: List[Zone] = []
        self.indicators_visible: bool = False

    # ========================================================================
    # ANCHORS, CORNERS, DIAGONALS
    # ========================================================================

    def anchor(self, name: str) -> Zone:
        """
        Get a static anchor by name.

        Raises:
            KeyError: If no anchor has that name
        """
        return self._anchors[name]

    def anchors(self) -> List[Zone]:
        return list(self._anchors.values())

    def home_corner(self, kind: PerfectionKind) -> Zone:
        return self._anchors[HOME_CORNERS[kind]]

    def diagonal(self, corner: str) -> Zone:
        """
        Get the diagonal point of a corner.

        The diagonal sits halfway between the arena center and the corner.
        """
        cx, cy = self.center
        x, y = self._anchors[corner].position
        return Zone(
            name=f"diag-{corner}",
            label=f"{corner} diagonal",
            position=((cx + x) / 2, (cy + y) / 2),
            tolerance=self.tolerance,
            kind=ZoneKind.DIAGONAL,
        )

    def indicators(self) -> List[Zone]:
        """Corner and diagonal markers published during splicer positioning."""
        if not self.indicators_visible:
            return []
        zones = [self._anchors[name] for name in CORNERS]
        zones.extend(self.diagonal(name) for name in CORNERS)
        return zones

    # ========================================================================
    # TOWERS
    # ========================================================================

    @property
    def towers(self) -> List[Zone]:
        return list(self._towers)

    def regenerate_towers(self, count: int, element: TowerElement) -> List[Zone]:
        """
        Replace the tower set.

        Args:
            count: Number of towers (2 or 4)
            element: Element every new tower requires

        Returns:
            The new towers

        Raises:
            ValueError: If there is no layout for count
        """
        if count not in TOWER_LAYOUTS:
            raise ValueError(f"No tower layout for {count} towers")
        self._towers = [
            Zone(
                name=f"tower-{index}",
                label=label,
                position=pos,
                tolerance=self.tolerance,
                kind=ZoneKind.TOWER,
                element=element,
            )
            for index, (pos, label) in enumerate(TOWER_LAYOUTS[count])
        ]
        return self.towers

    def clear_towers(self) -> None:
        self._towers = []

    def towers_containing(self, point: Point) -> List[Zone]:
        return [tower for tower in self._towers if tower.contains(point)]

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tolerance": self.tolerance,
            "center": list(self.center),
            "towers": [tower.to_dict() for tower in self._towers],
            "indicators_visible": self.indicators_visible,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ZoneRegistry:
        registry = cls(tolerance=data["tolerance"], center=tuple(data["center"]))
        registry._towers = [Zone.from_dict(t) for t in data.get("towers", [])]
        registry.indicators_visible = data.get("indicators_visible", False)
        return registry
