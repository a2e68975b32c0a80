"""
Arena - Spatial bounds of the encounter.

The Arena handles:
- Coordinate validation
- Clamping of incoming drag positions
- Named reference points (center, default start circle)

Coordinate System:
- X increases to the RIGHT
- Y increases DOWNWARD (screen convention)
- Origin (0, 0) is at TOP-LEFT
- Coordinates are player token top-left corners, so a 600px arena with 50px
  tokens yields a [0, 550] range per axis
"""

from __future__ import annotations
import math

from ..core.types import Point


class Arena:
    """
    A square arena with screen coordinates.

    Provides spatial queries without game logic and or state.

    Attributes:
        size: Largest valid coordinate on each axis
    """

    def __init__(self, size: float = 550.0):
        """
        Initialize an arena.

        Args:
            size: Largest valid coordinate (must be positive)

        Raises:
            ValueError: If size is invalid
        """
        if size <= 0:
            raise ValueError(f"Arena size must be positive: {size}")

        self.size = float(size)

    @property
    def center(self) -> Point:
        half = self.size / 2
        return (half, half)

    def in_bounds(self, pos: Point) -> bool:
        """
        Check if a position is within the arena.

        Args:
            pos: Position to check (x, y)

        Returns:
            True if position is valid, False otherwise
        """
        x, y = pos
        return 0 <= x <= self.size and 0 <= y <= self.size

    def clamp(self, pos: Point) -> Point:
        """Clamp a position into the arena bounds."""
        x, y = pos
        return (
            max(0.0, min(float(x), self.size)),
            max(0.0, min(float(y), self.size)),
        )

    def circle_position(self, index: int, count: int = 8, radius: float = 200.0) -> Point:
        """
        Get the default start position of a player.

        Players start evenly spaced on a circle around the arena center.

        Args:
            index: Roster index of the player
            count: Number of players on the circle
            radius: Circle radius

        Returns:
            Start position (x, y)
        """
        cx, cy = self.center
        angle = (index / count) * math.pi * 2
        return (cx + math.cos(angle) * radius, cy + math.sin(angle) * radius)

    def __str__(self) -> str:
        """String representation."""
        return f"Arena({self.size:g}x{self.size:g})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Arena(size={self.size})"
