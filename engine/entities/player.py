"""
Player entity - one of the eight participants of the mechanic.

Players:
- Carry exactly one immutable debuff tag, assigned at reset
- Move only when the external drag collaborator reports a new position
- Hold at most one buff (Perfection or Conception)
- Point at their fusion partner by id once fused (relation, not ownership)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.types import (
    Buff,
    Conception,
    ConceptionKind,
    DebuffTag,
    Perfection,
    PerfectionKind,
    Point,
    Role,
    buff_from_dict,
    buff_to_dict,
)


@dataclass
class Player:
    """
    A single participant.

    Attributes:
        id: Stable small integer, unique within the roster
        role: Party slot (display only)
        tag: Initial debuff tag (immutable after reset)
        position: Current (x, y) position
        buff: None, Perfection(kind) or Conception(kind)
        fusion_partner: Id of the fusion partner, symmetric
    """

    id: int
    role: Role
    tag: DebuffTag
    position: Point
    buff: Optional[Buff] = None
    fusion_partner: Optional[int] = None

    @property
    def name(self) -> str:
        return self.role.value

    @property
    def fused(self) -> bool:
        """True exactly when the player holds a Conception and has a partner."""
        return isinstance(self.buff, Conception) and self.fusion_partner is not None

    @property
    def perfection_kind(self) -> Optional[PerfectionKind]:
        return self.buff.kind if isinstance(self.buff, Perfection) else None

    @property
    def conception_kind(self) -> Optional[ConceptionKind]:
        return self.buff.kind if isinstance(self.buff, Conception) else None

    @property
    def has_perfection(self) -> bool:
        return isinstance(self.buff, Perfection)

    @property
    def has_conception(self) -> bool:
        return isinstance(self.buff, Conception)

    def clear_buff(self) -> None:
        self.buff = None
        self.fusion_partner = None

    def label(self) -> str:
        """Name plus tag, e.g. 'MT (Alpha 8s)'."""
        return f"{self.name} ({self.tag.label})"

    def buff_label(self) -> str:
        """Name plus current buff, e.g. 'H1 (Fire Perfection)'."""
        if self.buff is None:
            return self.label()
        return f"{self.name} ({self.buff.describe()})"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to a JSON-friendly dict."""
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "category": self.role.category,
            "tag": self.tag.value,
            "position": [self.position[0], self.position[1]],
            "buff": buff_to_dict(self.buff),
            "fused": self.fused,
            "fusion_partner": self.fusion_partner,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        """Construct a player from to_dict() output."""
        return cls(
            id=data["id"],
            role=Role(data["role"]),
            tag=DebuffTag(data["tag"]),
            position=tuple(data["position"]),
            buff=buff_from_dict(data.get("buff")),
            fusion_partner=data.get("fusion_partner"),
        )
