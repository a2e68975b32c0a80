from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from engine.snapshot import Snapshot


@dataclass
class Frame:
    """
    One recorded runner operation, ready for a UI.

    Attributes:
        index: Position in the session history
        operation: "reset", "move", "check", "advance" or "auto_solve"
        snapshot: Session view after the operation
        result: Operation result dict (check or advance), if any
        events: Feedback events derived from the previous frame
    """
    index: int
    operation: str
    snapshot: Snapshot
    result: Optional[Dict[str, Any]] = None
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "operation": self.operation,
            "snapshot": self.snapshot.to_dict(),
            "result": self.result,
            "events": list(self.events),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Frame:
        return cls(
            index=data["index"],
            operation=data["operation"],
            snapshot=Snapshot.from_dict(data["snapshot"]),
            result=data.get("result"),
            events=list(data.get("events", [])),
        )
