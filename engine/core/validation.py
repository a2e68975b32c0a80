"""
Structured validation results.

Rule checks collect their findings into a ValidationReport while they run;
the report is then frozen into a CheckResult that the facade hands back to
callers. Both the validator and the state machine work on these values, so
a failed check never needs an exception.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .types import Classification

if TYPE_CHECKING:
    from ..mechanics.fusion import FusionResult


@dataclass
class CheckResult:
    """
    Outcome of one check_solution() call.

    Attributes:
        passed: True when no violation was found
        violations: Human-readable violations, in the order they were found
        classifications: Entity id -> verdict for every player
        messages: Informational lines (fusion feedback, progress notes)
        transition: What the state machine did with a pass
            ("SUB_PHASE_ADVANCED", "PHASE_SOLVED") or None
        fusion: The fusion committed during this check, if any
        pending: Passed, but staged fusions still have to be committed by
            further checks before the sub-phase can advance
        precondition_failed: True when the check could not run at all

    Transition codes:
        - "SUB_PHASE_ADVANCED": a non-terminal sub-phase passed
        - "PHASE_SOLVED": the terminal sub-phase passed; advance_phase() is allowed
    """
    passed: bool
    violations: List[str] = field(default_factory=list)
    classifications: Dict[int, Classification] = field(default_factory=dict)
    messages: List[str] = field(default_factory=list)
    transition: Optional[str] = None
    fusion: Optional[FusionResult] = None
    pending: bool = False
    precondition_failed: bool = False

    @staticmethod
    def precondition(message: str) -> CheckResult:
        """Create a rejection for a check that cannot run in the current state."""
        return CheckResult(passed=False, violations=[message], precondition_failed=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the result to a plain dict."""
        return {
            "passed": self.passed,
            "violations": list(self.violations),
            "classifications": {
                str(entity_id): verdict.value
                for entity_id, verdict in self.classifications.items()
            },
            "messages": list(self.messages),
            "transition": self.transition,
            "fusion": self.fusion.to_dict() if self.fusion else None,
            "pending": self.pending,
            "precondition_failed": self.precondition_failed,
        }


class ValidationReport:
    """
    Mutable collector used while a rule set runs.

    Every player starts NEUTRAL. Marking a player INCORRECT is sticky: a later
    CORRECT mark from another rule does not hide an earlier failure.
    """

    def __init__(self, entity_ids: List[int]):
        self._violations: List[str] = []
        self._messages: List[str] = []
        self.pending = False
        self._classifications: Dict[int, Classification] = {
            entity_id: Classification.NEUTRAL for entity_id in entity_ids
        }

    @property
    def ok(self) -> bool:
        return not self._violations

    def violation(self, message: str, *entity_ids: int) -> None:
        """Record a violation and mark the named players incorrect."""
        self._violations.append(message)
        for entity_id in entity_ids:
            self.mark_incorrect(entity_id)

    def note(self, message: str) -> None:
        self._messages.append(message)

    def mark_correct(self, entity_id: int) -> None:
        if self._classifications.get(entity_id) != Classification.INCORRECT:
            self._classifications[entity_id] = Classification.CORRECT

    def mark_incorrect(self, entity_id: int) -> None:
        self._classifications[entity_id] = Classification.INCORRECT

    def to_result(self) -> CheckResult:
        return CheckResult(
            passed=self.ok,
            violations=list(self._violations),
            classifications=dict(self._classifications),
            messages=list(self._messages),
            pending=self.pending and self.ok,
        )
