from typing import Any, Dict, List

from engine.core.types import ConceptionKind
from engine.snapshot import Snapshot


def extract_events(
    *,
    prev_snapshot: Snapshot,
    snapshot: Snapshot,
) -> List[Dict[str, Any]]:
    """
    Extract session feedback events between two consecutive snapshots.
    """
    events: List[Dict[str, Any]] = []

    prev_players = {p["id"]: p for p in prev_snapshot.players}

    # ---------------------------------------------------------
    # 1. FUSIONS (one event per new pair)
    # ---------------------------------------------------------
    if snapshot.phase == prev_snapshot.phase:
        for player in snapshot.players:
            partner_id = player["fusion_partner"]
            if partner_id is None or player["id"] > partner_id:
                continue
            before = prev_players.get(player["id"])
            if before is not None and before["fused"]:
                continue

            kind = ConceptionKind(player["buff"]["kind"])
            event = {
                "type": "FUSION",
                "phase": snapshot.phase,
                "entity_ids": [player["id"], partner_id],
                "conception": kind.value,
                "severity": "LOW",
            }

            # Escalate same-kind pairs: they can never soak a tower
            if kind.is_failure:
                event["type"] = "FAILED_FUSION"
                event["severity"] = "HIGH"
                event["irreversible"] = True

            events.append(event)

    # ---------------------------------------------------------
    # 2. PROGRESS
    # ---------------------------------------------------------
    if snapshot.phase == prev_snapshot.phase and snapshot.sub_phase > prev_snapshot.sub_phase:
        events.append({
            "type": "SUB_PHASE_ADVANCED",
            "phase": snapshot.phase,
            "sub_phase": snapshot.sub_phase,
            "sub_phase_name": snapshot.sub_phase_name,
            "severity": "LOW",
        })

    if snapshot.solved and not prev_snapshot.solved:
        events.append({
            "type": "PHASE_SOLVED",
            "phase": snapshot.phase,
            "phase_name": snapshot.phase_name,
            "severity": "MEDIUM",
        })

    if snapshot.phase > prev_snapshot.phase:
        events.append({
            "type": "PHASE_ADVANCED",
            "phase": snapshot.phase,
            "phase_name": snapshot.phase_name,
            "required_conception": snapshot.required_conception,
            "severity": "MEDIUM",
        })

    return events
