"""
Game events for UI hooks and logging.
Events describe what happened while a move was applied.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

CAT_MOVED = "cat_moved"
CAT_CAPTURED = "cat_captured"
CAT_FINISHED = "cat_finished"
VICTORY = "victory"


# ===== Event Factory Functions =====

def cat_moved(
    cat_id: str,
    team: str,
    from_location: str,
    to_location: str,
    path: list[str],
    num_steps: int,
) -> GameEvent:
    return GameEvent(CAT_MOVED, {
        "cat_id": cat_id,
        "team": team,
        "from": from_location,
        "to": to_location,
        "path": path,
        "num_steps": num_steps,
    })


def cat_captured(cat_id: str, team: str, captured_by: str, square: str) -> GameEvent:
    """Emitted when a cat is sent back to start by an opponent landing on its square."""
    return GameEvent(CAT_CAPTURED, {
        "cat_id": cat_id,
        "team": team,
        "captured_by": captured_by,
        "square": square,
    })


def cat_finished(cat_id: str, team: str, cats_home: int, cats_on_team: int) -> GameEvent:
    return GameEvent(CAT_FINISHED, {
        "cat_id": cat_id,
        "team": team,
        "cats_home": cats_home,
        "cats_on_team": cats_on_team,
    })


def victory(winner: str, moves_played: int) -> GameEvent:
    """
    Emitted once, by the move that brings the last cat of a team to end.

    Args:
        winner: The winning team
        moves_played: Length of the history including the winning move
    """
    return GameEvent(VICTORY, {
        "winner": winner,
        "moves_played": moves_played,
    })
