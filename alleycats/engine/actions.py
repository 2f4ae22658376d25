"""
Action definitions for the game.
A move is the only action: an immutable, deterministic instruction that is
also the history record used for replay.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Move:
    """Advance one cat by a rolled number of steps."""
    cat_id: str
    num_steps: int

    def to_dict(self) -> dict[str, Any]:
        return {"cat_id": self.cat_id, "num_steps": self.num_steps}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Move":
        return cls(cat_id=str(data["cat_id"]), num_steps=int(data["num_steps"]))


def move_cat(cat_id: str, num_steps: int) -> Move:
    """
    Move a cat forward along its team's trail.
    Example: move_cat("orange0", 4)
    """
    return Move(cat_id=cat_id, num_steps=num_steps)
