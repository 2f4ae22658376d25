"""
Movement calculations: trail positions, traversed paths, and the legal-move
check for a single cat. Nothing in here mutates state.
"""

from dataclasses import dataclass, field
from typing import Any

from alleycats.engine import START, END
from alleycats.engine.definitions import GameConfig
from alleycats.engine.errors import GameError, InvalidRollError
from alleycats.engine.state import GameState, Cat, Location, END_LOCATION


@dataclass(frozen=True)
class PossibleMove:
    """Result of probing a (cat, roll) pair."""
    cat_id: str
    dest: Location | None  # None when the cat cannot move at all (already at end)
    can_move: bool
    path: list[str] = field(default_factory=list)  # start..dest inclusive, wire form
    captured_cat_id: str | None = None
    reason: str | None = None  # why can_move is False

    def to_dict(self) -> dict[str, Any]:
        return {
            "cat_id": self.cat_id,
            "dest": self.dest.to_str() if self.dest is not None else None,
            "can_move": self.can_move,
            "path": list(self.path),
            "captured_cat_id": self.captured_cat_id,
            "reason": self.reason,
        }


def validate_num_steps(num_steps: int) -> None:
    """Rolls are positive integers."""
    if isinstance(num_steps, bool) or not isinstance(num_steps, int):
        raise InvalidRollError(f"Step count must be an integer, got {num_steps!r}")
    if num_steps < 1:
        raise InvalidRollError(f"Step count must be positive, got {num_steps}")


def trail_index(cat: Cat, trail: tuple[str, ...]) -> int:
    """Position on the trail; -1 at start."""
    if cat.location.is_start:
        return -1
    try:
        return trail.index(cat.location.square)
    except ValueError:
        raise GameError(f"Cat {cat.id} is at {cat.location}, which is not on the {cat.team} trail") from None


def build_path(trail: tuple[str, ...], start_index: int, end_index: int) -> list[str]:
    """
    Squares walked from start_index to end_index inclusive.
    -1 is START; the first index past the trail is END and stops the walk.
    """
    path = []
    for i in range(start_index, end_index + 1):
        if i == -1:
            path.append(START)
        elif i < len(trail):
            path.append(trail[i])
        else:
            path.append(END)
            break
    return path


def get_possible_move(
    state: GameState,
    config: GameConfig,
    cat_id: str,
    num_steps: int,
) -> PossibleMove:
    """
    Work out where a cat would land for a roll and whether it may go there.

    Rules:
    - A cat at end never moves.
    - Reaching or passing the end of the trail always succeeds and captures nothing.
    - Landing on a safe square always succeeds; everyone shares it.
    - Landing on a teammate is not allowed.
    - Landing on an opponent on an unsafe square captures it.
    """
    validate_num_steps(num_steps)
    cat = state.get_cat(cat_id)

    if cat.location.is_end:
        return PossibleMove(
            cat_id=cat_id, dest=None, can_move=False, path=[], reason="already at end",
        )

    trail = config.trail_for(cat.team)
    start_index = trail_index(cat, trail)
    end_index = start_index + num_steps
    path = build_path(trail, start_index, end_index)

    if end_index >= len(trail):
        return PossibleMove(cat_id=cat_id, dest=END_LOCATION, can_move=True, path=path)

    dest_square = trail[end_index]
    dest = Location.at(dest_square)
    occupants = state.cats_at(dest_square)

    if not occupants or config.is_safe(dest_square):
        return PossibleMove(cat_id=cat_id, dest=dest, can_move=True, path=path)

    # Unsafe squares hold a single cat
    occupant = occupants[0]
    if occupant.team == cat.team:
        return PossibleMove(
            cat_id=cat_id,
            dest=dest,
            can_move=False,
            path=path,
            reason=f"{dest_square} is occupied by teammate {occupant.id}",
        )

    return PossibleMove(
        cat_id=cat_id,
        dest=dest,
        can_move=True,
        path=path,
        captured_cat_id=occupant.id,
    )
