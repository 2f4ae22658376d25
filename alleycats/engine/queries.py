"""
Query functions for UI integration.
These functions help the UI understand which moves are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from alleycats.engine.actions import Move
from alleycats.engine.definitions import GameConfig
from alleycats.engine.errors import GameError
from alleycats.engine.movement import PossibleMove, get_possible_move, validate_num_steps
from alleycats.engine.state import GameState


@dataclass
class ValidationResult:
    """Result of move validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


def get_possible_moves(
    state: GameState,
    config: GameConfig,
    team: str,
    num_steps: int,
) -> list[PossibleMove]:
    """One result per cat on the team, in roster order."""
    config.trail_for(team)
    validate_num_steps(num_steps)
    return [
        get_possible_move(state, config, cat.id, num_steps)
        for cat in state.cats_on_team(team)
    ]


def get_movable_cats(
    state: GameState,
    config: GameConfig,
    team: str,
    num_steps: int,
) -> list[str]:
    """Ids of the team's cats that can legally use this roll."""
    return [
        pm.cat_id for pm in get_possible_moves(state, config, team, num_steps)
        if pm.can_move
    ]


def get_winning_team(state: GameState, config: GameConfig) -> str | None:
    """First team (configuration order) whose cats are all at end, or None."""
    for team in config.teams:
        if all(cat.location.is_end for cat in state.cats_on_team(team)):
            return team
    return None


def validate_move(state: GameState, config: GameConfig, move: Move) -> ValidationResult:
    """
    Validate a move without applying it.
    Returns ValidationResult with valid=True or valid=False with error message.
    """
    try:
        possible = get_possible_move(state, config, move.cat_id, move.num_steps)
    except GameError as e:
        return ValidationResult(False, str(e))
    if not possible.can_move:
        return ValidationResult(False, f"Cat {move.cat_id} cannot move {move.num_steps}: {possible.reason}")
    return ValidationResult(True)


def get_team_progress(state: GameState, config: GameConfig, team: str) -> dict[str, int]:
    """Counts of the team's cats at start, on the trail, and at end."""
    cats = state.cats_on_team(team)
    at_start = sum(1 for c in cats if c.location.is_start)
    at_end = sum(1 for c in cats if c.location.is_end)
    return {
        "start": at_start,
        "trail": len(cats) - at_start - at_end,
        "end": at_end,
        "trail_length": len(config.trail_for(team)),
    }


def get_game_summary(state: GameState, config: GameConfig) -> dict[str, Any]:
    """Snapshot for a status line: per-team progress, winner, and moves played."""
    return {
        "teams": {team: get_team_progress(state, config, team) for team in config.teams},
        "winner": get_winning_team(state, config),
        "moves_played": len(state.history),
    }
