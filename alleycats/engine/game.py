"""
Stateful game object: the narrow interface the rendering/input layer talks to.

to use:

1) construct with a GameConfig (or Game.from_setup("classic"))
2) get_cats() for all cats and their locations
3) get_possible_moves(team, roll) for the active team
4) move_cat(cat_id, roll) for one of the results with can_move=True
5) get_winning_team() after every move

To replay, pass get_history() and the same config to Game.replay().
"""

import threading
from typing import Any

from alleycats.engine.actions import Move, move_cat
from alleycats.engine.definitions import GameConfig, load_config
from alleycats.engine.errors import ConfigError
from alleycats.engine.events import GameEvent
from alleycats.engine.movement import PossibleMove, get_possible_move
from alleycats.engine.queries import get_possible_moves, get_winning_team, get_game_summary
from alleycats.engine.reducer import apply_move
from alleycats.engine.state import GameState, Cat


class Game:
    """One game instance. All public methods are serialized on a single lock."""

    def __init__(self, config: GameConfig, state: GameState | None = None):
        self.config = config
        if state is None:
            state = GameState.initial(config)
        else:
            _check_state_matches_config(state, config)
            state = state.copy()  # moves mutate self._state in place
        self._state = state
        self._lock = threading.Lock()

    @classmethod
    def from_setup(cls, setup_id: str | None = None) -> "Game":
        return cls(load_config(setup_id))

    @classmethod
    def replay(cls, config: GameConfig, history: list[Move]) -> "Game":
        """Fresh game with every recorded move applied in order."""
        game = cls(config)
        for move in history:
            game.move_cat(move.cat_id, move.num_steps)
        return game

    @property
    def teams(self) -> list[str]:
        return self.config.teams

    def get_cats(self) -> list[Cat]:
        """Copies of the roster; editing them does not affect the game."""
        with self._lock:
            return [Cat(c.id, c.team, c.location) for c in self._state.cats]

    def get_possible_move(self, cat_id: str, num_steps: int) -> PossibleMove:
        with self._lock:
            return get_possible_move(self._state, self.config, cat_id, num_steps)

    def get_possible_moves(self, team: str, num_steps: int) -> list[PossibleMove]:
        with self._lock:
            return get_possible_moves(self._state, self.config, team, num_steps)

    def move_cat(self, cat_id: str, num_steps: int) -> list[GameEvent]:
        """Apply a move. Raises IllegalMoveError (state untouched) if the move is not allowed."""
        with self._lock:
            # Validated before the first write, so mutating in place cannot leave a half move
            _, events = apply_move(self._state, self.config, move_cat(cat_id, num_steps), in_place=True)
            return events

    def get_winning_team(self) -> str | None:
        with self._lock:
            return get_winning_team(self._state, self.config)

    def get_history(self) -> list[Move]:
        with self._lock:
            return list(self._state.history)

    def get_summary(self) -> dict[str, Any]:
        with self._lock:
            return get_game_summary(self._state, self.config)

    def snapshot(self) -> GameState:
        """Independent copy of the current state."""
        with self._lock:
            return self._state.copy()

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            out = self._state.to_dict()
            out["config"] = self.config.to_dict()
            out["winner"] = get_winning_team(self._state, self.config)
            return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Game":
        config = GameConfig.from_dict(data.get("config") or {})
        return cls(config, GameState.from_dict(data))


def _check_state_matches_config(state: GameState, config: GameConfig) -> None:
    """A loaded state must have this config's roster, each cat on its own trail."""
    expected = [(c.id, c.team) for c in GameState.initial(config).cats]
    actual = [(c.id, c.team) for c in state.cats]
    if actual != expected:
        raise ConfigError("Saved cats do not match the configured teams and cat count")
    for cat in state.cats:
        if cat.location.is_square and cat.location.square not in config.trail_for(cat.team):
            raise ConfigError(f"Cat {cat.id} is at {cat.location}, which is not on the {cat.team} trail")
