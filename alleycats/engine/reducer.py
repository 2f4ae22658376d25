"""
Main game reducer.
Applies moves to state, enforcing rules and producing new state.
Returns (new_state, events) where events describe what happened.
"""

import logging

from alleycats.engine.actions import Move
from alleycats.engine.definitions import GameConfig
from alleycats.engine.errors import IllegalMoveError
from alleycats.engine.events import (
    GameEvent,
    cat_moved,
    cat_captured,
    cat_finished,
    victory,
)
from alleycats.engine.movement import get_possible_move
from alleycats.engine.state import GameState, START_LOCATION

logger = logging.getLogger("alleycats.reducer")


def apply_move(
    state: GameState,
    config: GameConfig,
    move: Move,
    in_place: bool = False,
) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single move to the current state, returning new state and events.
    Legality is checked before the first write, so an illegal move raises with
    the input state untouched.

    Args:
        state: Current game state
        config: Trails and safe squares for this game
        move: Cat and step count to apply
        in_place: Mutate and return state itself instead of a copy

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    possible = get_possible_move(state, config, move.cat_id, move.num_steps)
    if not possible.can_move:
        raise IllegalMoveError(move.cat_id, move.num_steps, possible.reason or "not allowed")

    if not in_place:
        state = state.copy()
    events: list[GameEvent] = []
    cat = state.get_cat(move.cat_id)
    from_location = cat.location.to_str()

    state.set_location(cat.id, possible.dest)
    events.append(cat_moved(
        cat.id,
        cat.team,
        from_location,
        possible.dest.to_str(),
        list(possible.path),
        move.num_steps,
    ))
    logger.debug("%s moved %s -> %s (%d)", cat.id, from_location, possible.dest, move.num_steps)

    if possible.captured_cat_id is not None:
        captured = state.get_cat(possible.captured_cat_id)
        state.set_location(captured.id, START_LOCATION)
        events.append(cat_captured(captured.id, captured.team, cat.id, possible.dest.to_str()))
        logger.debug("%s captured %s at %s", cat.id, captured.id, possible.dest)

    state.history.append(move)

    if possible.dest.is_end:
        team_cats = state.cats_on_team(cat.team)
        home = sum(1 for c in team_cats if c.location.is_end)
        events.append(cat_finished(cat.id, cat.team, home, len(team_cats)))

        # The mover was not at end before this move, so its team just completed
        if home == len(team_cats):
            events.append(victory(cat.team, len(state.history)))
            logger.info("%s wins after %d moves", cat.team, len(state.history))

    return state, events


def replay_from_history(
    config: GameConfig,
    history: list[Move],
) -> tuple[GameState, list[GameEvent]]:
    """
    Replay a series of moves from a fresh game.
    Event sourcing: state is derived from the move log.

    Args:
        config: Configuration identical to the recorded game's
        history: Moves to apply in sequence

    Returns:
        Tuple of (final_state, all_events) after all moves applied
    """
    current_state = GameState.initial(config)
    all_events: list[GameEvent] = []

    for move in history:
        current_state, events = apply_move(current_state, config, move, in_place=True)
        all_events.extend(events)

    return current_state, all_events
