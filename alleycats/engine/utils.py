"""
Utility functions for the game engine.
"""

import random

from alleycats.config import DICE_SIDES
from alleycats.engine.definitions import GameConfig
from alleycats.engine.events import GameEvent, CAT_MOVED, CAT_CAPTURED, CAT_FINISHED, VICTORY
from alleycats.engine.state import GameState


def roll_die(rng: random.Random | None = None, sides: int = DICE_SIDES) -> int:
    """One die roll. Pass a seeded Random for reproducible games."""
    return (rng or random).randint(1, sides)


def print_game_state(state: GameState, config: GameConfig, verbose: bool = False):
    """
    Pretty-print the current game state.

    Args:
        state: Current game state
        config: Game configuration (team order and trails)
        verbose: If True, also list every square of each trail with its occupants
    """
    print(f"\n{'='*60}")
    print(f"Moves played: {len(state.history)}")
    print(f"{'='*60}")

    for team in config.teams:
        trail = config.trail_for(team)
        print(f"\n{team} (trail: {len(trail)} squares)")
        for cat in state.cats_on_team(team):
            loc = cat.location
            if loc.is_square:
                safe = " [SAFE]" if config.is_safe(loc.square) else ""
                print(f"  - {cat.id}: {loc} ({trail.index(loc.square) + 1}/{len(trail)}){safe}")
            else:
                print(f"  - {cat.id}: {loc}")
        if verbose:
            for square in trail:
                occupants = ", ".join(c.id for c in state.cats_at(square)) or "-"
                print(f"      {square:<8} {occupants}")
    print()


def format_event(event: GameEvent) -> str:
    """One-line description of an event for logs and the demo."""
    p = event.payload
    if event.type == CAT_MOVED:
        return f"{p['cat_id']} moved {p['num_steps']}: {' -> '.join(p['path'])}"
    if event.type == CAT_CAPTURED:
        return f"{p['captured_by']} captured {p['cat_id']} at {p['square']}"
    if event.type == CAT_FINISHED:
        return f"{p['cat_id']} reached the end ({p['cats_home']}/{p['cats_on_team']} home)"
    if event.type == VICTORY:
        return f"*** {p['winner'].upper()} WINS after {p['moves_played']} moves ***"
    return f"{event.type}: {p}"
