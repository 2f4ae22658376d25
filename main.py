"""
Main entry point for the Alley Cats race-game engine.
Plays a scripted game to a winner, then replays its history and checks the
replay lands on the same board.
"""

import random
import sys

from alleycats.engine.game import Game
from alleycats.engine.utils import format_event, print_game_state, roll_die

MAX_TURNS = 2000


def choose_move(moves):
    """Prefer a capture, then finishing a cat, then the first legal move; None if nothing can move."""
    legal = [m for m in moves if m.can_move]
    if not legal:
        return None
    for m in legal:
        if m.captured_cat_id is not None:
            return m
    for m in legal:
        if m.dest.is_end:
            return m
    return legal[0]


def main(setup_id: str | None = None, seed: int = 7):
    print("Alley Cats Race Game Engine")
    print("=" * 60)

    game = Game.from_setup(setup_id)
    rng = random.Random(seed)

    print("\n[INITIAL STATE]")
    print_game_state(game.snapshot(), game.config)

    turn = 0
    while game.get_winning_team() is None and turn < MAX_TURNS:
        team = game.teams[turn % len(game.teams)]
        roll = roll_die(rng)
        chosen = choose_move(game.get_possible_moves(team, roll))
        if chosen is None:
            print(f"[turn {turn + 1}] {team} rolled {roll}: no legal move")
        else:
            events = game.move_cat(chosen.cat_id, roll)
            print(f"[turn {turn + 1}] {team} rolled {roll}")
            for event in events:
                print(f"  {format_event(event)}")
        turn += 1

    print("\n[FINAL STATE]")
    print_game_state(game.snapshot(), game.config)

    winner = game.get_winning_team()
    if winner is None:
        print(f"✗ No winner after {MAX_TURNS} turns")
        return 1
    print(f"✓ {winner} wins after {len(game.get_history())} moves")

    replayed = Game.replay(game.config, game.get_history())
    original = [(c.id, c.location) for c in game.get_cats()]
    again = [(c.id, c.location) for c in replayed.get_cats()]
    if original != again:
        print("✗ Replay diverged from the original game")
        return 1
    print("✓ Replay reproduces the final board")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
