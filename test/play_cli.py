#!/usr/bin/env python3
"""
Interactive CLI for testing the Alley Cats engine.
Run: python test/play_cli.py [setup_id]
"""

import random
import sys

from alleycats.engine.errors import GameError
from alleycats.engine.game import Game
from alleycats.engine.utils import format_event, print_game_state, roll_die


def print_header(game, team, turn):
    print("=" * 60)
    print(f"  TURN {turn} | {team.upper()}")
    winner = game.get_winning_team()
    if winner:
        print(f"  *** GAME OVER - {winner.upper()} WINS ***")
    print("=" * 60)


def print_moves(moves):
    """Print the legal-move table for the current roll."""
    for i, m in enumerate(moves, 1):
        if m.can_move:
            capture = f"  (captures {m.captured_cat_id})" if m.captured_cat_id else ""
            print(f"  {i}. {m.cat_id}: {' -> '.join(m.path)}{capture}")
        else:
            print(f"  {i}. {m.cat_id}: cannot move ({m.reason})")


def prompt_choice(moves):
    """Ask for a cat by number; returns the cat id or None to skip."""
    legal = [m for m in moves if m.can_move]
    if not legal:
        input("No legal moves. Press Enter to pass...")
        return None
    while True:
        raw = input("Move which cat? [number, s=skip, q=quit] ").strip().lower()
        if raw == "q":
            sys.exit(0)
        if raw == "s":
            return None
        try:
            choice = moves[int(raw) - 1]
        except (ValueError, IndexError):
            print("Invalid choice")
            continue
        if not choice.can_move:
            print(f"{choice.cat_id} cannot move: {choice.reason}")
            continue
        return choice.cat_id


def main():
    setup_id = sys.argv[1] if len(sys.argv) > 1 else None
    game = Game.from_setup(setup_id)
    rng = random.Random()
    turn = 0

    while game.get_winning_team() is None:
        team = game.teams[turn % len(game.teams)]
        print_header(game, team, turn + 1)
        print_game_state(game.snapshot(), game.config)

        roll = roll_die(rng)
        print(f"{team} rolled {roll}")
        moves = game.get_possible_moves(team, roll)
        print_moves(moves)

        cat_id = prompt_choice(moves)
        if cat_id is not None:
            try:
                for event in game.move_cat(cat_id, roll):
                    print(f"  {format_event(event)}")
            except GameError as e:
                print(f"✗ {e}")
                continue
        turn += 1

    print_header(game, team, turn)
    print(f"History: {[(m.cat_id, m.num_steps) for m in game.get_history()]}")


if __name__ == "__main__":
    main()
