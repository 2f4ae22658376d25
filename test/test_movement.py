"""
Legal-move computation: paths, destinations, blocking, and captures.
"""

import pytest

from alleycats.engine import START, END
from alleycats.engine.definitions import GameConfig, load_config
from alleycats.engine.errors import CatNotFoundError, InvalidRollError, TeamNotFoundError
from alleycats.engine.game import Game
from alleycats.engine.movement import build_path, get_possible_move
from alleycats.engine.queries import get_possible_moves, get_movable_cats
from alleycats.engine.state import GameState, Location, END_LOCATION

DUEL_TRAILS = {
    "a": ["a0", "a1", "a2", "c0"],
    "b": ["b0", "b1", "c0"],
}


def duel(cats_per_team=1, safe=()):
    return GameConfig(cats_per_team=cats_per_team, trails=DUEL_TRAILS, safe_squares=frozenset(safe))


def place(state, cat_id, location):
    """Put a cat somewhere directly, bypassing the rules."""
    if location in (START, END):
        state.set_location(cat_id, Location.from_str(location))
    else:
        state.set_location(cat_id, Location.at(location))


class TestPaths:

    def test_path_from_start(self):
        assert build_path(("a0", "a1", "a2", "c0"), -1, 2) == [START, "a0", "a1", "a2"]

    def test_path_stops_at_first_index_past_trail(self):
        assert build_path(("b0", "b1", "c0"), 1, 6) == ["b1", "c0", END]

    def test_path_exactly_to_end(self):
        assert build_path(("b0", "b1", "c0"), 2, 3) == ["c0", END]


class TestDuelScenario:

    def test_roll_three_from_start(self):
        game = Game(duel())
        move = game.get_possible_move("a0", 3)
        assert move.path == [START, "a0", "a1", "a2"]
        assert move.dest == Location.at("a2")
        assert move.can_move is True
        assert move.captured_cat_id is None

    def test_roll_one_from_last_square_reaches_end(self):
        game = Game(duel())
        game.move_cat("b0", 3)
        assert game.get_cats()[1].location == Location.at("c0")

        move = game.get_possible_move("b0", 1)
        assert move.dest == END_LOCATION
        assert move.can_move is True
        assert move.path == ["c0", END]
        assert move.captured_cat_id is None

    def test_capture_on_shared_square(self):
        game = Game(duel())
        game.move_cat("a0", 4)  # a0 lands on c0

        move = game.get_possible_move("b0", 3)
        assert move.can_move is True
        assert move.dest == Location.at("c0")
        assert move.captured_cat_id == "a0"

        game.move_cat("b0", 3)
        locations = {c.id: c.location for c in game.get_cats()}
        assert locations["a0"].is_start
        assert locations["b0"] == Location.at("c0")

    def test_shared_safe_square_has_no_capture(self):
        game = Game(duel(safe={"c0"}))
        game.move_cat("a0", 4)

        move = game.get_possible_move("b0", 3)
        assert move.can_move is True
        assert move.captured_cat_id is None

        game.move_cat("b0", 3)
        locations = {c.id: c.location for c in game.get_cats()}
        assert locations["a0"] == Location.at("c0")
        assert locations["b0"] == Location.at("c0")

    def test_query_does_not_mutate(self):
        game = Game(duel())
        game.move_cat("a0", 4)
        before = game.to_dict()
        for roll in range(1, 7):
            game.get_possible_move("b0", roll)
            game.get_possible_moves("a", roll)
        assert game.to_dict() == before


class TestRules:

    def test_cat_at_end_never_moves(self):
        config = duel()
        state = GameState.initial(config)
        place(state, "a0", END)
        for roll in range(1, 13):
            move = get_possible_move(state, config, "a0", roll)
            assert move.can_move is False
            assert move.dest is None
            assert move.path == []

    def test_rolling_past_trail_always_ends(self):
        config = load_config("classic")
        for team in config.teams:
            trail = config.trail_for(team)
            length = len(trail)
            for current in range(-1, length):
                state = GameState.initial(config)
                cat_id = f"{team}0"
                if current >= 0:
                    place(state, cat_id, trail[current])
                for roll in range(length - current, length + 3):
                    move = get_possible_move(state, config, cat_id, roll)
                    assert move.dest == END_LOCATION
                    assert move.can_move is True
                    assert move.captured_cat_id is None
                    assert move.path[-1] == END

    def test_cannot_land_on_teammate(self):
        config = duel(cats_per_team=2)
        state = GameState.initial(config)
        place(state, "a0", "a1")
        move = get_possible_move(state, config, "a1", 2)
        assert move.can_move is False
        assert move.dest == Location.at("a1")
        assert move.captured_cat_id is None
        assert "a0" in move.reason

    def test_cannot_land_on_teammate_even_on_shared_square(self):
        config = duel(cats_per_team=2)
        state = GameState.initial(config)
        place(state, "b0", "c0")
        assert get_possible_move(state, config, "b1", 3).can_move is False

    def test_teammates_share_safe_square(self):
        config = duel(cats_per_team=2, safe={"a1"})
        state = GameState.initial(config)
        place(state, "a0", "a1")
        move = get_possible_move(state, config, "a1", 2)
        assert move.can_move is True
        assert move.captured_cat_id is None

    def test_no_capture_on_any_safe_square(self):
        config = load_config("classic")
        for square in sorted(config.safe_squares):
            for mover_team in config.teams:
                for other_team in config.teams:
                    if other_team == mover_team:
                        continue
                    state = GameState.initial(config)
                    place(state, f"{other_team}0", square)
                    trail = config.trail_for(mover_team)
                    roll = trail.index(square) + 1
                    move = get_possible_move(state, config, f"{mover_team}0", roll)
                    assert move.can_move is True
                    assert move.captured_cat_id is None

    def test_capture_on_unsafe_shared_square(self):
        config = load_config("classic")
        state = GameState.initial(config)
        place(state, "grey0", "s4")
        roll = config.trail_for("orange").index("s4") + 1
        move = get_possible_move(state, config, "orange0", roll)
        assert move.can_move is True
        assert move.captured_cat_id == "grey0"


class TestTeamQueries:

    def test_one_result_per_cat_in_roster_order(self):
        config = duel(cats_per_team=3)
        state = GameState.initial(config)
        moves = get_possible_moves(state, config, "b", 2)
        assert [m.cat_id for m in moves] == ["b0", "b1", "b2"]
        assert all(m.can_move for m in moves)

    def test_movable_cats_skips_blocked(self):
        config = duel(cats_per_team=2)
        state = GameState.initial(config)
        place(state, "a0", "a1")
        assert get_movable_cats(state, config, "a", 2) == ["a0"]

    def test_unknown_team(self):
        config = duel()
        with pytest.raises(TeamNotFoundError):
            get_possible_moves(GameState.initial(config), config, "z", 2)

    def test_unknown_cat(self):
        game = Game(duel())
        with pytest.raises(CatNotFoundError):
            game.get_possible_move("nobody", 2)

    @pytest.mark.parametrize("roll", [0, -1, 2.5, "3", True])
    def test_bad_rolls(self, roll):
        game = Game(duel())
        with pytest.raises(InvalidRollError):
            game.get_possible_move("a0", roll)
