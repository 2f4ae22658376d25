"""
Engine error hierarchy.

Every error raised by the engine derives from GameError, which is a ValueError
so callers that only know "rule violation" can keep catching ValueError.
Lookups that miss (unknown cat, unknown team) are NotFoundError, which is
also a KeyError.
"""


class GameError(ValueError):
    """Base class for all engine errors."""


class ConfigError(GameError):
    """The game configuration is unusable (empty trail, reserved id, bad cat count)."""


class IllegalMoveError(GameError):
    """A move was applied that the legal-move query reports as not allowed."""

    def __init__(self, cat_id: str, num_steps: int, reason: str):
        self.cat_id = cat_id
        self.num_steps = num_steps
        self.reason = reason
        super().__init__(f"Cat {cat_id} cannot move {num_steps}: {reason}")


class InvalidRollError(GameError):
    """Step count is not a positive integer."""


class NotFoundError(GameError, KeyError):
    """A cat or team id does not exist in this game."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class CatNotFoundError(NotFoundError):
    def __init__(self, cat_id: str):
        self.cat_id = cat_id
        super().__init__(f"Unknown cat: {cat_id}")


class TeamNotFoundError(NotFoundError):
    def __init__(self, team: str):
        self.team = team
        super().__init__(f"Unknown team: {team}")
