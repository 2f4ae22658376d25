"""
Game state representation.
Cats, their locations, and the move history. The state keeps id, team and square
occupancy indexes in step with every location change.
Includes JSON serialization for save/load functionality.
"""

from dataclasses import dataclass, field
from typing import Any

from alleycats.engine import START, END
from alleycats.engine.actions import Move
from alleycats.engine.definitions import GameConfig
from alleycats.engine.errors import CatNotFoundError, TeamNotFoundError


@dataclass(frozen=True)
class Location:
    """Where a cat is: at start, at end, or on a trail square."""
    kind: str  # "start", "end" or "square"
    square: str | None = None

    def __post_init__(self):
        if self.kind not in (START, END, "square"):
            raise ValueError(f"Unknown location kind: {self.kind!r}")
        if self.kind == "square":
            if not isinstance(self.square, str) or not self.square or self.square in (START, END):
                raise ValueError(f"Invalid square id: {self.square!r}")
        elif self.square is not None:
            raise ValueError(f"{self.kind} location cannot name a square")

    @classmethod
    def at(cls, square: str) -> "Location":
        return cls("square", square)

    @property
    def is_start(self) -> bool:
        return self.kind == START

    @property
    def is_end(self) -> bool:
        return self.kind == END

    @property
    def is_square(self) -> bool:
        return self.kind == "square"

    def to_str(self) -> str:
        """Wire form: "start", "end" or the square id."""
        return self.square if self.is_square else self.kind

    @classmethod
    def from_str(cls, value: str) -> "Location":
        if value == START:
            return START_LOCATION
        if value == END:
            return END_LOCATION
        return cls.at(value)

    def __str__(self) -> str:
        return self.to_str()


START_LOCATION = Location(START)
END_LOCATION = Location(END)


@dataclass
class Cat:
    """A single token. Never destroyed; captured cats go back to start."""
    id: str  # e.g. "orange0"
    team: str
    location: Location = START_LOCATION

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "team": self.team, "loc": self.location.to_str()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Cat":
        return cls(
            id=str(data.get("id") or ""),
            team=str(data.get("team") or ""),
            location=Location.from_str(str(data.get("loc") or START)),
        )


@dataclass
class GameState:
    """Complete game state: the cat roster and the move history."""
    cats: list[Cat]  # roster order
    history: list[Move] = field(default_factory=list)  # append-only
    # cat_id -> Cat (same objects as in cats)
    _cats_by_id: dict[str, Cat] = field(default_factory=dict, init=False, repr=False, compare=False)
    # square id -> [cat_id, ...] in arrival order; start/end are not indexed
    _occupants: dict[str, list[str]] = field(default_factory=dict, init=False, repr=False, compare=False)
    # team -> [cat_id, ...] in roster order
    _cats_by_team: dict[str, list[str]] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._reindex()

    def _reindex(self) -> None:
        self._cats_by_id = {}
        self._occupants = {}
        self._cats_by_team = {}
        for cat in self.cats:
            if cat.id in self._cats_by_id:
                raise ValueError(f"Duplicate cat id: {cat.id}")
            self._cats_by_id[cat.id] = cat
            self._cats_by_team.setdefault(cat.team, []).append(cat.id)
            if cat.location.is_square:
                self._occupants.setdefault(cat.location.square, []).append(cat.id)

    @classmethod
    def initial(cls, config: GameConfig) -> "GameState":
        """One cat per (index, team), index-major, all at start."""
        cats = [
            Cat(id=f"{team}{i}", team=team)
            for i in range(config.cats_per_team)
            for team in config.teams
        ]
        return cls(cats=cats)

    def copy(self) -> "GameState":
        """Return an independent copy. Moves are frozen, so history is copied shallowly."""
        return GameState(
            cats=[Cat(c.id, c.team, c.location) for c in self.cats],
            history=list(self.history),
        )

    def get_cat(self, cat_id: str) -> Cat:
        try:
            return self._cats_by_id[cat_id]
        except KeyError:
            raise CatNotFoundError(cat_id) from None

    def cats_on_team(self, team: str) -> list[Cat]:
        cat_ids = self._cats_by_team.get(team)
        if not cat_ids:
            raise TeamNotFoundError(team)
        return [self._cats_by_id[cid] for cid in cat_ids]

    def cats_at(self, square: str) -> list[Cat]:
        """Cats on a trail square, in arrival order."""
        return [self._cats_by_id[cid] for cid in self._occupants.get(square, [])]

    def set_location(self, cat_id: str, location: Location) -> None:
        """Move a cat, keeping the occupancy index in step."""
        cat = self.get_cat(cat_id)
        if cat.location.is_square:
            occupants = self._occupants[cat.location.square]
            occupants.remove(cat_id)
            if not occupants:
                del self._occupants[cat.location.square]
        cat.location = location
        if location.is_square:
            self._occupants.setdefault(location.square, []).append(cat_id)

    # ===== Serialization Methods =====

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "cats": [c.to_dict() for c in self.cats],
            "history": [m.to_dict() for m in self.history],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        cats = data.get("cats") or []
        if not isinstance(cats, list):
            cats = []
        history = data.get("history") or []
        if not isinstance(history, list):
            history = []
        return cls(
            cats=[Cat.from_dict(c) for c in cats if isinstance(c, dict)],
            history=[Move.from_dict(m) for m in history if isinstance(m, dict)],
        )
