"""
Static definitions for a game: teams, their trails, and the safe squares.
Setup data lives under data/setups/<setup_id>/: setup.json (num_cats, trails,
safe_locations) and optional manifest.json (id, display_name).
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from alleycats.engine import RESERVED_LOCATIONS
from alleycats.engine.errors import ConfigError, TeamNotFoundError

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"


def _default_setup_id() -> str:
    """Single place for default: alleycats.config.DEFAULT_SETUP_ID."""
    from alleycats.config import DEFAULT_SETUP_ID
    return DEFAULT_SETUP_ID


def _setup_dir(setup_id: str) -> Path:
    return SETUPS_DIR / setup_id


@dataclass(frozen=True)
class GameConfig:
    """
    Immutable configuration of one game.
    trails preserves insertion order; that order is the team order used for
    the cat roster and for winner checks.
    """
    cats_per_team: int
    trails: Mapping[str, tuple[str, ...]]  # team -> ordered square ids, read-only after init
    safe_squares: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if isinstance(self.cats_per_team, bool) or not isinstance(self.cats_per_team, int):
            raise ConfigError(f"cats_per_team must be an integer, got {self.cats_per_team!r}")
        if self.cats_per_team < 1:
            raise ConfigError(f"cats_per_team must be positive, got {self.cats_per_team}")
        if not self.trails:
            raise ConfigError("At least one team trail is required")

        trails: dict[str, tuple[str, ...]] = {}
        for team, trail in self.trails.items():
            if not isinstance(team, str) or not team:
                raise ConfigError(f"Team ids must be non-empty strings, got {team!r}")
            if team in RESERVED_LOCATIONS:
                raise ConfigError(f"Team id '{team}' is reserved")
            squares = tuple(trail)
            if not squares:
                raise ConfigError(f"Trail for team '{team}' is empty")
            for square in squares:
                if not isinstance(square, str) or not square:
                    raise ConfigError(f"Trail for team '{team}' has an invalid square {square!r}")
                if square in RESERVED_LOCATIONS:
                    raise ConfigError(f"Trail for team '{team}' uses reserved square '{square}'")
            if len(set(squares)) != len(squares):
                raise ConfigError(f"Trail for team '{team}' visits a square more than once")
            trails[team] = squares

        # Cat ids are team + index, so teams like "a" and "a1" can clash
        cat_ids = [f"{team}{i}" for i in range(self.cats_per_team) for team in trails]
        if len(set(cat_ids)) != len(cat_ids):
            raise ConfigError("Team ids produce clashing cat ids; pick more distinct team names")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "trails", MappingProxyType(trails))
        object.__setattr__(self, "safe_squares", frozenset(self.safe_squares))

    @property
    def teams(self) -> list[str]:
        return list(self.trails)

    def trail_for(self, team: str) -> tuple[str, ...]:
        try:
            return self.trails[team]
        except KeyError:
            raise TeamNotFoundError(team) from None

    def is_safe(self, square: str) -> bool:
        return square in self.safe_squares

    def to_dict(self) -> dict[str, Any]:
        return {
            "num_cats": self.cats_per_team,
            "trails": {team: list(trail) for team, trail in self.trails.items()},
            "safe_locations": sorted(self.safe_squares),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameConfig":
        """Build from the setup.json shape: {num_cats, trails, safe_locations}."""
        if not isinstance(data, dict):
            raise ConfigError("Game config must be an object")
        trails = data.get("trails")
        if not isinstance(trails, dict):
            raise ConfigError("Game config needs a 'trails' object")
        for team, trail in trails.items():
            if not isinstance(trail, list):
                raise ConfigError(f"Trail for team '{team}' must be a list")
        safe = data.get("safe_locations") or []
        if not isinstance(safe, list):
            raise ConfigError("'safe_locations' must be a list")
        return cls(
            cats_per_team=data.get("num_cats"),
            trails=trails,
            safe_squares=frozenset(safe),
        )


def list_setups() -> list[dict]:
    """Return [{ id, display_name }, ...] for all setups (subdirs of data/setups/ with setup.json)."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for d in sorted(SETUPS_DIR.iterdir()):
        if not d.is_dir():
            continue
        setup_id = d.name
        if not (d / "setup.json").exists():
            continue
        out.append({"id": setup_id, "display_name": _read_manifest(d).get("display_name", setup_id)})
    return out


def _read_manifest(setup_dir: Path) -> dict:
    manifest_path = setup_dir / "manifest.json"
    if not manifest_path.exists():
        return {}
    try:
        with open(manifest_path, "r") as f:
            m = json.load(f)
    except (json.JSONDecodeError, OSError):
        return {}
    return m if isinstance(m, dict) else {}


def load_setup(setup_id: str | None = None) -> dict:
    """Load setup by id. Returns { id, display_name, config }.
    All data read from data/setups/<setup_id>/.
    """
    if setup_id is None:
        setup_id = _default_setup_id()
    setup_dir = _setup_dir(setup_id)
    if not setup_dir.exists() or not setup_dir.is_dir():
        raise FileNotFoundError(f"Setup not found: {setup_id}")
    setup_path = setup_dir / "setup.json"
    if not setup_path.exists():
        raise FileNotFoundError(f"setup.json not found in setup: {setup_id}")
    with open(setup_path, "r") as f:
        raw = json.load(f)
    manifest = _read_manifest(setup_dir)
    return {
        "id": manifest.get("id", setup_id),
        "display_name": manifest.get("display_name", setup_id),
        "config": GameConfig.from_dict(raw),
    }


def load_config(setup_id: str | None = None) -> GameConfig:
    """Shortcut for load_setup(setup_id)["config"]."""
    return load_setup(setup_id)["config"]
