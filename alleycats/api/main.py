"""
FastAPI backend for Alley Cats.
Provides REST API endpoints over in-memory games: the query surface
(cats, possible moves, winner, history) and the command surface (move).
"""

import secrets
import string
import threading
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from alleycats.config import CORS_ORIGINS, DEFAULT_SETUP_ID
from alleycats.engine.definitions import GameConfig, list_setups, load_setup
from alleycats.engine.errors import GameError, NotFoundError
from alleycats.engine.game import Game
from alleycats.engine.utils import roll_die

app = FastAPI(
    title="Alley Cats API",
    description="Backend API for Alley Cats - a turn-based race game",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            print(f"[500] {method} {path}", flush=True)
        return response
    except Exception:
        print(f"[500] {method} {path} (exception)", flush=True)
        raise


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(GameError)
async def game_error_handler(request, exc: GameError):
    """Rule violations and bad input from the engine are the caller's fault."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# In-memory games; nothing is persisted
games: dict[str, Game] = {}
# Sync endpoints run in a threadpool; held for every check-then-write on games
games_lock = threading.Lock()

GAME_ID_CHARS = string.ascii_lowercase + string.digits
GAME_ID_LENGTH = 6


# ===== Pydantic Models =====

class GameConfigModel(BaseModel):
    num_cats: int
    trails: dict[str, list[str]]
    safe_locations: list[str] = []


class CreateGameRequest(BaseModel):
    game_id: str | None = None
    """Setup id from GET /setups. Ignored when config is given. Omitted = alleycats.config.DEFAULT_SETUP_ID."""
    setup_id: str | None = None
    config: GameConfigModel | None = None


class MoveRequest(BaseModel):
    cat_id: str
    num_steps: int


class ReplayRequest(BaseModel):
    game_id: str | None = None


# ===== Helper Functions =====

def generate_game_id() -> str:
    """Generate an unused game id. Call with games_lock held."""
    for _ in range(20):
        game_id = "".join(secrets.choice(GAME_ID_CHARS) for _ in range(GAME_ID_LENGTH))
        if game_id not in games:
            return game_id
    raise HTTPException(status_code=500, detail="Could not generate unique game id")


def get_game(game_id: str) -> Game:
    """Get game; raise 404 if not found."""
    game = games.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return game


def register_game(game_id: str | None, game: Game) -> str:
    """Claim an id (generated when None) and store the game in one step; 409 if taken."""
    with games_lock:
        if game_id is None:
            game_id = generate_game_id()
        elif game_id in games:
            raise HTTPException(status_code=409, detail=f"Game {game_id} already exists")
        games[game_id] = game
    return game_id


def state_for_response(game: Game) -> dict[str, Any]:
    """Cats, config and winner plus per-team progress for the UI."""
    out = game.to_dict()
    out["summary"] = game.get_summary()
    return out


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": "Alley Cats API", "version": "1.0.0"}


@app.get("/setups")
def get_setups():
    """List available setups (id, display_name). Use setup_id in POST /games."""
    return {"setups": list_setups()}


@app.post("/games")
def create_game(request: CreateGameRequest):
    """Create a game from an explicit config or a bundled setup."""
    if request.config is not None:
        config = GameConfig.from_dict(request.config.model_dump())
    else:
        setup_id = request.setup_id or DEFAULT_SETUP_ID
        try:
            config = load_setup(setup_id)["config"]
        except FileNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
    game = Game(config)
    game_id = register_game(request.game_id, game)
    return {"game_id": game_id, "state": state_for_response(game)}


@app.get("/games")
def list_games():
    with games_lock:
        listed = list(games.items())
    return {"games": [{"game_id": gid, "winner": g.get_winning_team()} for gid, g in listed]}


@app.get("/games/{game_id}")
def get_game_state(game_id: str):
    game = get_game(game_id)
    return {"game_id": game_id, "state": state_for_response(game)}


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    with games_lock:
        if games.pop(game_id, None) is None:
            raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return {"deleted": game_id}


@app.get("/games/{game_id}/possible-moves")
def get_possible_moves(game_id: str, team: str, roll: int):
    """Legal-move results for every cat on a team. Pure query; safe for hover previews."""
    game = get_game(game_id)
    moves = game.get_possible_moves(team, roll)
    return {"team": team, "roll": roll, "moves": [m.to_dict() for m in moves]}


@app.get("/games/{game_id}/cats/{cat_id}/possible-move")
def get_possible_move(game_id: str, cat_id: str, roll: int):
    game = get_game(game_id)
    return game.get_possible_move(cat_id, roll).to_dict()


@app.post("/games/{game_id}/roll")
def do_roll(game_id: str):
    """Roll the die server-side. Turn order is up to the client."""
    get_game(game_id)
    return {"roll": roll_die()}


@app.post("/games/{game_id}/move")
def do_move(game_id: str, request: MoveRequest):
    """Apply one move. Check it with possible-moves first."""
    game = get_game(game_id)
    events = game.move_cat(request.cat_id, request.num_steps)
    return {
        "state": state_for_response(game),
        "events": [e.to_dict() for e in events],
    }


@app.get("/games/{game_id}/history")
def get_history(game_id: str):
    game = get_game(game_id)
    return {"history": [m.to_dict() for m in game.get_history()]}


@app.post("/games/{game_id}/replay")
def replay_game(game_id: str, request: ReplayRequest):
    """Rebuild this game's history into a new game with the same config."""
    source = get_game(game_id)
    history = source.get_history()
    game = Game.replay(source.config, history)
    new_id = register_game(request.game_id, game)
    return {"game_id": new_id, "state": state_for_response(game)}
