from __future__ import annotations

import logging
import os
import random
import sys
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    Board,
    Card,
    Check,
    ChoosePlayer,
    Command,
    EmptyCellError,
    EndOfGame,
    Game,
    OutOfBoundsError,
    Play,
    Player,
    RandomCardGenerator,
    Register,
    RulesImpl,
    SelectCard,
    State,
    WaitingForCards,
    WaitingForPlayers,
    WaitingForPlayerToPlay,
    execute,
)

logger = logging.getLogger(__name__)


def _env_seed() -> Optional[int]:
    raw = os.getenv("TRIAD_SEED")
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer TRIAD_SEED=%r", raw)
        return None


DEFAULT_SEED = _env_seed()

app = Flask(__name__)


def _position_seed(seed: int, g: Game) -> str:
    # Decks are dealt at different points of a game; keying on the players
    # and the drafted card count keeps those decks apart.
    names = ",".join(p.name for p in g.players)
    drafted = sum(len(p.hand) for p in g.players)
    return f"{seed}:{names}:{drafted}"


def make_rules(seed: Optional[int] = None, game: Optional[Game] = None) -> RulesImpl:
    """Builds the rules engine for one request. Tests swap this for a fixed-deck engine.

    A seeded engine draws from a source keyed on the seed and on the incoming
    game, so replaying a game reproduces its decks while the decks dealt
    within one game never share card ids.
    """
    if seed is None:
        seed = DEFAULT_SEED
    if seed is None:
        return RulesImpl(RandomCardGenerator())
    if game is None:
        return RulesImpl(RandomCardGenerator(seed=seed))
    return RulesImpl(RandomCardGenerator(rng=random.Random(_position_seed(seed, game))))


# ---------- JSON codec ----------

def card_to_json(c: Card) -> Dict[str, Any]:
    return {"id": c.id, "top": c.top, "right": c.right, "bottom": c.bottom, "left": c.left}


def card_from_json(obj: Dict[str, Any]) -> Card:
    return Card(
        id=str(obj["id"]),
        top=int(obj["top"]),
        right=int(obj["right"]),
        bottom=int(obj["bottom"]),
        left=int(obj["left"]),
    )


def board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "cards": [card_to_json(c) if c is not None else None for c in b.cards],
        "owners": list(b.owners),
    }


def board_from_json(obj: Dict[str, Any]) -> Board:
    cards = tuple(card_from_json(c) if c is not None else None for c in obj["cards"])
    owners = tuple(str(o) if o is not None else None for o in obj["owners"])
    if len(cards) != 9 or len(owners) != 9:
        raise ValueError("board needs 9 cards and 9 owners")
    for card, owner in zip(cards, owners):
        if (card is None) != (owner is None):
            raise ValueError("a cell has an owner if and only if it holds a card")
    return Board(cards=cards, owners=owners)


def player_to_json(p: Player) -> Dict[str, Any]:
    return {"name": p.name, "hand": [card_to_json(c) for c in p.hand]}


def player_from_json(obj: Dict[str, Any]) -> Player:
    return Player(name=str(obj["name"]), hand=tuple(card_from_json(c) for c in obj.get("hand", [])))


def state_to_json(s: State) -> Dict[str, Any]:
    if isinstance(s, WaitingForPlayers):
        return {"type": "WaitingForPlayers", "count": s.count}
    if isinstance(s, WaitingForCards):
        return {
            "type": "WaitingForCards",
            "playerCount": s.player_count,
            "deck": [card_to_json(c) for c in s.deck],
        }
    if isinstance(s, WaitingForPlayerToPlay):
        return {"type": "WaitingForPlayerToPlay", "playerName": s.player_name}
    if isinstance(s, EndOfGame):
        return {"type": "EndOfGame", "scores": list(s.scores), "winner": s.winner}
    raise ValueError(f"unknown state {s!r}")


def json_to_state(obj: Dict[str, Any]) -> State:
    kind = obj["type"]
    if kind == "WaitingForPlayers":
        return WaitingForPlayers(int(obj["count"]))
    if kind == "WaitingForCards":
        return WaitingForCards(int(obj["playerCount"]), tuple(card_from_json(c) for c in obj["deck"]))
    if kind == "WaitingForPlayerToPlay":
        return WaitingForPlayerToPlay(str(obj["playerName"]))
    if kind == "EndOfGame":
        a, b = obj["scores"]
        winner = obj.get("winner")
        return EndOfGame((int(a), int(b)), str(winner) if winner is not None else None)
    raise ValueError(f"unknown state type {kind!r}")


def game_to_json(g: Game) -> Dict[str, Any]:
    return {
        "state": state_to_json(g.state),
        "players": [player_to_json(p) for p in g.players],
        "board": board_to_json(g.board),
    }


def json_to_game(obj: Dict[str, Any]) -> Game:
    return Game(
        state=json_to_state(obj["state"]),
        players=tuple(player_from_json(p) for p in obj.get("players", [])),
        board=board_from_json(obj["board"]),
    )


def json_to_command(obj: Dict[str, Any]) -> Command:
    kind = obj["type"]
    if kind == "Register":
        return Register(str(obj["name"]))
    if kind == "SelectCard":
        return SelectCard(str(obj["cardId"]))
    if kind == "Play":
        return Play(str(obj["cardId"]), int(obj["x"]), int(obj["y"]))
    if kind == "ChoosePlayer":
        return ChoosePlayer()
    if kind == "Check":
        return Check(int(obj["x"]), int(obj["y"]))
    raise ValueError(f"unknown command type {kind!r}")


def _game_response(g: Game) -> Dict[str, Any]:
    return {"ok": True, "game": game_to_json(g), "board": g.board.pretty(g.players)}


def _seed_from(body: Dict[str, Any]) -> Optional[int]:
    seed = body.get("seed")
    return int(seed) if seed is not None else None


# ---------- API ----------

@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True})


@app.post("/api/new")
def api_new() -> Any:
    return jsonify(_game_response(Game.new()))


@app.post("/api/command")
def api_command() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = json_to_game(body["game"])
        command = json_to_command(body["command"])
        seed = _seed_from(body)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    next_game = execute(make_rules(seed, g), g, command)
    resp = _game_response(next_game)
    resp["changed"] = next_game != g
    return jsonify(resp)


@app.post("/api/check")
def api_check() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = json_to_game(body["game"])
        x, y = int(body["x"]), int(body["y"])
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    try:
        card = g.board.get_card_at(y, x)
        owner = g.board.get_cell_owner(y, x) if card is not None else None
    except (OutOfBoundsError, EmptyCellError) as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    return jsonify({
        "ok": True,
        "card": card_to_json(card) if card is not None else None,
        "owner": owner,
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("TRIAD_LOG_LEVEL", "INFO").upper())
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    host = os.getenv("TRIAD_HOST", "127.0.0.1")
    port = int(os.getenv("TRIAD_PORT", "5000"))
    app.run(host=host, port=port, debug=debug)
