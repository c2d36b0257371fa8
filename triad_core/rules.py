"""Rules engine: every legal transition of the game, including captures.

The engine never mutates its inputs. Each operation takes a ``Game`` and
returns a new one; a command that is not legal in the current phase returns
the input unchanged rather than raising.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from .board import DOWN, LEFT, NEIGHBOR_OFFSETS, RIGHT, UP, Board, Coord, in_bounds
from .card import DECK_SIZE, HAND_SIZE, Card, CardGenerator, RandomCardGenerator
from .commands import Command, Play, Register, SelectCard
from .player import Player
from .state import (
    EndOfGame,
    Game,
    WaitingForCards,
    WaitingForPlayerToPlay,
    WaitingForPlayers,
)

logger = logging.getLogger(__name__)

# Edge of the placed card and edge of the neighbor that face each other.
FACING_EDGES: Dict[Coord, Tuple[str, str]] = {
    LEFT: ("left", "right"),
    RIGHT: ("right", "left"),
    UP: ("top", "bottom"),
    DOWN: ("bottom", "top"),
}


def captures(card: Card, neighbor: Card, offset: Coord) -> bool:
    """True when ``card`` beats ``neighbor`` lying in direction ``offset``. Ties never capture."""
    mine, theirs = FACING_EDGES[offset]
    return getattr(card, mine) > getattr(neighbor, theirs)


def decide_winner(players: Tuple[Player, ...], scores: Tuple[int, int]) -> Optional[str]:
    if scores[0] > scores[1]:
        return players[0].name
    if scores[1] > scores[0]:
        return players[1].name
    return None


class Rules:
    """Contract of the rules engine. ``RulesImpl`` is the game's implementation."""

    def register_player(self, game: Game, name: str) -> Game:
        raise NotImplementedError

    def select_card(self, game: Game, card_id: str) -> Game:
        raise NotImplementedError

    def play_card(self, game: Game, card_id: str, x: int, y: int) -> Game:
        raise NotImplementedError

    def check_neighbour_cards_to_current_position(
        self, board: Board, card: Card, position: Coord, offset: Coord
    ) -> bool:
        raise NotImplementedError


class RulesImpl(Rules):
    def __init__(self, generator: Optional[CardGenerator] = None) -> None:
        self.generator = generator or RandomCardGenerator()

    def _fresh_deck(self) -> Tuple[Card, ...]:
        return tuple(self.generator.generate_deck(DECK_SIZE))

    # Setup

    def register_player(self, game: Game, name: str) -> Game:
        state = game.state
        if not isinstance(state, WaitingForPlayers):
            return game
        if game.find_player(name) is not None:
            logger.debug("Ignoring duplicate registration of %r", name)
            return game
        if state.count - 1 == 0:
            players = game.players + (Player(name),)
            logger.debug("Players %s registered, drafting starts", [p.name for p in players])
            return Game(WaitingForCards(2, self._fresh_deck()), players, game.board)
        return Game(WaitingForPlayers(state.count - 1), (Player(name),), game.board)

    def select_card(self, game: Game, card_id: str) -> Game:
        state = game.state
        if not isinstance(state, WaitingForCards):
            return game
        player_index = 2 - state.player_count
        if not 0 <= player_index < len(game.players):
            return game
        drafter = game.players[player_index]
        deck = state.deck
        picked = next((c for c in deck if c.id == card_id), None)
        if picked is None:
            logger.debug("Card %s is not in the deck offered to %r", card_id, drafter.name)
        else:
            drafter = drafter.add_card(picked)
            deck = tuple(c for c in deck if c.id != card_id)
        players = game.players[:player_index] + (drafter,) + game.players[player_index + 1:]

        if len(drafter.hand) == HAND_SIZE:
            if state.player_count == 1:
                logger.debug("Drafting finished, %r plays first", players[0].name)
                return Game(WaitingForPlayerToPlay(players[0].name), players, game.board)
            return Game(WaitingForCards(state.player_count - 1, self._fresh_deck()), players, game.board)
        return Game(WaitingForCards(state.player_count, deck), players, game.board)

    # Play

    def play_card(self, game: Game, card_id: str, x: int, y: int) -> Game:
        state = game.state
        if not isinstance(state, WaitingForPlayerToPlay):
            return game
        current = game.player_index(state.player_name)
        if current is None:
            return game
        player = game.players[current]
        card = player.find_card(card_id)
        if card is None:
            logger.debug("%r does not hold card %s", player.name, card_id)
            return game
        row, col = y, x
        if not in_bounds(row, col) or not game.board.is_empty_at(row, col):
            logger.debug("Rejected play of %s at x=%s y=%s by %r", card_id, x, y, player.name)
            return game

        updated_player = player.drop_card(card)
        board = game.board.set_card_at(updated_player, card, row, col)
        for offset in NEIGHBOR_OFFSETS:
            if self.check_neighbour_cards_to_current_position(board, card, (row, col), offset):
                board = board.set_cell_owner(updated_player, row + offset[0], col + offset[1])

        players = game.players[:current] + (updated_player,) + game.players[current + 1:]
        if board.is_full():
            scores = board.tally(players)
            winner = decide_winner(players, scores)
            logger.info("Game over: scores %s, winner %s", scores, winner or "none (tie)")
            return Game(EndOfGame(scores, winner), players, board)
        next_name = players[(current + 1) % len(players)].name
        return Game(WaitingForPlayerToPlay(next_name), players, board)

    def check_neighbour_cards_to_current_position(
        self, board: Board, card: Card, position: Coord, offset: Coord
    ) -> bool:
        found = board.neighbor(position[0], position[1], offset)
        if found is None:
            return False
        _, neighbor = found
        return captures(card, neighbor, offset)


def execute(rules: Rules, game: Game, command: Command) -> Game:
    """Applies ``command`` to ``game`` and returns the resulting game."""
    state = game.state
    if isinstance(state, WaitingForPlayers) and isinstance(command, Register):
        return rules.register_player(game, command.name)
    if isinstance(state, WaitingForCards) and isinstance(command, SelectCard):
        return rules.select_card(game, command.card_id)
    if isinstance(state, WaitingForPlayerToPlay) and isinstance(command, Play):
        return rules.play_card(game, command.card_id, command.x, command.y)
    logger.debug("Ignoring %s while in %s", type(command).__name__, type(state).__name__)
    return game
