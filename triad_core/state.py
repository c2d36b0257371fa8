from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import Board
from .card import Card
from .player import Player


@dataclass(frozen=True)
class State:
    """Base class for the game phases."""


@dataclass(frozen=True)
class WaitingForPlayers(State):
    count: int = 2


@dataclass(frozen=True)
class WaitingForCards(State):
    player_count: int
    deck: Tuple[Card, ...]


@dataclass(frozen=True)
class WaitingForPlayerToPlay(State):
    player_name: str


@dataclass(frozen=True)
class EndOfGame(State):
    scores: Tuple[int, int]
    winner: Optional[str]  # None on a tie


@dataclass(frozen=True)
class Game:
    """Represents the whole game: current phase, players in registration order, and the board."""
    state: State = field(default_factory=WaitingForPlayers)
    players: Tuple[Player, ...] = ()
    board: Board = field(default_factory=Board)

    @classmethod
    def new(cls) -> 'Game':
        return cls(state=WaitingForPlayers(2), players=(), board=Board())

    def find_player(self, name: str) -> Optional[Player]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def player_index(self, name: str) -> Optional[int]:
        for i, player in enumerate(self.players):
            if player.name == name:
                return i
        return None

    def is_over(self) -> bool:
        return isinstance(self.state, EndOfGame)
