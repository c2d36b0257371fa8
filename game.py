from __future__ import annotations

# Facade module that re-exports the Triad core API.
# Used by the Flask app and tests; single-responsibility modules live under triad_core/*.

from triad_core.errors import (
    TriadError,
    OutOfBoundsError,
    EmptyCellError,
    CardGenerationError,
)
from triad_core.card import (
    Card,
    CardGenerator,
    RandomCardGenerator,
    FixedCardGenerator,
    generate_card,
    generate_deck_of,
    MIN_STRENGTH,
    MAX_STRENGTH,
    MIN_CARD_SUM,
    MAX_CARD_SUM,
    DECK_SIZE,
    HAND_SIZE,
)
from triad_core.board import Board, Coord, in_bounds, OWNER_SIGNS, UP, DOWN, LEFT, RIGHT
from triad_core.player import Player
from triad_core.commands import Command, Register, SelectCard, Play, ChoosePlayer, Check
from triad_core.state import (
    State,
    WaitingForPlayers,
    WaitingForCards,
    WaitingForPlayerToPlay,
    EndOfGame,
    Game,
)
from triad_core.rules import Rules, RulesImpl, execute, captures, decide_winner
from triad_core.cli import describe_cell, parse_play, run


def main() -> None:
    # CLI driver delegated to triad_core.cli
    from triad_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
