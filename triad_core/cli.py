from __future__ import annotations

import argparse
import logging
import os
from typing import Callable, List, Optional, Sequence

from .board import OWNER_SIGNS
from .card import HAND_SIZE, Card, RandomCardGenerator
from .commands import Check, Command, Play, Register, SelectCard
from .errors import EmptyCellError, OutOfBoundsError
from .rules import RulesImpl, execute
from .state import (
    EndOfGame,
    Game,
    WaitingForCards,
    WaitingForPlayerToPlay,
    WaitingForPlayers,
)


def format_cards(cards: Sequence[Card]) -> str:
    """One line per card: index and edges as top/right/bottom/left."""
    return "\n".join(f"  [{i}] {card.short()} (sum {card.sum()})" for i, card in enumerate(cards))


def parse_play(text: str, hand: Sequence[Card]) -> Optional[Command]:
    """Parses '<hand index> <x> <y>' or 'check <x> <y>'; commas work as separators too."""
    parts = [t for t in text.replace(",", " ").split() if t != ""]
    if len(parts) != 3:
        return None
    try:
        if parts[0].lower() == "check":
            return Check(int(parts[1]), int(parts[2]))
        i, x, y = (int(p) for p in parts)
    except ValueError:
        return None
    if not 0 <= i < len(hand):
        return None
    return Play(hand[i].id, x, y)


def describe_cell(game: Game, x: int, y: int) -> str:
    """Answers a Check command: the card at column ``x``, row ``y`` and who owns it."""
    try:
        card = game.board.get_card_at(y, x)
        if card is None:
            return f"({x}, {y}) is empty"
        owner = game.board.get_cell_owner(y, x)
    except (OutOfBoundsError, EmptyCellError) as e:
        return str(e)
    return f"({x}, {y}) holds {card.short()} owned by {owner}"


def run(game: Game, rules: RulesImpl, read: Callable[[str], str] = input,
        write: Callable[[str], None] = print) -> Game:
    """Drives ``game`` to the end, reading commands with ``read`` and reporting with ``write``."""
    while not isinstance(game.state, EndOfGame):
        state = game.state
        if isinstance(state, WaitingForPlayers):
            name = read(f"Player name ({state.count} to register): ").strip()
            if not name:
                continue
            nxt = execute(rules, game, Register(name))
            if nxt is game:
                write(f"The name {name!r} is already taken.")
            game = nxt
        elif isinstance(state, WaitingForCards):
            drafter = game.players[2 - state.player_count]
            write(f"{drafter.name}, pick a card ({len(drafter.hand)}/{HAND_SIZE} drafted):")
            write(format_cards(state.deck))
            text = read("Card index: ").strip()
            try:
                choice = int(text)
            except ValueError:
                write('Could not parse. Try again.')
                continue
            if not 0 <= choice < len(state.deck):
                write('No such card. Try again.')
                continue
            game = execute(rules, game, SelectCard(state.deck[choice].id))
        elif isinstance(state, WaitingForPlayerToPlay):
            player = game.find_player(state.player_name)
            if player is None:
                raise RuntimeError(f"Unknown player to move: {state.player_name}")
            write(game.board.pretty(game.players))
            write(f"{player.name} ({OWNER_SIGNS[game.player_index(player.name) or 0]}) to play. Hand:")
            write(format_cards(player.hand))
            command = parse_play(read("Enter '<card> <x> <y>' or 'check <x> <y>': "), player.hand)
            if command is None:
                write('Could not parse. Try again.')
                continue
            if isinstance(command, Check):
                write(describe_cell(game, command.x, command.y))
                continue
            nxt = execute(rules, game, command)
            if nxt is game:
                write('Illegal move. Try again.')
            game = nxt
        else:
            raise RuntimeError(f"Unexpected state: {state!r}")

    final: EndOfGame = game.state  # type: ignore[assignment]
    write(game.board.pretty(game.players))
    names = [p.name for p in game.players]
    write(f"Scores: {names[0]} {final.scores[0]} - {final.scores[1]} {names[1]}")
    write(f"{final.winner} wins!" if final.winner else "It's a tie!")
    return game


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Triad: two-player card placement game on a 3x3 grid')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for card generation')
    parser.add_argument('--log-level', default=os.getenv('TRIAD_LOG_LEVEL', 'WARNING'),
                        help='Logging level (DEBUG, INFO, WARNING, ...)')
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    rules = RulesImpl(RandomCardGenerator(seed=args.seed))
    try:
        run(Game.new(), rules)
    except (KeyboardInterrupt, EOFError):
        print()
