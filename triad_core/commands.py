from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Base class for the commands a driver feeds to the rules engine."""


@dataclass(frozen=True)
class Register(Command):
    """Join the game under ``name``."""
    name: str


@dataclass(frozen=True)
class SelectCard(Command):
    """Draft the card ``card_id`` from the current deck."""
    card_id: str


@dataclass(frozen=True)
class Play(Command):
    """Place ``card_id`` from the acting player's hand at column ``x``, row ``y``."""
    card_id: str
    x: int
    y: int


@dataclass(frozen=True)
class ChoosePlayer(Command):
    """Reserved; the engine ignores it."""


@dataclass(frozen=True)
class Check(Command):
    """Ask about the cell at column ``x``, row ``y``. Answered by drivers, ignored by the engine."""
    x: int
    y: int
