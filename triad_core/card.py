from __future__ import annotations

import random
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import CardGenerationError

MIN_STRENGTH = 1
MAX_STRENGTH = 10
MIN_CARD_SUM = 15
MAX_CARD_SUM = 25
DECK_SIZE = 10
HAND_SIZE = 5


@dataclass(frozen=True)
class Card:
    """A playing card with four edge strengths; ownership lives on the board."""
    id: str
    top: int
    right: int
    bottom: int
    left: int

    def sum(self) -> int:
        return self.top + self.right + self.bottom + self.left

    def edges(self) -> Tuple[int, int, int, int]:
        return self.top, self.right, self.bottom, self.left

    def short(self) -> str:
        """Compact edge listing used by the drivers, e.g. '5/4/3/2'."""
        return "/".join(str(v) for v in self.edges())


def _new_card_id(rng: random.Random) -> str:
    # Drawn from the caller's source so a seeded generator reproduces ids too.
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_card(target_sum: int, rng: Optional[random.Random] = None) -> Card:
    """Generates a card whose four edges add up to ``target_sum``.

    Edges are drawn in the order top, right, bottom; left takes the remainder.
    Each draw keeps enough budget for the edges still to come: at least one
    point each, and never more than ten.
    """
    if target_sum < MIN_CARD_SUM or target_sum > MAX_CARD_SUM:
        raise CardGenerationError(
            f"Value should be between {MIN_CARD_SUM} and {MAX_CARD_SUM}, got {target_sum}"
        )
    rng = rng or random.Random()
    top = rng.randint(MIN_STRENGTH, MAX_STRENGTH)
    rest = target_sum - top
    right = rng.randint(max(MIN_STRENGTH, rest - 2 * MAX_STRENGTH), min(MAX_STRENGTH, rest - 2))
    rest -= right
    bottom = rng.randint(max(MIN_STRENGTH, rest - MAX_STRENGTH), min(MAX_STRENGTH, rest - 1))
    left = rest - bottom
    return Card(id=_new_card_id(rng), top=top, right=right, bottom=bottom, left=left)


def generate_deck_of(count: int, rng: Optional[random.Random] = None) -> List[Card]:
    """Generates ``count`` cards, each with a random target sum in the allowed range."""
    rng = rng or random.Random()
    deck: List[Card] = []
    for _ in range(count):
        value = rng.randint(MIN_CARD_SUM, MAX_CARD_SUM)
        try:
            deck.append(generate_card(value, rng))
        except CardGenerationError:
            continue
    return deck


class CardGenerator:
    """Source of fresh drafting decks for the rules engine."""

    def generate_deck(self, count: int) -> Tuple[Card, ...]:
        raise NotImplementedError


class RandomCardGenerator(CardGenerator):
    """Deck source backed by an explicit ``random.Random``."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def generate_deck(self, count: int) -> Tuple[Card, ...]:
        return tuple(generate_deck_of(count, self.rng))


class FixedCardGenerator(CardGenerator):
    """Hands out prepared decks in order; the last one repeats once exhausted."""

    def __init__(self, decks: Sequence[Sequence[Card]]) -> None:
        if not decks:
            raise ValueError("FixedCardGenerator needs at least one deck")
        self._decks = [tuple(d) for d in decks]
        self._next = 0

    def generate_deck(self, count: int) -> Tuple[Card, ...]:
        deck = self._decks[min(self._next, len(self._decks) - 1)]
        self._next += 1
        return deck[:count]
