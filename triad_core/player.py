from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .card import Card


@dataclass(frozen=True)
class Player:
    """A registered participant and the cards currently in their hand."""
    name: str
    hand: Tuple[Card, ...] = ()

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def add_card(self, card: Card) -> 'Player':
        return Player(self.name, self.hand + (card,))

    def drop_card(self, card: Card) -> 'Player':
        return Player(self.name, tuple(c for c in self.hand if c.id != card.id))
