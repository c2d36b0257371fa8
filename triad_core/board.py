from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .card import Card, MAX_STRENGTH
from .errors import EmptyCellError, OutOfBoundsError
from .player import Player

Coord = Tuple[int, int]  # (row, col)

SIZE = 3
CELL_COUNT = SIZE * SIZE

# Offsets as (d_row, d_col).
UP: Coord = (-1, 0)
DOWN: Coord = (1, 0)
LEFT: Coord = (0, -1)
RIGHT: Coord = (0, 1)
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = (LEFT, RIGHT, UP, DOWN)

OWNER_SIGNS = ("o", "x")
_EMPTY_LINE = "       |"
_SEPARATOR = "  -------------------------"
_COLUMN_LABELS = "      A       B       C"


def _empty_cells() -> Tuple[Optional[Card], ...]:
    return (None,) * CELL_COUNT


def _empty_owners() -> Tuple[Optional[str], ...]:
    return (None,) * CELL_COUNT


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def _strength_glyph(value: int) -> str:
    # Ten is the only two-digit strength; it is drawn as 'A' to keep cells aligned.
    return "A" if value == MAX_STRENGTH else str(value)


@dataclass(frozen=True)
class Board:
    """The 3x3 grid: a card per cell plus, separately, the name owning each occupied cell."""
    cards: Tuple[Optional[Card], ...] = field(default_factory=_empty_cells)
    owners: Tuple[Optional[str], ...] = field(default_factory=_empty_owners)

    @staticmethod
    def index(row: int, col: int) -> int:
        """Calculates the flat index for a given row and column."""
        if not in_bounds(row, col):
            raise OutOfBoundsError(row, col)
        return row * SIZE + col

    def get_card_at(self, row: int, col: int) -> Optional[Card]:
        return self.cards[self.index(row, col)]

    def is_empty_at(self, row: int, col: int) -> bool:
        return self.get_card_at(row, col) is None

    def get_cell_owner(self, row: int, col: int) -> str:
        """Returns the name of the player owning an occupied cell."""
        owner = self.owners[self.index(row, col)]
        if owner is None:
            raise EmptyCellError(row, col)
        return owner

    def set_card_at(self, player: Player, card: Card, row: int, col: int) -> 'Board':
        """Places a card owned by ``player``; an occupied cell leaves the board as is."""
        idx = self.index(row, col)
        if self.cards[idx] is not None:
            return self
        cards = list(self.cards)
        owners = list(self.owners)
        cards[idx] = card
        owners[idx] = player.name
        return Board(cards=tuple(cards), owners=tuple(owners))

    def set_cell_owner(self, player: Player, row: int, col: int) -> 'Board':
        """Hands an occupied cell over to ``player`` without touching its card."""
        idx = self.index(row, col)
        if self.cards[idx] is None or self.owners[idx] == player.name:
            return self
        owners = list(self.owners)
        owners[idx] = player.name
        return Board(cards=self.cards, owners=tuple(owners))

    def is_full(self) -> bool:
        return all(card is not None for card in self.cards)

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board."""
        for r in range(SIZE):
            for c in range(SIZE):
                yield (r, c)

    def cells(self) -> Iterator[Tuple[Coord, Optional[Card], Optional[str]]]:
        for (r, c) in self.coords():
            idx = r * SIZE + c
            yield (r, c), self.cards[idx], self.owners[idx]

    def neighbor(self, row: int, col: int, offset: Coord) -> Optional[Tuple[Coord, Card]]:
        """Returns the occupied neighbor in direction ``offset``, if any."""
        nr, nc = row + offset[0], col + offset[1]
        if not in_bounds(nr, nc):
            return None
        card = self.cards[nr * SIZE + nc]
        if card is None:
            return None
        return (nr, nc), card

    def tally(self, players: Sequence[Player]) -> Tuple[int, int]:
        """Counts owned cells for the first two players, in the order given."""
        def owned_by(i: int) -> int:
            if i >= len(players):
                return 0
            return sum(1 for _, _, owner in self.cells() if owner == players[i].name)

        return owned_by(0), owned_by(1)

    def _cell_lines(self, idx: int, signs: dict) -> List[str]:
        card = self.cards[idx]
        if card is None:
            return [_EMPTY_LINE, _EMPTY_LINE, _EMPTY_LINE]
        sign = signs.get(self.owners[idx], "?")
        t, r, b, l = (_strength_glyph(v) for v in card.edges())
        return [
            f"   {t}   |",
            f"{l}  {sign}  {r}|",
            f"   {b}   |",
        ]

    def pretty(self, players: Sequence[Player] = ()) -> str:
        """Generates the text rendering of the board.

        Rows are labelled 3 to 1 from the top, columns A to C. Each card shows
        its top, left, right and bottom strengths around the owner's sign:
        'o' for the first registered player, 'x' for the second.
        """
        signs = {p.name: sign for p, sign in zip(players, OWNER_SIGNS)}
        out: List[str] = ["", _SEPARATOR]
        for row in range(SIZE):
            lines = ["  |", f"{SIZE - row} |", "  |"]
            for col in range(SIZE):
                for i, part in enumerate(self._cell_lines(row * SIZE + col, signs)):
                    lines[i] += part
            out.extend(lines)
            out.append(_SEPARATOR)
        out.append(_COLUMN_LABELS)
        return "\n".join(out) + "\n"
