"""
Coinche deck: 32 cards (4 suits × 8 ranks, 7 to Ace).
Point values depend on whether a card is trump (J=20, 9=14) or plain (A=11, 10=10).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Mapping


class Suit(Enum):
    """Pique, Cœur, Carreau, Trèfle. Values are the symbols used on the wire."""
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(IntEnum):
    """Ranks in natural order; the order only breaks ties between zero-point cards."""
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def label(self) -> str:
        return _RANK_LABELS[self]

    def __str__(self) -> str:
        return self.label


_RANK_LABELS = {
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}
_RANKS_BY_LABEL = {label: rank for rank, label in _RANK_LABELS.items()}
_SUITS_BY_LETTER = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}


def _point_table(values: Mapping[str, int]) -> dict[Rank, int]:
    table = {_RANKS_BY_LABEL[label]: points for label, points in values.items()}
    missing = [r.label for r in Rank if r not in table]
    if missing:
        raise ValueError(f"Point table is missing ranks: {missing}")
    return table


PLAIN_VALUES = _point_table({"A": 11, "10": 10, "K": 4, "Q": 3, "J": 2, "9": 0, "8": 0, "7": 0})
TRUMP_VALUES = _point_table({"J": 20, "9": 14, "A": 11, "10": 10, "K": 4, "Q": 3, "8": 0, "7": 0})


@dataclass(frozen=True)
class Card:
    """A single card; ``str(card)`` gives the wire form, e.g. ``10♠``."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank) or not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid card: rank={self.rank!r}, suit={self.suit!r}")

    def points(self, trump: bool) -> int:
        """Point value under the trump table if ``trump`` else the plain table."""
        return TRUMP_VALUES[self.rank] if trump else PLAIN_VALUES[self.rank]

    def strength(self, trump: bool) -> tuple[int, int]:
        """Trick-winner key within a suit: points first, natural rank for zero-point ties."""
        return (self.points(trump), int(self.rank))

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.value}"

    def __repr__(self) -> str:
        return str(self)


def parse_suit(text: str) -> Suit:
    """Parse a suit symbol (♠♥♦♣) or letter (S/H/D/C)."""
    s = text.strip()
    for suit in Suit:
        if s == suit.value:
            return suit
    try:
        return _SUITS_BY_LETTER[s.upper()]
    except KeyError:
        raise ValueError(f"Unknown suit: {text!r}") from None


def parse_card(text: str) -> Card:
    """
    Parse a card such as ``10♠``, ``J♥`` or ``qh``.
    Raises ValueError for anything that is not one of the 32 cards.
    """
    s = text.strip()
    if len(s) < 2:
        raise ValueError(f"Malformed card: {text!r}")
    suit = parse_suit(s[-1])
    rank = _RANKS_BY_LABEL.get(s[:-1].upper())
    if rank is None:
        raise ValueError(f"Unknown rank in card: {text!r}")
    return Card(rank, suit)


def make_deck_32() -> list[Card]:
    """Build the full 32-card deck, suit by suit."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]
