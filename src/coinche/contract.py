"""
Contracts: the trump regime and target named by the winning bid.
Kinds: one trump suit, all trump, no trump. Kinds are not ranked; bids raise the value only.
Multiplier: ×1, ×2 after coinche, ×4 after surcoinche.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .deal import team_of
from .deck import Card, Suit, parse_suit


class ContractKind(str, Enum):
    SUIT = "SUIT"
    ALL_TRUMP = "ALL_TRUMP"
    NO_TRUMP = "NO_TRUMP"


KIND_NAMES = {
    ContractKind.ALL_TRUMP: "All Trump",
    ContractKind.NO_TRUMP: "No Trump",
}

MULTIPLIERS = (1, 2, 4)


@dataclass(frozen=True)
class Declaration:
    """Trump regime of a bid. ``suit`` is required iff ``kind`` is SUIT."""

    kind: ContractKind
    suit: Suit | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ContractKind):
            raise ValueError(f"Invalid contract type: {self.kind!r}")
        if self.kind is ContractKind.SUIT:
            if not isinstance(self.suit, Suit):
                raise ValueError("A suit contract needs a suit")
        elif self.suit is not None:
            raise ValueError(f"{self.kind.value} contracts take no suit")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Declaration":
        """Build from the transport shape ``{"type": "SUIT", "suit": "♠"}``."""
        try:
            kind = ContractKind(d["type"])
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"Invalid contract: {d!r}") from None
        suit = d.get("suit")
        if kind is ContractKind.SUIT:
            if not isinstance(suit, str):
                raise ValueError("A suit contract needs a suit")
            return cls(kind, parse_suit(suit))
        if suit is not None:
            raise ValueError(f"{kind.value} contracts take no suit")
        return cls(kind)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"type": self.kind.value}
        if self.suit is not None:
            d["suit"] = self.suit.value
        return d

    def is_trump(self, card: Card) -> bool:
        """Every card under ALL_TRUMP, the trump suit under SUIT, nothing under NO_TRUMP."""
        if self.kind is ContractKind.ALL_TRUMP:
            return True
        if self.kind is ContractKind.SUIT:
            return card.suit == self.suit
        return False

    def is_trump_suit(self, suit: Suit) -> bool:
        if self.kind is ContractKind.ALL_TRUMP:
            return True
        return self.kind is ContractKind.SUIT and suit == self.suit

    def __str__(self) -> str:
        if self.kind is ContractKind.SUIT:
            return str(self.suit)
        return KIND_NAMES[self.kind]


@dataclass(frozen=True)
class Bid:
    seat: int
    value: int
    declaration: Declaration

    def to_dict(self) -> Dict[str, Any]:
        return {"seat": self.seat, "value": self.value, "contract": self.declaration.to_dict()}


@dataclass(frozen=True)
class Contract:
    """The contract in force for one hand (immutable until settlement)."""

    declaration: Declaration
    value: int
    bidder: int
    multiplier: int = 1

    def __post_init__(self) -> None:
        if self.multiplier not in MULTIPLIERS:
            raise ValueError(f"Invalid multiplier: {self.multiplier}")

    @property
    def kind(self) -> ContractKind:
        return self.declaration.kind

    @property
    def suit(self) -> Suit | None:
        return self.declaration.suit

    @property
    def team(self) -> int:
        return team_of(self.bidder)

    def is_trump(self, card: Card) -> bool:
        return self.declaration.is_trump(card)

    def card_points(self, card: Card) -> int:
        return card.points(self.is_trump(card))

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.declaration.to_dict(),
            "value": self.value,
            "bidderSeat": self.bidder,
            "mult": self.multiplier,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Contract":
        return cls(
            declaration=Declaration.from_dict(d),
            value=int(d["value"]),
            bidder=int(d["bidderSeat"]),
            multiplier=int(d.get("mult", 1)),
        )

    def __str__(self) -> str:
        label = f"{self.value} {self.declaration}"
        if self.multiplier > 1:
            label += f" ×{self.multiplier}"
        return label
