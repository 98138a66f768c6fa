"""
Distribution (deal) and seating for 4 players in two partnerships.
Seats 0..3 clockwise; even seats are team A (0), odd seats team B (1).
Each deal shuffles a fresh 32-card deck and gives 8 cards to every seat.
"""
from __future__ import annotations

import random
from typing import NamedTuple

from .deck import Card, make_deck_32

NUM_SEATS = 4
HAND_SIZE = 8
TEAM_A = 0
TEAM_B = 1
TEAM_NAMES = ("Team A", "Team B")


class Deal(NamedTuple):
    """Result of a deal. Hands are lists (mutated during play)."""
    hands: tuple[list[Card], list[Card], list[Card], list[Card]]  # indexed by seat
    dealer: int


def deal_hands(dealer: int, rng: random.Random | None = None) -> Deal:
    """
    Shuffle a full deck and deal 8 cards to each seat, starting left of the dealer.
    The deck is consumed: every card ends up in exactly one hand.
    """
    if rng is None:
        rng = random.Random()
    deck = make_deck_32()
    rng.shuffle(deck)

    hands: list[list[Card]] = [[], [], [], []]
    first = first_to_bid(dealer)
    for i in range(NUM_SEATS):
        seat = (first + i) % NUM_SEATS
        hands[seat] = deck[i * HAND_SIZE:(i + 1) * HAND_SIZE]

    return Deal(hands=(hands[0], hands[1], hands[2], hands[3]), dealer=dealer)


def is_seat(seat: object) -> bool:
    return isinstance(seat, int) and not isinstance(seat, bool) and 0 <= seat < NUM_SEATS


def left_of(seat: int) -> int:
    """Turn order successor: the seat to the left plays next."""
    return (seat + 1) % NUM_SEATS


def team_of(seat: int) -> int:
    return seat % 2


def other_team(team: int) -> int:
    return 1 - team


def partner_of(seat: int) -> int:
    return (seat + 2) % NUM_SEATS


def next_dealer(dealer: int) -> int:
    """Dealer rotates one seat clockwise every hand (0 -> 1 -> 2 -> 3 -> 0)."""
    return left_of(dealer)


def first_to_bid(dealer: int) -> int:
    """Player to the left of the dealer speaks first."""
    return left_of(dealer)
