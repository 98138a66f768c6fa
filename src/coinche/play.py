"""
Trick-taking: legal moves, winner, trick points.
Must overtake in the led suit if possible, else follow suit; when void under a
suit contract, must trump and overtrump a trump already on the table if possible.
"""
from __future__ import annotations

from .contract import Contract, ContractKind
from .deck import Card, Suit

Trick = list[tuple[int, Card]]  # (seat, card) in play order


def led_suit(trick: Trick) -> Suit | None:
    """Suit of the first card played, None for an empty trick."""
    if not trick:
        return None
    return trick[0][1].suit


# Legality compares point values only: a zero-point card never beats another.
def _highest(cards: list[Card], trump: bool) -> int | None:
    if not cards:
        return None
    return max(c.points(trump) for c in cards)


def _beats(card: Card, best: int | None, trump: bool) -> bool:
    return best is None or card.points(trump) > best


def legal_plays(hand: list[Card], contract: Contract, trick: Trick) -> list[Card]:
    """
    Cards from ``hand`` that may be played on ``trick`` (list of (seat, card)).
    Any card may be led.
    """
    if not trick:
        return list(hand)

    led = led_suit(trick)
    assert led is not None
    led_is_trump = contract.declaration.is_trump_suit(led)

    # Overtake in the led suit if you can
    best_led = _highest([c for _, c in trick if c.suit == led], led_is_trump)
    same_suit = [c for c in hand if c.suit == led]
    higher = [c for c in same_suit if _beats(c, best_led, led_is_trump)]
    if higher:
        return higher
    if same_suit:
        return same_suit

    if contract.kind is not ContractKind.SUIT:
        return list(hand)

    trumps = [c for c in hand if contract.is_trump(c)]
    if not trumps:
        return list(hand)
    best_trump = _highest([c for _, c in trick if contract.is_trump(c)], True)
    if best_trump is not None:
        over = [c for c in trumps if _beats(c, best_trump, True)]
        if over:
            return over
    return trumps


def is_legal(hand: list[Card], contract: Contract, trick: Trick, card: Card) -> bool:
    """True if ``card`` may be played from ``hand`` on ``trick``. Always true when leading."""
    if not trick:
        return True
    return card in legal_plays(hand, contract, trick)


def trick_winner(trick: Trick, contract: Contract) -> int:
    """
    Seat that wins a (complete or partial) trick.
    Suit contract: highest trump if any was played, else highest card of the led suit.
    All trump / no trump: highest card of the led suit under the trump / plain table.
    """
    if not trick:
        raise ValueError("Empty trick has no winner")
    led = led_suit(trick)
    if contract.kind is ContractKind.SUIT:
        trumps = [(seat, c) for seat, c in trick if contract.is_trump(c)]
        if trumps:
            return max(trumps, key=lambda t: t[1].strength(True))[0]
    led_is_trump = contract.kind is ContractKind.ALL_TRUMP
    followers = [(seat, c) for seat, c in trick if c.suit == led]
    return max(followers, key=lambda t: t[1].strength(led_is_trump))[0]


def trick_points(trick: Trick, contract: Contract) -> int:
    """Sum of card values: trump table for trump cards, plain table otherwise."""
    return sum(contract.card_points(c) for _, c in trick)
