"""
Random baseline seats for simulations and tests.

A ``RandomSeat`` picks uniformly among the commands the engine would accept at
that moment (pass, a bid, coinche, surcoinche, or a legal card). It is a test
driver, not a playing strategy.

    match = run_random_match(seed=42)
    assert match.phase is Phase.ENDED
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List

from .bidding import BID_STEP, MIN_BID
from .contract import ContractKind, Declaration
from .deal import NUM_SEATS
from .deck import Suit
from .game import Match, MatchConfig, Phase
from .results import CommandResult

MAX_RANDOM_BID = 160
MAX_STEPS = 100_000

DECLARATIONS = [Declaration(ContractKind.SUIT, s) for s in Suit] + [
    Declaration(ContractKind.ALL_TRUMP),
    Declaration(ContractKind.NO_TRUMP),
]


@dataclass
class RandomSeat:
    """
    Seat that acts uniformly at random among currently accepted commands.

    Usage:
        seat = RandomSeat(seed=1)
        seat.act(match, match.turn)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def bidding_options(self, match: Match, seat: int) -> List[Callable[[], CommandResult]]:
        bidding = match.bidding
        options: List[Callable[[], CommandResult]] = [lambda: match.pass_bid(seat)]
        floor = MIN_BID if bidding.last_bid is None else bidding.last_bid.value + BID_STEP
        if floor <= MAX_RANDOM_BID and bidding.check_bid(seat, floor).ok:
            value = self._rng.randrange(floor, min(floor + 3 * BID_STEP, MAX_RANDOM_BID) + 1, BID_STEP)
            declaration = self._rng.choice(DECLARATIONS)
            options.append(lambda: match.place_bid(seat, value, declaration))
        if bidding.check_coinche(seat).ok:
            options.append(lambda: match.coinche(seat))
        if bidding.check_surcoinche(seat).ok:
            options.append(lambda: match.surcoinche(seat))
        return options

    def act(self, match: Match, seat: int) -> CommandResult:
        """Play one accepted command for ``seat`` (which must be the seat to act)."""
        if match.phase is Phase.BIDDING:
            return self._rng.choice(self.bidding_options(match, seat))()
        if match.phase is Phase.PLAYING:
            legal = match.legal_cards(seat)
            if not legal:
                raise ValueError(f"No legal card for seat {seat}")
            return match.play_card(seat, self._rng.choice(legal))
        raise ValueError(f"Nothing to do in phase {match.phase.value}")


def run_random_match(
    seed: int,
    config: MatchConfig | None = None,
    max_hands: int | None = None,
    on_step: Callable[[Match], None] | None = None,
) -> Match:
    """
    Play a match with four RandomSeats until it ends (or ``max_hands`` hands are settled).
    ``on_step`` is called after every accepted command.
    """
    match = Match(config or MatchConfig(seed=seed))
    match.start()
    seats = [RandomSeat(seed=seed * NUM_SEATS + i) for i in range(NUM_SEATS)]

    steps = 0
    while match.phase is not Phase.ENDED and steps < MAX_STEPS:
        if max_hands is not None and len(match.round_scores) >= max_hands:
            break
        seat = match.turn
        result = seats[seat].act(match, seat)
        if not result.ok:
            raise RuntimeError(f"Random seat {seat} produced a refused command: {result.error}")
        if on_step is not None:
            on_step(match)
        steps += 1
    return match


__all__ = ["RandomSeat", "run_random_match"]
