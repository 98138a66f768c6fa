"""
Match orchestration: deal → bid → play 8 tricks → settle → next hand, until a
team reaches 501.

A ``Match`` is driven one command at a time (bid, pass, coinche, surcoinche,
play card). Each command is validated completely before anything changes, and
answers with a ``CommandResult``. Matches share no state with each other.

Seating rules:
- the bidding leader is the seat left of the dealer; after four passes with no
  bid the deal is redone by the same dealer and the next seat after the
  previous bidding leader speaks first;
- the hand starter leads the first trick whoever wins the bidding; it stays
  the same for the next hand if its team won the hand, else moves left;
- the dealer moves one seat left after every settled hand.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .bidding import BiddingState, BiddingStatus
from .contract import Contract, Declaration
from .deal import (
    NUM_SEATS,
    TEAM_NAMES,
    deal_hands,
    first_to_bid,
    is_seat,
    left_of,
    next_dealer,
    team_of,
)
from .deck import Card, parse_card
from .play import legal_plays, trick_points, trick_winner
from .results import OK, CommandResult, ErrorKind, reject
from .scoring import (
    LAST_TRICK_BONUS,
    TRICKS_PER_HAND,
    HandSettlement,
    match_over,
    match_winner,
    settle_hand,
)

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    LOBBY = "lobby"
    BIDDING = "bidding"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass
class MatchConfig:
    """Per-match settings. The ruleset itself is fixed."""

    seed: int | None = None
    dealer: int | None = None  # drawn at random when None
    activity_limit: int | None = None  # keep only the most recent entries


class Match:
    """Full state of one match: scores, current hand, bidding or trick in play."""

    def __init__(self, config: MatchConfig | None = None, rng: random.Random | None = None):
        self.config = config or MatchConfig()
        self.rng = rng or random.Random(self.config.seed)
        if self.config.dealer is not None and not is_seat(self.config.dealer):
            raise ValueError(f"Invalid dealer seat: {self.config.dealer!r}")

        self.phase = Phase.LOBBY
        self.dealer: int = (
            self.config.dealer if self.config.dealer is not None else self.rng.randrange(NUM_SEATS)
        )
        self.leader: int = first_to_bid(self.dealer)  # bidding leader of the current deal
        self.hand_starter: int = self.leader
        self.trick_leader: int = self.hand_starter

        self.scores: list[int] = [0, 0]
        self.round_scores: list[tuple[int, int]] = []
        self.last_settlement: HandSettlement | None = None

        self.hands: list[list[Card]] = [[] for _ in range(NUM_SEATS)]
        self.bidding: BiddingState | None = None
        self.contract: Contract | None = None
        self.current_trick: list[tuple[int, Card]] = []
        self.hand_points: list[int] = [0, 0]
        self.tricks_played: int = 0
        self.last_trick_winner: int | None = None

        self.activity: list[str] = []

    # ---- Derived state ----

    @property
    def turn(self) -> int | None:
        """Seat expected to act, None outside bidding and play."""
        if self.phase is Phase.BIDDING and self.bidding is not None:
            return self.bidding.turn
        if self.phase is Phase.PLAYING:
            return (self.trick_leader + len(self.current_trick)) % NUM_SEATS
        return None

    @property
    def contract_team(self) -> int | None:
        return self.contract.team if self.contract is not None else None

    @property
    def winner(self) -> int | None:
        if self.phase is not Phase.ENDED:
            return None
        return match_winner(self.scores)

    def legal_cards(self, seat: int) -> list[Card]:
        """Cards ``seat`` may play right now (empty when it is not their turn to play)."""
        if self.phase is not Phase.PLAYING or seat != self.turn or self.contract is None:
            return []
        return legal_plays(self.hands[seat], self.contract, self.current_trick)

    # ---- Lifecycle ----

    def start(self) -> CommandResult:
        """Leave the lobby: first deal, bidding opens left of the dealer."""
        if self.phase is not Phase.LOBBY:
            return reject(ErrorKind.WRONG_PHASE, "Match already started")
        leader = first_to_bid(self.dealer)
        self.hand_starter = leader
        self._start_deal(leader)
        logger.info("Match started: dealer=%d, starter=%d", self.dealer, self.hand_starter)
        return OK

    # ---- Commands ----

    def place_bid(self, seat: int, value: int, declaration: Declaration | Dict[str, Any]) -> CommandResult:
        refused = self._check_actor(seat, Phase.BIDDING)
        if refused is not None:
            return refused
        if not isinstance(declaration, Declaration):
            try:
                declaration = Declaration.from_dict(declaration)
            except (ValueError, AttributeError) as exc:
                return self._rejected(seat, "bid", reject(ErrorKind.INVALID_BID, str(exc)))
        result = self.bidding.place_bid(seat, value, declaration)
        if not result.ok:
            return self._rejected(seat, "bid", result)
        self._record(f"Seat {seat} bids {value} {declaration}")
        return OK

    def pass_bid(self, seat: int) -> CommandResult:
        refused = self._check_actor(seat, Phase.BIDDING)
        if refused is not None:
            return refused
        coinched = self.bidding.status is BiddingStatus.COINCHED
        result = self.bidding.pass_bid(seat)
        if not result.ok:
            return self._rejected(seat, "pass", result)
        self._record(f"Seat {seat} passes")
        if coinched:
            self._record(f"Seat {seat} declines surcoinche")
        if self.bidding.status is BiddingStatus.CONCLUDED_REDEAL:
            self._redeal()
        elif self.bidding.status is BiddingStatus.CONCLUDED_WITH_CONTRACT:
            self._accept_contract()
        return OK

    def coinche(self, seat: int) -> CommandResult:
        refused = self._check_actor(seat, Phase.BIDDING)
        if refused is not None:
            return refused
        result = self.bidding.coinche(seat)
        if not result.ok:
            return self._rejected(seat, "coinche", result)
        self._record(f"Seat {seat} calls COINCHE (×2)")
        return OK

    def surcoinche(self, seat: int) -> CommandResult:
        refused = self._check_actor(seat, Phase.BIDDING)
        if refused is not None:
            return refused
        result = self.bidding.surcoinche(seat)
        if not result.ok:
            return self._rejected(seat, "surcoinche", result)
        self._record(f"Seat {seat} calls SURCOINCHE (×4)")
        self._accept_contract()
        return OK

    def play_card(self, seat: int, card: Card | str) -> CommandResult:
        refused = self._check_actor(seat, Phase.PLAYING)
        if refused is not None:
            return refused
        if not isinstance(card, Card):
            try:
                card = parse_card(card)
            except (ValueError, AttributeError) as exc:
                return self._rejected(seat, "play", reject(ErrorKind.INVALID_CARD, str(exc)))
        hand = self.hands[seat]
        if card not in hand:
            return self._rejected(seat, "play", reject(ErrorKind.CARD_NOT_IN_HAND, "Card not in hand"))
        if card not in legal_plays(hand, self.contract, self.current_trick):
            return self._rejected(
                seat, "play", reject(ErrorKind.ILLEGAL_PLAY, "Illegal play: you must follow, beat or (over)trump if possible")
            )

        hand.remove(card)
        self.current_trick.append((seat, card))
        logger.debug("Seat %d plays %s", seat, card)
        if len(self.current_trick) == NUM_SEATS:
            self._complete_trick()
        return OK

    # ---- Transitions ----

    def _check_actor(self, seat: int, phase: Phase) -> CommandResult | None:
        if self.phase is not phase:
            return reject(ErrorKind.WRONG_PHASE, f"Not {phase.value} phase")
        if not is_seat(seat):
            return reject(ErrorKind.INVALID_SEAT, f"Invalid seat: {seat!r}")
        if seat != self.turn:
            return reject(ErrorKind.NOT_YOUR_TURN, "Not your turn")
        return None

    def _rejected(self, seat: int, action: str, result: CommandResult) -> CommandResult:
        logger.debug("Rejected %s from seat %d: %s", action, seat, result.error)
        return result

    def _record(self, message: str) -> None:
        self.activity.append(message)
        limit = self.config.activity_limit
        if limit is not None and len(self.activity) > limit:
            del self.activity[: len(self.activity) - limit]
        logger.debug(message)

    def _start_deal(self, leader: int) -> None:
        deal = deal_hands(self.dealer, self.rng)
        self.hands = [list(h) for h in deal.hands]
        self.leader = leader
        self.bidding = BiddingState(leader=leader)
        self.contract = None
        self.current_trick = []
        self.hand_points = [0, 0]
        self.tricks_played = 0
        self.last_trick_winner = None
        self.trick_leader = self.hand_starter
        self.phase = Phase.BIDDING

    def _redeal(self) -> None:
        previous_leader = self.bidding.leader
        self._record("All players passed. Redealing and restarting bidding.")
        logger.info("All passed: redeal by dealer %d", self.dealer)
        self._start_deal(left_of(previous_leader))

    def _accept_contract(self) -> None:
        self.contract = self.bidding.contract()
        self.bidding = None
        self.hand_points = [0, 0]
        self.current_trick = []
        self.trick_leader = self.hand_starter
        self.phase = Phase.PLAYING
        self._record(f"Contract accepted: {self.contract} by Seat {self.contract.bidder}")
        logger.info("Contract %s by seat %d", self.contract, self.contract.bidder)

    def _complete_trick(self) -> None:
        winner = trick_winner(self.current_trick, self.contract)
        team = team_of(winner)
        points = trick_points(self.current_trick, self.contract)
        self.hand_points[team] += points
        self.tricks_played += 1
        self.last_trick_winner = winner
        self._record(f"{TEAM_NAMES[team]} won the trick (+{points})")

        self.current_trick = []
        self.trick_leader = winner
        if self.tricks_played == TRICKS_PER_HAND:
            self._settle_hand()

    def _settle_hand(self) -> None:
        bonus_team = team_of(self.last_trick_winner)
        self.hand_points[bonus_team] += LAST_TRICK_BONUS
        self._record(f"Last trick bonus: +{LAST_TRICK_BONUS} to {TEAM_NAMES[bonus_team]}")

        contract = self.contract
        settlement = settle_hand(contract, self.hand_points)
        self.last_settlement = settlement
        for team in (0, 1):
            self.scores[team] += settlement.deltas[team]
        self.round_scores.append(settlement.deltas)
        if settlement.made:
            self._record(
                f"Contract MADE by {TEAM_NAMES[settlement.contract_team]}: "
                f"+{settlement.contract_points} (tricks) + {contract.value} ×{contract.multiplier}"
            )
        else:
            self._record(
                f"Contract FAILED: defenders take "
                f"{settlement.contract_points + settlement.defence_points} (all tricks) "
                f"+ {contract.value} ×{contract.multiplier}"
            )
        logger.info(
            "Hand settled: contract %s %s, deltas=%s, scores=%s",
            contract, "made" if settlement.made else "failed", settlement.deltas, self.scores,
        )
        self.contract = None

        if match_over(self.scores):
            self.phase = Phase.ENDED
            self.bidding = None
            self._record(f"Game over. Final: Team A {self.scores[0]} – Team B {self.scores[1]}")
            logger.info("Match ended: scores=%s, winner=%s", self.scores, self.winner)
            return

        previous_starter = self.hand_starter
        if team_of(previous_starter) != settlement.winning_team:
            self.hand_starter = left_of(previous_starter)
        self.dealer = next_dealer(self.dealer)
        self._start_deal(first_to_bid(self.dealer))
        self._record("New hand: bidding restarted.")


__all__ = ["Match", "MatchConfig", "Phase"]
