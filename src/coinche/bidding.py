"""
Bidding (enchères) for 4 players.
First to speak = left of dealer; bids start at 60 and rise by at least 10.
After a bid, three passes in a row end the bidding; four passes without any
bid cancel the deal. An opponent of the last bidder may coinche (×2); the next
player may then surcoinche (×4) or pass, and either ends the bidding.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from .contract import Bid, Contract, Declaration
from .deal import is_seat, left_of, team_of
from .results import OK, CommandResult, ErrorKind, reject

MIN_BID = 60
BID_STEP = 10
PASSES_TO_REDEAL = 4  # no bid yet
PASSES_TO_CLOSE = 3  # after a bid


class BiddingStatus(str, Enum):
    AWAITING_BID = "awaiting-bid"
    COINCHED = "coinched"
    CONCLUDED_WITH_CONTRACT = "concluded-with-contract"
    CONCLUDED_REDEAL = "concluded-redeal"


@dataclass
class BiddingState:
    """Mutable bidding round for one deal. Reset (re-created) at every deal."""

    leader: int
    turn: int = -1
    minimum: int = MIN_BID
    last_bid: Bid | None = None
    consecutive_passes: int = 0
    coinche_by: int | None = None
    surcoinche_by: int | None = None
    redeal: bool = False
    concluded: bool = False
    # (seat, action) where action is "pass", "coinche", "surcoinche" or the bid label
    history: list[tuple[int, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.turn < 0:
            self.turn = self.leader

    @property
    def status(self) -> BiddingStatus:
        if self.redeal:
            return BiddingStatus.CONCLUDED_REDEAL
        if self.concluded:
            return BiddingStatus.CONCLUDED_WITH_CONTRACT
        if self.coinche_by is not None:
            return BiddingStatus.COINCHED
        return BiddingStatus.AWAITING_BID

    @property
    def is_over(self) -> bool:
        return self.redeal or self.concluded

    @property
    def multiplier(self) -> int:
        if self.surcoinche_by is not None:
            return 4
        if self.coinche_by is not None:
            return 2
        return 1

    def contract(self) -> Contract:
        """The contract fixed by a concluded bidding."""
        if not self.concluded or self.last_bid is None:
            raise ValueError("Bidding has not produced a contract")
        return Contract(
            declaration=self.last_bid.declaration,
            value=self.last_bid.value,
            bidder=self.last_bid.seat,
            multiplier=self.multiplier,
        )

    def _check_turn(self, seat: int) -> CommandResult | None:
        if self.is_over:
            return reject(ErrorKind.WRONG_PHASE, "Bidding is over")
        if seat != self.turn:
            return reject(ErrorKind.NOT_YOUR_TURN, "Not your turn")
        return None

    def check_bid(self, seat: int, value: object) -> CommandResult:
        """Validate a bid without applying it."""
        refused = self._check_turn(seat)
        if refused is not None:
            return refused
        if self.coinche_by is not None:
            return reject(ErrorKind.BID_LOCKED, "Coinche active — no further raises")
        if not isinstance(value, int) or isinstance(value, bool) or value < self.minimum:
            return reject(ErrorKind.INVALID_BID, f"Min {self.minimum}")
        if value % BID_STEP != 0:
            return reject(ErrorKind.INVALID_BID, f"Bids go by {BID_STEP}")
        if self.last_bid is not None and value < self.last_bid.value + BID_STEP:
            return reject(ErrorKind.INVALID_BID, f"Raise by ≥{BID_STEP}")
        return OK

    def place_bid(self, seat: int, value: int, declaration: Declaration) -> CommandResult:
        result = self.check_bid(seat, value)
        if not result.ok:
            return result
        self.last_bid = Bid(seat=seat, value=value, declaration=declaration)
        self.consecutive_passes = 0
        self.history.append((seat, f"{value} {declaration}"))
        self.turn = left_of(self.turn)
        return OK

    def check_pass(self, seat: int) -> CommandResult:
        refused = self._check_turn(seat)
        return refused if refused is not None else OK

    def pass_bid(self, seat: int) -> CommandResult:
        """
        Pass. After a coinche this declines the surcoinche and closes the bidding.
        Check ``status`` afterwards for a concluded contract or a redeal.
        """
        result = self.check_pass(seat)
        if not result.ok:
            return result
        self.consecutive_passes += 1
        self.history.append((seat, "pass"))
        if self.coinche_by is not None and self.surcoinche_by is None:
            self.concluded = True
        elif self.last_bid is None and self.consecutive_passes >= PASSES_TO_REDEAL:
            self.redeal = True
        elif self.last_bid is not None and self.consecutive_passes >= PASSES_TO_CLOSE:
            self.concluded = True
        else:
            self.turn = left_of(self.turn)
        return OK

    def check_coinche(self, seat: int) -> CommandResult:
        refused = self._check_turn(seat)
        if refused is not None:
            return refused
        if self.last_bid is None:
            return reject(ErrorKind.COINCHE_NOT_ALLOWED, "No bid to coinche")
        if self.coinche_by is not None:
            return reject(ErrorKind.COINCHE_NOT_ALLOWED, "Already coinched")
        if team_of(seat) == team_of(self.last_bid.seat):
            return reject(ErrorKind.COINCHE_NOT_ALLOWED, "Only the opposing team may coinche")
        return OK

    def coinche(self, seat: int) -> CommandResult:
        result = self.check_coinche(seat)
        if not result.ok:
            return result
        self.coinche_by = seat
        self.consecutive_passes = 0
        self.history.append((seat, "coinche"))
        self.turn = left_of(self.turn)
        return OK

    def check_surcoinche(self, seat: int) -> CommandResult:
        # The seat after the coincher always belongs to the bidder's team,
        # so the turn check is the only team restriction.
        refused = self._check_turn(seat)
        if refused is not None:
            return refused
        if self.coinche_by is None:
            return reject(ErrorKind.SURCOINCHE_NOT_ALLOWED, "No coinche to surcoinche")
        if self.surcoinche_by is not None:
            return reject(ErrorKind.SURCOINCHE_NOT_ALLOWED, "Already surcoinched")
        return OK

    def surcoinche(self, seat: int) -> CommandResult:
        result = self.check_surcoinche(seat)
        if not result.ok:
            return result
        self.surcoinche_by = seat
        self.consecutive_passes = 0
        self.history.append((seat, "surcoinche"))
        self.concluded = True
        return OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min": self.minimum,
            "leader": self.leader,
            "turn": self.turn,
            "lastBid": self.last_bid.to_dict() if self.last_bid else None,
            "consecutivePasses": self.consecutive_passes,
            "coincheBy": self.coinche_by,
            "surcoincheBy": self.surcoinche_by,
            "status": self.status.value,
            "history": [[seat, action] for seat, action in self.history],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BiddingState":
        leader, turn = d["leader"], d["turn"]
        if not is_seat(leader) or not is_seat(turn):
            raise ValueError(f"Invalid bidding seats: leader={leader!r}, turn={turn!r}")
        last = d.get("lastBid")
        status = BiddingStatus(d.get("status", BiddingStatus.AWAITING_BID.value))
        return cls(
            leader=leader,
            turn=turn,
            minimum=int(d.get("min", MIN_BID)),
            last_bid=(
                Bid(int(last["seat"]), int(last["value"]), Declaration.from_dict(last["contract"]))
                if last
                else None
            ),
            consecutive_passes=int(d.get("consecutivePasses", 0)),
            coinche_by=d.get("coincheBy"),
            surcoinche_by=d.get("surcoincheBy"),
            redeal=status is BiddingStatus.CONCLUDED_REDEAL,
            concluded=status is BiddingStatus.CONCLUDED_WITH_CONTRACT,
            history=[(int(seat), str(action)) for seat, action in d.get("history", [])],
        )
