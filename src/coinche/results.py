"""
Outcome of a player command.

Rule violations are expected events, not exceptions: every command returns a
``CommandResult`` that either reports success or carries the reason the command
was refused. A refused command never changes the match.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ErrorKind(str, Enum):
    WRONG_PHASE = "wrong_phase"
    NOT_YOUR_TURN = "not_your_turn"
    INVALID_SEAT = "invalid_seat"
    INVALID_BID = "invalid_bid"
    BID_LOCKED = "bid_locked"
    COINCHE_NOT_ALLOWED = "coinche_not_allowed"
    SURCOINCHE_NOT_ALLOWED = "surcoinche_not_allowed"
    INVALID_CARD = "invalid_card"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    ILLEGAL_PLAY = "illegal_play"
    UNKNOWN_MATCH = "unknown_match"


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    error: str | None = None
    kind: ErrorKind | None = None
    snapshot: Dict[str, Any] | None = None

    def __bool__(self) -> bool:
        return self.ok

    def with_snapshot(self, snapshot: Dict[str, Any]) -> "CommandResult":
        return CommandResult(ok=self.ok, error=self.error, kind=self.kind, snapshot=snapshot)

    def to_dict(self) -> Dict[str, Any]:
        """Acknowledgement shape sent back to the caller: ``{ok}`` or ``{ok, error}``."""
        d: Dict[str, Any] = {"ok": self.ok}
        if not self.ok:
            d["error"] = self.error
        return d


OK = CommandResult(ok=True)


def reject(kind: ErrorKind, error: str) -> CommandResult:
    return CommandResult(ok=False, error=error, kind=kind)


__all__ = ["CommandResult", "ErrorKind", "OK", "reject"]
