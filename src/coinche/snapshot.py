"""
Match snapshots for broadcast and replay.

Exports a Match to a JSON-compatible dict holding everything the engine knows,
every seat's hand included; hiding other seats' hands is up to the caller.
Snapshots can be loaded back into an equivalent Match.
"""
from __future__ import annotations

import json
import random
from typing import Any, Dict

from .bidding import BiddingState
from .contract import Contract
from .deal import NUM_SEATS
from .deck import parse_card
from .game import Match, MatchConfig, Phase
from .play import led_suit
from .scoring import HandSettlement

SCHEMA_VERSION = 1


def _settlement_to_dict(s: HandSettlement) -> Dict[str, Any]:
    return {
        "deltas": list(s.deltas),
        "made": s.made,
        "contractTeam": s.contract_team,
        "contractPoints": s.contract_points,
        "defencePoints": s.defence_points,
        "winningTeam": s.winning_team,
    }


def _settlement_from_dict(d: Dict[str, Any]) -> HandSettlement:
    return HandSettlement(
        deltas=(int(d["deltas"][0]), int(d["deltas"][1])),
        made=bool(d["made"]),
        contract_team=int(d["contractTeam"]),
        contract_points=int(d["contractPoints"]),
        defence_points=int(d["defencePoints"]),
    )


def match_to_dict(match: Match) -> Dict[str, Any]:
    """
    Serialize a Match to a JSON-compatible dict.

    Args:
        match: The match to serialize.

    Returns:
        Dict with schema_version, phase, turn, seats, scores, contract, bidding,
        current trick, live hand points, hands and the activity log.
    """
    led = led_suit(match.current_trick)
    return {
        "schema_version": SCHEMA_VERSION,
        "phase": match.phase.value,
        "turn": match.turn,
        "dealer": match.dealer,
        "leader": match.leader,
        "handStarter": match.hand_starter,
        "trickLeader": match.trick_leader,
        "scores": list(match.scores),
        "roundScores": [list(r) for r in match.round_scores],
        "contract": match.contract.to_dict() if match.contract else None,
        "bidding": match.bidding.to_dict() if match.bidding else None,
        "currentTrick": [{"seat": seat, "card": str(card)} for seat, card in match.current_trick],
        "ledSuit": led.value if led else None,
        "handPoints": list(match.hand_points),
        "tricksPlayed": match.tricks_played,
        "lastTrickWinner": match.last_trick_winner,
        "lastHand": _settlement_to_dict(match.last_settlement) if match.last_settlement else None,
        "hands": [[str(c) for c in hand] for hand in match.hands],
        "winner": match.winner,
        "activity": list(match.activity),
    }


def match_from_dict(
    d: Dict[str, Any],
    *,
    config: MatchConfig | None = None,
    rng: random.Random | None = None,
) -> Match:
    """
    Deserialize a Match from a dict produced by match_to_dict.

    The random generator state is not part of a snapshot: future deals use
    ``rng`` (or a generator seeded from ``config``).
    """
    version = d.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported snapshot schema version: {version}")
    hands = d.get("hands", [])
    if len(hands) != NUM_SEATS:
        raise ValueError(f"Snapshot must hold {NUM_SEATS} hands, got {len(hands)}")

    match = Match(config or MatchConfig(dealer=int(d["dealer"])), rng=rng)
    match.phase = Phase(d["phase"])
    match.dealer = int(d["dealer"])
    match.leader = int(d["leader"])
    match.hand_starter = int(d["handStarter"])
    match.trick_leader = int(d.get("trickLeader", match.hand_starter))
    match.scores = [int(x) for x in d["scores"]]
    match.round_scores = [(int(a), int(b)) for a, b in d.get("roundScores", [])]
    match.contract = Contract.from_dict(d["contract"]) if d.get("contract") else None
    match.bidding = BiddingState.from_dict(d["bidding"]) if d.get("bidding") else None
    match.current_trick = [(int(t["seat"]), parse_card(t["card"])) for t in d.get("currentTrick", [])]
    match.hand_points = [int(x) for x in d.get("handPoints", [0, 0])]
    match.tricks_played = int(d.get("tricksPlayed", 0))
    match.last_trick_winner = d.get("lastTrickWinner")
    match.last_settlement = _settlement_from_dict(d["lastHand"]) if d.get("lastHand") else None
    match.hands = [[parse_card(c) for c in hand] for hand in hands]
    match.activity = [str(a) for a in d.get("activity", [])]
    return match


def match_to_json(match: Match) -> str:
    """Serialize a Match to a JSON string."""
    return json.dumps(match_to_dict(match), indent=2, ensure_ascii=False)


def match_from_json(s: str, *, rng: random.Random | None = None) -> Match:
    """Deserialize a Match from a JSON string."""
    return match_from_dict(json.loads(s), rng=rng)


__all__ = [
    "match_to_dict",
    "match_from_dict",
    "match_to_json",
    "match_from_json",
    "SCHEMA_VERSION",
]
