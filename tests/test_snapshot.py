"""Tests for match snapshots."""
import json
import random

import pytest

from coinche.contract import ContractKind, Declaration
from coinche.deck import Suit
from coinche.game import Match, MatchConfig, Phase
from coinche.simulate import run_random_match
from coinche.snapshot import (
    SCHEMA_VERSION,
    match_from_dict,
    match_from_json,
    match_to_dict,
    match_to_json,
)


def _mid_trick_match() -> Match:
    m = Match(MatchConfig(seed=3, dealer=3))
    m.start()
    m.place_bid(0, 80, Declaration(ContractKind.SUIT, Suit.SPADES))
    m.coinche(1)
    m.pass_bid(2)
    for _ in range(5):
        seat = m.turn
        m.play_card(seat, m.legal_cards(seat)[0])
    return m


def test_snapshot_shape():
    m = _mid_trick_match()
    d = match_to_dict(m)
    assert d["schema_version"] == SCHEMA_VERSION
    assert d["phase"] == "playing"
    assert d["turn"] == m.turn
    assert d["contract"] == {"type": "SUIT", "suit": "♠", "value": 80, "bidderSeat": 0, "mult": 2}
    assert d["bidding"] is None
    assert d["tricksPlayed"] == 1
    assert len(d["currentTrick"]) == 1
    assert d["ledSuit"] == d["currentTrick"][0]["card"][-1]
    assert [len(h) for h in d["hands"]] == [len(h) for h in m.hands]
    assert d["winner"] is None


def test_round_trip_dict_mid_bidding():
    m = Match(MatchConfig(seed=9, dealer=1))
    m.start()
    m.place_bid(2, 90, Declaration(ContractKind.ALL_TRUMP))
    m.pass_bid(3)
    d = match_to_dict(m)
    restored = match_from_dict(d)
    assert restored.phase is Phase.BIDDING
    assert restored.bidding == m.bidding
    assert match_to_dict(restored) == d


def test_round_trip_json_and_continue_playing():
    m = _mid_trick_match()
    s = match_to_json(m)
    json.loads(s)
    assert "♠" in s
    restored = match_from_json(s, rng=random.Random(0))
    assert match_to_dict(restored) == match_to_dict(m)

    for _ in range(10):
        seat = m.turn
        card = m.legal_cards(seat)[0]
        assert restored.legal_cards(seat)[0] == card
        assert m.play_card(seat, card).ok
        assert restored.play_card(seat, card).ok
    assert match_to_dict(restored) == match_to_dict(m)


def test_round_trip_finished_match():
    m = run_random_match(seed=4)
    d = match_to_dict(m)
    assert d["phase"] == "ended"
    assert d["winner"] == m.winner
    assert d["lastHand"]["deltas"] == list(m.last_settlement.deltas)
    restored = match_from_dict(d)
    assert restored.last_settlement == m.last_settlement
    assert restored.round_scores == m.round_scores
    assert match_to_dict(restored) == d


def test_rejects_unknown_schema_version():
    d = match_to_dict(_mid_trick_match())
    d["schema_version"] = SCHEMA_VERSION + 1
    with pytest.raises(ValueError):
        match_from_dict(d)


def test_rejects_missing_hands():
    d = match_to_dict(_mid_trick_match())
    d["hands"] = d["hands"][:3]
    with pytest.raises(ValueError):
        match_from_dict(d)
