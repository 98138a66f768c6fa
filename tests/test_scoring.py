"""Tests for hand settlement and the match-end condition."""
from coinche.contract import Contract, ContractKind, Declaration
from coinche.deck import Suit
from coinche.scoring import match_over, match_winner, settle_hand


def _contract(value=80, bidder=0, multiplier=1):
    return Contract(Declaration(ContractKind.SUIT, Suit.SPADES), value=value, bidder=bidder, multiplier=multiplier)


def test_made_contract():
    s = settle_hand(_contract(80), (90, 72))
    assert s.made
    assert s.deltas == (170, 72)
    assert s.winning_team == 0


def test_failed_contract_defence_sweeps():
    s = settle_hand(_contract(80), (60, 92))
    assert not s.made
    assert s.deltas == (0, 232)
    assert s.winning_team == 1


def test_contract_by_team_b():
    s = settle_hand(_contract(100, bidder=3), (52, 110))
    assert s.made
    assert s.contract_team == 1
    assert s.deltas == (52, 210)


def test_exactly_reaching_target_is_made():
    s = settle_hand(_contract(90), (90, 72))
    assert s.made
    assert s.deltas == (180, 72)


def test_multiplier_applies_to_contract_value_only():
    made = settle_hand(_contract(100, multiplier=2), (110, 52))
    assert made.deltas == (110 + 200, 52)
    failed = settle_hand(_contract(100, multiplier=4), (70, 92))
    assert failed.deltas == (0, 162 + 400)


def test_match_end():
    assert not match_over((500, 480))
    assert match_winner((500, 480)) is None
    assert match_over((501, 0))
    assert match_winner((501, 0)) == 0
    assert match_winner((510, 620)) == 1
    assert match_winner((560, 560)) is None
