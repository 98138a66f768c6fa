"""End-to-end tests for the match state machine."""
import pytest

from coinche.contract import ContractKind, Declaration
from coinche.deal import first_to_bid, left_of, team_of
from coinche.deck import Suit, parse_card
from coinche.game import Match, MatchConfig, Phase
from coinche.results import ErrorKind

HEARTS = Declaration(ContractKind.SUIT, Suit.HEARTS)


def _started(dealer=3, seed=1, **kwargs):
    m = Match(MatchConfig(seed=seed, dealer=dealer, **kwargs))
    assert m.start().ok
    return m


def _bid_and_close(m, seat, value=80, declaration=HEARTS):
    """``seat`` bids when its turn comes, everybody else passes."""
    assert m.phase is Phase.BIDDING
    while m.turn != seat:
        assert m.pass_bid(m.turn).ok
    assert m.place_bid(seat, value, declaration).ok
    for _ in range(3):
        assert m.pass_bid(m.turn).ok
    assert m.phase is Phase.PLAYING


def _play_hand(m, on_last=None):
    """Play the first legal card at every turn until the hand is settled."""
    for n in range(32):
        if n == 31 and on_last is not None:
            on_last(m)
        seat = m.turn
        assert m.play_card(seat, m.legal_cards(seat)[0]).ok


def _fix_points(points):
    """Set the hand points just before the last card so the outcome is known."""
    def fix(m):
        m.hand_points = list(points)
    return fix


def test_invalid_dealer_rejected():
    with pytest.raises(ValueError):
        Match(MatchConfig(dealer=4))


def test_lobby_rejects_commands():
    m = Match(MatchConfig(seed=0, dealer=0))
    assert m.phase is Phase.LOBBY
    assert m.turn is None
    assert m.pass_bid(1).kind is ErrorKind.WRONG_PHASE
    assert m.play_card(1, "A♠").kind is ErrorKind.WRONG_PHASE


def test_start_deals_and_opens_bidding():
    m = _started(dealer=2)
    assert m.phase is Phase.BIDDING
    assert m.turn == 3
    assert m.leader == 3
    assert m.hand_starter == 3
    assert all(len(h) == 8 for h in m.hands)
    assert m.start().kind is ErrorKind.WRONG_PHASE


def test_dealer_drawn_from_seed():
    a = Match(MatchConfig(seed=5))
    b = Match(MatchConfig(seed=5))
    assert a.dealer == b.dealer


def test_actor_checks():
    m = _started(dealer=3)
    assert m.play_card(0, m.hands[0][0]).kind is ErrorKind.WRONG_PHASE
    assert m.pass_bid(4).kind is ErrorKind.INVALID_SEAT
    assert m.pass_bid("0").kind is ErrorKind.INVALID_SEAT
    assert m.pass_bid(2).kind is ErrorKind.NOT_YOUR_TURN
    assert m.turn == 0


def test_bid_with_transport_declaration():
    m = _started(dealer=3)
    assert m.place_bid(0, 90, {"type": "NO_TRUMP"}).ok
    assert m.bidding.last_bid.declaration.kind is ContractKind.NO_TRUMP
    bad = m.place_bid(1, 100, {"type": "SUIT"})
    assert bad.kind is ErrorKind.INVALID_BID
    assert m.place_bid(1, 100, {"type": "SUIT", "suit": "♣"}).ok
    assert m.activity[-1] == "Seat 1 bids 100 ♣"


def test_all_pass_redeals_with_same_dealer():
    m = _started(dealer=3)
    before = [list(h) for h in m.hands]
    for seat in (0, 1, 2, 3):
        assert m.pass_bid(seat).ok
    assert m.phase is Phase.BIDDING
    assert m.dealer == 3
    assert m.leader == 1
    assert m.turn == 1
    assert m.hand_starter == 0
    assert m.hands != before
    assert "All players passed. Redealing and restarting bidding." in m.activity


def test_hand_after_redeal_reopens_left_of_new_dealer():
    m = _started(dealer=3)
    for seat in (0, 1, 2, 3):
        m.pass_bid(seat)
    assert (m.dealer, m.leader, m.hand_starter) == (3, 1, 0)

    _bid_and_close(m, seat=1)
    assert m.turn == 0
    _play_hand(m, on_last=_fix_points([0, 150]))

    assert m.last_settlement.made
    assert m.dealer == 0
    assert m.leader == first_to_bid(m.dealer)
    assert m.turn == m.leader
    # Team B won the hand, so the starter moves on
    assert m.hand_starter == left_of(0)


def test_hand_starter_leads_whoever_wins_bidding():
    m = _started(dealer=3)
    _bid_and_close(m, seat=1)
    assert m.contract.bidder == 1
    assert m.contract_team == 1
    assert m.turn == 0
    assert m.bidding is None


def test_coinche_and_surcoinche_through_match():
    m = _started(dealer=3)
    assert m.place_bid(0, 80, HEARTS).ok
    assert m.coinche(1).ok
    assert m.surcoinche(2).ok
    assert m.phase is Phase.PLAYING
    assert m.contract.multiplier == 4
    assert m.activity[-2] == "Seat 2 calls SURCOINCHE (×4)"


def test_declining_surcoinche_is_recorded():
    m = _started(dealer=3)
    m.place_bid(0, 80, HEARTS)
    m.coinche(1)
    assert m.pass_bid(2).ok
    assert m.contract.multiplier == 2
    assert "Seat 2 declines surcoinche" in m.activity


def test_rejected_plays_leave_state_unchanged():
    m = _started(dealer=3)
    _bid_and_close(m, seat=0)
    m.hands[0] = [parse_card(c) for c in "A♠ 7♣".split()]
    m.hands[1] = [parse_card(c) for c in "K♠ J♥".split()]
    assert m.play_card(0, "A♠").ok
    snapshot = ([list(h) for h in m.hands], list(m.current_trick), m.turn)

    illegal = m.play_card(1, "J♥")
    assert illegal.kind is ErrorKind.ILLEGAL_PLAY
    assert m.play_card(1, "Q♣").kind is ErrorKind.CARD_NOT_IN_HAND
    assert m.play_card(1, "ZZ").kind is ErrorKind.INVALID_CARD
    assert m.play_card(1, None).kind is ErrorKind.INVALID_CARD
    assert ([list(h) for h in m.hands], list(m.current_trick), m.turn) == snapshot

    assert m.legal_cards(1) == [parse_card("K♠")]
    assert m.legal_cards(2) == []
    assert m.play_card(1, "K♠").ok
    assert m.turn == 2


def test_hand_shrinks_by_one_per_play():
    m = _started(dealer=3)
    _bid_and_close(m, seat=0)
    seat = m.turn
    m.play_card(seat, m.legal_cards(seat)[0])
    assert len(m.hands[seat]) == 7
    assert sum(len(h) for h in m.hands) == 31


def test_full_hand_settles_and_rotates():
    m = _started(dealer=3)
    _bid_and_close(m, seat=0, value=80)
    _play_hand(m)

    s = m.last_settlement
    assert s is not None
    assert m.round_scores == [s.deltas]
    assert sum(s.deltas) == 162 + 80
    assert m.scores == list(s.deltas)
    assert s.contract_points + s.defence_points == 162
    assert m.contract is None

    assert m.phase is Phase.BIDDING
    assert m.dealer == 0
    assert m.leader == 1
    assert m.turn == 1
    expected_starter = 0 if team_of(0) == s.winning_team else 1
    assert m.hand_starter == expected_starter
    assert all(len(h) == 8 for h in m.hands)
    assert m.activity[-1] == "New hand: bidding restarted."


def test_match_ends_at_501():
    m = _started(dealer=3)
    _bid_and_close(m, seat=0, value=80)

    def near_the_end(match):
        match.scores = [500, 500]

    _play_hand(m, on_last=near_the_end)
    assert m.phase is Phase.ENDED
    assert m.turn is None
    assert m.bidding is None
    assert max(m.scores) >= 501
    assert m.winner in (0, 1)
    assert m.scores[m.winner] > m.scores[1 - m.winner]
    assert m.activity[-1].startswith("Game over.")
    assert m.pass_bid(0).kind is ErrorKind.WRONG_PHASE
    assert m.play_card(0, "A♠").kind is ErrorKind.WRONG_PHASE


def test_activity_limit():
    m = _started(dealer=3, activity_limit=3)
    for seat in (0, 1, 2, 3):
        m.pass_bid(seat)
    m.pass_bid(1)
    assert len(m.activity) == 3
    assert m.activity[-1] == "Seat 1 passes"


@pytest.mark.parametrize(
    "bidder, points, made, starter_after",
    [
        (0, [150, 0], True, 0),  # starter's team makes its contract: stays
        (0, [0, 150], False, 1),  # starter's team fails: moves left
        (1, [150, 0], False, 0),  # starter's team defends successfully: stays
        (1, [0, 150], True, 1),  # opponents make their contract: moves left
    ],
)
def test_next_hand_starter(bidder, points, made, starter_after):
    m = _started(dealer=3)
    assert m.hand_starter == 0
    _bid_and_close(m, seat=bidder)
    _play_hand(m, on_last=_fix_points(points))

    s = m.last_settlement
    assert s.made is made
    assert s.contract_team == team_of(bidder)
    assert m.hand_starter == starter_after
    assert m.dealer == 0
    assert m.leader == 1
