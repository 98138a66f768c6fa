"""Coinche rules engine (4 players, 2 partnerships, 32 cards)."""

__version__ = "0.1.0"

from .deck import Card, Rank, Suit, make_deck_32, parse_card, PLAIN_VALUES, TRUMP_VALUES
from .deal import deal_hands, Deal, left_of, team_of, next_dealer, first_to_bid
from .contract import Bid, Contract, ContractKind, Declaration
from .bidding import BiddingState, BiddingStatus
from .play import is_legal, legal_plays, led_suit, trick_winner, trick_points
from .scoring import HandSettlement, settle_hand, match_over, match_winner
from .results import CommandResult, ErrorKind
from .game import Match, MatchConfig, Phase
from .snapshot import match_to_dict, match_from_dict, match_to_json, match_from_json
from .store import MatchStore
