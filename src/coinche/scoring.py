"""
Score calculation at the end of a hand.
Made: contract team scores its points + value × multiplier, defence keeps its points.
Failed: contract team scores 0, defence takes every point of the hand + value × multiplier.
First team to 501 wins the match.
"""
from __future__ import annotations

from dataclasses import dataclass

from .contract import Contract
from .deal import TEAM_A, TEAM_B, other_team

LAST_TRICK_BONUS = 10
WINNING_SCORE = 501
TRICKS_PER_HAND = 8


@dataclass(frozen=True)
class HandSettlement:
    """Outcome of one hand: score deltas per team and who won it."""

    deltas: tuple[int, int]  # (team A, team B)
    made: bool
    contract_team: int
    contract_points: int
    defence_points: int

    @property
    def winning_team(self) -> int:
        """Contract team if made, else the defence (successful defence wins the hand)."""
        return self.contract_team if self.made else other_team(self.contract_team)


def settle_hand(contract: Contract, hand_points: tuple[int, int] | list[int]) -> HandSettlement:
    """
    hand_points: (team A, team B) points of the hand, last-trick bonus included.
    """
    contract_team = contract.team
    defence = other_team(contract_team)
    ct_pts = hand_points[contract_team]
    ot_pts = hand_points[defence]
    stake = contract.value * contract.multiplier

    deltas = [0, 0]
    made = ct_pts >= contract.value
    if made:
        deltas[contract_team] = ct_pts + stake
        deltas[defence] = ot_pts
    else:
        deltas[contract_team] = 0
        deltas[defence] = ct_pts + ot_pts + stake

    return HandSettlement(
        deltas=(deltas[TEAM_A], deltas[TEAM_B]),
        made=made,
        contract_team=contract_team,
        contract_points=ct_pts,
        defence_points=ot_pts,
    )


def match_over(scores: tuple[int, int] | list[int]) -> bool:
    return scores[TEAM_A] >= WINNING_SCORE or scores[TEAM_B] >= WINNING_SCORE


def match_winner(scores: tuple[int, int] | list[int]) -> int | None:
    """
    Team that reached 501, the higher total if both did.
    None while the match is running, or for equal totals past 501 (a draw).
    """
    if not match_over(scores):
        return None
    a, b = scores[TEAM_A], scores[TEAM_B]
    if a == b:
        return None
    return TEAM_A if a > b else TEAM_B
