"""
Command-line interface for simulating matches and checking card legality.

Usage examples (after installing the package):

    python -m coinche.cli simulate --matches 5 --seed 1
    python -m coinche.cli legal --contract SUIT --suit ♥ --hand "J♥ 7♠ A♦" --trick "10♠ 9♥"
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from .contract import Contract, ContractKind, Declaration
from .deal import TEAM_NAMES
from .deck import parse_card, parse_suit
from .play import legal_plays
from .simulate import run_random_match
from .snapshot import match_to_json


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play complete matches with random seats.",
    )
    parser.add_argument(
        "--matches",
        type=int,
        default=1,
        help="Number of matches to play.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed of the first match; match i uses seed + i.",
    )
    parser.add_argument(
        "--max-hands",
        type=int,
        default=None,
        help="Stop a match after this many settled hands.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final snapshot of each match as JSON.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    for i in range(args.matches):
        seed = args.seed + i
        match = run_random_match(seed=seed, max_hands=args.max_hands)
        if args.json:
            print(match_to_json(match))
            continue
        winner = match.winner
        print(
            f"[match {i + 1}/{args.matches}] seed={seed} "
            f"hands={len(match.round_scores)} "
            f"scores=A:{match.scores[0]} B:{match.scores[1]} "
            f"winner={TEAM_NAMES[winner] if winner is not None else '-'}",
            flush=True,
        )


def _add_legal_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "legal",
        help="List the cards a hand may play on a trick.",
    )
    parser.add_argument(
        "--contract",
        type=str,
        choices=[k.value for k in ContractKind],
        default=ContractKind.SUIT.value,
        help="Contract type.",
    )
    parser.add_argument(
        "--suit",
        type=str,
        default=None,
        help="Trump suit for a SUIT contract (♠♥♦♣ or S/H/D/C).",
    )
    parser.add_argument(
        "--hand",
        type=str,
        required=True,
        help='Cards in hand, space separated, e.g. "J♥ 7♠ A♦".',
    )
    parser.add_argument(
        "--trick",
        type=str,
        default="",
        help="Cards already played this trick, in order.",
    )
    parser.set_defaults(func=_cmd_legal)


def _cmd_legal(args: argparse.Namespace) -> None:
    kind = ContractKind(args.contract)
    suit = parse_suit(args.suit) if kind is ContractKind.SUIT and args.suit else None
    contract = Contract(Declaration(kind, suit), value=80, bidder=0)
    hand = [parse_card(c) for c in args.hand.split()]
    # Seats are irrelevant to legality; number the trick from seat 0.
    trick = [(i, parse_card(c)) for i, c in enumerate(args.trick.split())]
    print(" ".join(str(c) for c in legal_plays(hand, contract, trick)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coinche", description="Coinche rules engine CLI.")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for engine diagnostics.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_legal_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
