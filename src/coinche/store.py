"""
Match store and command entry points for the session layer.

The store is an explicit object owned by the caller (one per server, or one per
test); the engine keeps no global registry. Commands on one match run one at a
time under that match's lock; different matches never share state.

Each entry point answers ``{ok}`` or ``{ok, error}`` through a CommandResult,
and on success carries the fresh snapshot to broadcast.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List

from .contract import Declaration
from .deck import Card
from .game import Match, MatchConfig
from .results import CommandResult, ErrorKind, reject
from .snapshot import match_to_dict

logger = logging.getLogger(__name__)

MatchId = str


@dataclass
class _Entry:
    match: Match
    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass
class MatchStore:
    """Collection of in-progress matches keyed by id."""

    entries: Dict[MatchId, _Entry] = field(default_factory=dict)
    # guards ``entries``; each match keeps its own lock for commands
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def create(self, config: MatchConfig | None = None, match_id: MatchId | None = None) -> MatchId:
        """Create and start a match (seating is already settled by the caller)."""
        match = Match(config)
        match.start()
        return self.add(match, match_id)

    def add(self, match: Match, match_id: MatchId | None = None) -> MatchId:
        if match_id is None:
            match_id = uuid.uuid4().hex
        with self._lock:
            if match_id in self.entries:
                raise ValueError(f"Match id already in use: {match_id}")
            self.entries[match_id] = _Entry(match)
        logger.info("Match %s added (dealer=%d)", match_id, match.dealer)
        return match_id

    def _entry(self, match_id: MatchId) -> _Entry | None:
        with self._lock:
            return self.entries.get(match_id)

    def get(self, match_id: MatchId) -> Match:
        entry = self._entry(match_id)
        if entry is None:
            raise KeyError(match_id)
        return entry.match

    def remove(self, match_id: MatchId) -> None:
        with self._lock:
            self.entries.pop(match_id, None)

    def all_ids(self) -> List[MatchId]:
        with self._lock:
            return list(self.entries.keys())

    def __contains__(self, match_id: object) -> bool:
        return match_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MatchId]:
        return iter(self.all_ids())

    def run(self, match_id: MatchId, command: Callable[[Match], CommandResult]) -> CommandResult:
        """Apply ``command`` under the match lock; attach a snapshot on success."""
        entry = self._entry(match_id)
        if entry is None:
            logger.debug("Command for unknown match %s", match_id)
            return reject(ErrorKind.UNKNOWN_MATCH, "Match not found")
        with entry.lock:
            result = command(entry.match)
            if not result.ok:
                return result
            return result.with_snapshot(match_to_dict(entry.match))


def place_bid(
    store: MatchStore,
    match_id: MatchId,
    seat: int,
    value: int,
    declaration: Declaration | Dict[str, Any],
) -> CommandResult:
    return store.run(match_id, lambda m: m.place_bid(seat, value, declaration))


def pass_bid(store: MatchStore, match_id: MatchId, seat: int) -> CommandResult:
    return store.run(match_id, lambda m: m.pass_bid(seat))


def coinche(store: MatchStore, match_id: MatchId, seat: int) -> CommandResult:
    return store.run(match_id, lambda m: m.coinche(seat))


def surcoinche(store: MatchStore, match_id: MatchId, seat: int) -> CommandResult:
    return store.run(match_id, lambda m: m.surcoinche(seat))


def play_card(store: MatchStore, match_id: MatchId, seat: int, card: Card | str) -> CommandResult:
    return store.run(match_id, lambda m: m.play_card(seat, card))


def snapshot(store: MatchStore, match_id: MatchId) -> Dict[str, Any] | None:
    """Full snapshot of a match, None for an unknown id."""
    entry = store._entry(match_id)
    if entry is None:
        return None
    with entry.lock:
        return match_to_dict(entry.match)


__all__ = [
    "MatchStore",
    "place_bid",
    "pass_bid",
    "coinche",
    "surcoinche",
    "play_card",
    "snapshot",
]
