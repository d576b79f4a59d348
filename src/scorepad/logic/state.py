"""
Immutable session state models.

Every model is a frozen pydantic model. Operations in roster.py and turn.py
return new state objects; a player's total is always folded from its ledger
and never stored.
"""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scorepad.logic.enums import ZERO_ENTRY_KINDS, EndCondition, EntryKind, GameVariant, PlayerColor

if TYPE_CHECKING:
    from collections.abc import Iterator

MIN_ROUNDS = 1
MAX_ROUNDS = 99
DEFAULT_MAX_ROUNDS = 10
MIN_POINTS = 100
MAX_POINTS = 9999
DEFAULT_MAX_POINTS = 500


class LedgerEntry(BaseModel):
    """
    One scoring event. Immutable; only ever appended or deleted.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    sequence: int  # round number or turn number, for display
    amount: int
    kind: EntryKind = EntryKind.NORMAL

    @model_validator(mode="after")
    def _zero_kinds_carry_no_points(self) -> Self:
        if self.kind in ZERO_ENTRY_KINDS and self.amount != 0:
            raise ValueError(f"{self.kind.value} entries must have amount 0, got {self.amount}")
        return self


class RecentEntries:
    """Most-recent-first view over at most ``limit`` ledger entries.

    Each iteration starts over from the newest entry.
    """

    def __init__(self, entries: tuple[LedgerEntry, ...], limit: int) -> None:
        self._entries = entries
        self._limit = max(limit, 0)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return islice(reversed(self._entries), self._limit)

    def __len__(self) -> int:
        return min(self._limit, len(self._entries))


class Ledger(BaseModel):
    """Ordered scoring history of one player. Insertion order is chronological."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[LedgerEntry, ...] = ()

    @property
    def total(self) -> int:
        return sum(entry.amount for entry in self.entries)

    @property
    def history_length(self) -> int:
        return len(self.entries)

    def recent_entries(self, limit: int) -> RecentEntries:
        return RecentEntries(self.entries, limit)

    def find_entry(self, entry_id: str) -> LedgerEntry | None:
        return next((entry for entry in self.entries if entry.id == entry_id), None)


class Player(BaseModel):
    """
    A named, colored participant owning one ledger.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1)
    color: PlayerColor
    ledger: Ledger = Field(default_factory=Ledger)

    @property
    def total(self) -> int:
        return self.ledger.total


class SessionConfig(BaseModel):
    """End-condition settings. Only the descending-score game uses them."""

    model_config = ConfigDict(frozen=True)

    end_condition: EndCondition = EndCondition.NONE
    max_rounds: int = Field(default=DEFAULT_MAX_ROUNDS, ge=MIN_ROUNDS, le=MAX_ROUNDS)
    max_points: int = Field(default=DEFAULT_MAX_POINTS, ge=MIN_POINTS, le=MAX_POINTS)


class GameState(BaseModel):
    """
    Full session snapshot for one game variant.

    current_round is the round being played (descending-score game).
    active_index points at the player whose turn it is (ascending-score game).
    game_ended is sticky: only a new game clears it.
    """

    model_config = ConfigDict(frozen=True)

    variant: GameVariant
    players: tuple[Player, ...] = ()
    current_round: int = Field(default=1, ge=1)
    active_index: int = Field(default=0, ge=0)
    config: SessionConfig = Field(default_factory=SessionConfig)
    game_ended: bool = False
    winner_id: str | None = None

    @model_validator(mode="after")
    def _check_roster(self) -> Self:
        ids = [player.id for player in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("player ids must be unique")
        if self.players and self.active_index >= len(self.players):
            raise ValueError(f"active_index {self.active_index} out of range for {len(self.players)} players")
        return self

    def find_player(self, player_id: str) -> Player | None:
        return next((player for player in self.players if player.id == player_id), None)

    def index_of(self, player_id: str) -> int | None:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return None

    @property
    def active_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.active_index]
