"""Unit tests for state model validation and read-only views."""

import pytest
from pydantic import ValidationError

from scorepad.logic.enums import EntryKind, GameVariant, PlayerColor
from scorepad.logic.state import GameState, Ledger, LedgerEntry, Player, SessionConfig
from scorepad.tests.conftest import create_entry, create_player, create_state


class TestLedgerEntry:
    def test_round_winner_entry_with_points_is_rejected(self):
        with pytest.raises(ValidationError, match="must have amount 0"):
            LedgerEntry(id="x", sequence=1, amount=15, kind=EntryKind.ROUND_WINNER_ZERO)

    def test_bust_entry_with_points_is_rejected(self):
        with pytest.raises(ValidationError, match="must have amount 0"):
            LedgerEntry(id="x", sequence=1, amount=100, kind=EntryKind.BUST)

    def test_entries_are_frozen(self):
        entry = create_entry(10)
        with pytest.raises(ValidationError):
            entry.amount = 20


class TestRecentEntries:
    def _ledger(self, count: int) -> Ledger:
        return Ledger(entries=tuple(create_entry(i, entry_id=f"e{i}", sequence=i) for i in range(1, count + 1)))

    def test_most_recent_first(self):
        recent = self._ledger(5).recent_entries(3)

        assert [e.id for e in recent] == ["e5", "e4", "e3"]

    def test_limit_larger_than_history(self):
        recent = self._ledger(2).recent_entries(10)

        assert [e.id for e in recent] == ["e2", "e1"]
        assert len(recent) == 2

    def test_can_be_iterated_more_than_once(self):
        recent = self._ledger(4).recent_entries(2)

        assert list(recent) == list(recent)
        assert len(list(recent)) == 2

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_yields_nothing(self, limit):
        recent = self._ledger(3).recent_entries(limit)

        assert list(recent) == []
        assert len(recent) == 0

    def test_does_not_change_ledger(self):
        ledger = self._ledger(3)
        list(ledger.recent_entries(2))

        assert [e.id for e in ledger.entries] == ["e1", "e2", "e3"]


class TestPlayer:
    def test_total_is_derived_from_ledger(self):
        player = create_player(0, amounts=[10, 15, 5])
        assert player.total == 30

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValidationError):
            Player(id="p", name="", color=PlayerColor.RED)


class TestSessionConfig:
    def test_defaults(self):
        config = SessionConfig()
        assert config.max_rounds == 10
        assert config.max_points == 500

    @pytest.mark.parametrize(("field", "value"), [("max_rounds", 0), ("max_points", 99), ("max_rounds", 100)])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            SessionConfig(**{field: value})


class TestGameState:
    def test_duplicate_player_ids_rejected(self):
        players = (create_player(0, player_id="same"), create_player(1, player_id="same"))
        with pytest.raises(ValidationError, match="unique"):
            GameState(variant=GameVariant.TIENDUIZEND, players=players)

    def test_active_index_must_be_in_range(self):
        with pytest.raises(ValidationError, match="out of range"):
            create_state(GameVariant.TIENDUIZEND, num_players=2, active_index=2)

    def test_active_index_unchecked_without_players(self):
        state = GameState(variant=GameVariant.TIENDUIZEND)
        assert state.active_player is None

    def test_find_player_and_index(self):
        state = create_state(num_players=3)

        assert state.find_player("p2").name == "Player2"
        assert state.index_of("p3") == 2
        assert state.find_player("nope") is None
        assert state.index_of("nope") is None

    def test_active_player(self):
        state = create_state(GameVariant.TIENDUIZEND, num_players=3, active_index=1)
        assert state.active_player.id == "p2"
