"""Unit tests for ledger append/remove and derived totals."""

import pytest

from scorepad.logic.enums import EntryKind
from scorepad.logic.ledger import append_entry, clear_ledger, remove_entry
from scorepad.logic.state import Ledger
from scorepad.tests.conftest import create_entry, sequential_ids


class TestAppendEntry:
    def test_appends_to_end_in_call_order(self):
        ids = sequential_ids("e")
        ledger, _ = append_entry(Ledger(), EntryKind.NORMAL, 10, sequence=3, id_factory=ids)
        ledger, _ = append_entry(ledger, EntryKind.NORMAL, 20, sequence=1, id_factory=ids)

        assert [e.id for e in ledger.entries] == ["e-1", "e-2"]
        assert [e.sequence for e in ledger.entries] == [3, 1]

    def test_returns_created_entry(self):
        ledger, entry = append_entry(Ledger(), EntryKind.NORMAL, 25, sequence=2, id_factory=lambda: "x")

        assert entry.id == "x"
        assert entry.amount == 25
        assert entry.sequence == 2
        assert ledger.entries == (entry,)

    def test_does_not_modify_original(self):
        original = Ledger()
        append_entry(original, EntryKind.NORMAL, 10, sequence=1)

        assert original.entries == ()

    @pytest.mark.parametrize("kind", [EntryKind.ROUND_WINNER_ZERO, EntryKind.BUST])
    def test_zero_kinds_force_amount_to_zero(self, kind):
        ledger, entry = append_entry(Ledger(), kind, 45, sequence=1)

        assert entry.amount == 0
        assert ledger.total == 0

    def test_negative_amount_is_accepted(self):
        ledger, entry = append_entry(Ledger(), EntryKind.NORMAL, -50, sequence=1)

        assert entry.amount == -50
        assert ledger.total == -50


class TestRemoveEntry:
    def test_removes_matching_entry(self):
        ledger = Ledger(entries=(create_entry(5, entry_id="a"), create_entry(7, entry_id="b")))

        result = remove_entry(ledger, "a")

        assert [e.id for e in result.entries] == ["b"]
        assert result.total == 7

    def test_unknown_id_is_noop(self):
        ledger = Ledger(entries=(create_entry(5, entry_id="a"),))

        result = remove_entry(ledger, "missing")

        assert result is ledger

    def test_removing_twice_is_idempotent(self):
        ledger = Ledger(entries=(create_entry(5, entry_id="a"), create_entry(7, entry_id="b")))

        once = remove_entry(ledger, "a")
        twice = remove_entry(once, "a")

        assert twice == once


class TestTotals:
    def test_total_of_empty_ledger_is_zero(self):
        assert Ledger().total == 0

    def test_total_follows_every_append_and_remove(self):
        ids = sequential_ids("e")
        ledger = Ledger()
        amounts = [10, -3, 0, 250, 7]
        for seq, amount in enumerate(amounts, start=1):
            ledger, _ = append_entry(ledger, EntryKind.NORMAL, amount, seq, ids)
            assert ledger.total == sum(e.amount for e in ledger.entries)

        for entry_id in ["e-2", "e-4", "e-1"]:
            ledger = remove_entry(ledger, entry_id)
            assert ledger.total == sum(e.amount for e in ledger.entries)

        assert ledger.total == 7

    @pytest.mark.parametrize("amount", [0, 1, 95, -40, 9999])
    def test_append_then_remove_restores_total(self, amount):
        start = Ledger(entries=(create_entry(30, entry_id="a"), create_entry(12, entry_id="b")))

        ledger, entry = append_entry(start, EntryKind.NORMAL, amount, sequence=3)
        restored = remove_entry(ledger, entry.id)

        assert restored.total == start.total == 42

    def test_bust_counts_in_history_but_not_total(self):
        ledger, _ = append_entry(Ledger(), EntryKind.NORMAL, 300, sequence=1)
        ledger, _ = append_entry(ledger, EntryKind.BUST, 0, sequence=2)

        assert ledger.history_length == 2
        assert ledger.total == 300


class TestClearLedger:
    def test_clears_entries(self):
        ledger = Ledger(entries=(create_entry(5),))
        assert clear_ledger(ledger).entries == ()

    def test_empty_ledger_returned_as_is(self):
        ledger = Ledger()
        assert clear_ledger(ledger) is ledger
