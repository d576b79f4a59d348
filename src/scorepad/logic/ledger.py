"""
Append and revoke operations on a single ledger.
"""

from scorepad.logic.enums import ZERO_ENTRY_KINDS, EntryKind
from scorepad.logic.ids import IdFactory, new_id
from scorepad.logic.state import Ledger, LedgerEntry


def append_entry(
    ledger: Ledger,
    kind: EntryKind,
    amount: int,
    sequence: int,
    id_factory: IdFactory = new_id,
) -> tuple[Ledger, LedgerEntry]:
    """
    Return a new ledger with one entry appended, and the entry itself.

    Round-winner and bust entries always record 0, whatever amount was passed.
    """
    if kind in ZERO_ENTRY_KINDS:
        amount = 0
    entry = LedgerEntry(id=id_factory(), sequence=sequence, amount=amount, kind=kind)
    return ledger.model_copy(update={"entries": (*ledger.entries, entry)}), entry


def remove_entry(ledger: Ledger, entry_id: str) -> Ledger:
    """Return a new ledger without the entry. Unknown ids leave it unchanged."""
    if ledger.find_entry(entry_id) is None:
        return ledger
    return ledger.model_copy(update={"entries": tuple(e for e in ledger.entries if e.id != entry_id)})


def clear_ledger(ledger: Ledger) -> Ledger:
    if not ledger.entries:
        return ledger
    return ledger.model_copy(update={"entries": ()})
