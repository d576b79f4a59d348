from __future__ import annotations

from itertools import count
from typing import TYPE_CHECKING

import pytest

from scorepad.logic.enums import PLAYER_PALETTE, EntryKind, GameVariant
from scorepad.logic.rules import AMERIKAANS_JOKEREN_RULES, TIENDUIZEND_RULES
from scorepad.logic.state import GameState, Ledger, LedgerEntry, Player, SessionConfig
from scorepad.session.manager import GameSession
from scorepad.session.store import SessionStore
from shared.storage import InMemoryStorage

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


# ============================================================================
# Test State Builder Helpers
# ============================================================================


def sequential_ids(prefix: str = "id") -> Callable[[], str]:
    """Return an id factory producing prefix-1, prefix-2, ..."""
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


def create_entry(
    amount: int = 10,
    *,
    entry_id: str | None = None,
    sequence: int = 1,
    kind: EntryKind = EntryKind.NORMAL,
) -> LedgerEntry:
    """Create a LedgerEntry with sensible defaults for testing."""
    return LedgerEntry(id=entry_id or f"e-{sequence}-{amount}", sequence=sequence, amount=amount, kind=kind)


def create_player(
    position: int = 0,
    *,
    player_id: str | None = None,
    name: str | None = None,
    amounts: Sequence[int] = (),
    entries: Sequence[LedgerEntry] | None = None,
) -> Player:
    """Create a Player; amounts become normal entries numbered from 1."""
    pid = player_id or f"p{position + 1}"
    if entries is None:
        entries = [
            create_entry(amount, entry_id=f"{pid}-e{i}", sequence=i) for i, amount in enumerate(amounts, start=1)
        ]
    return Player(
        id=pid,
        name=name if name is not None else f"Player{position + 1}",
        color=PLAYER_PALETTE[position % len(PLAYER_PALETTE)],
        ledger=Ledger(entries=tuple(entries)),
    )


def create_state(  # noqa: PLR0913
    variant: GameVariant = GameVariant.AMERIKAANS_JOKEREN,
    *,
    players: Sequence[Player] | None = None,
    num_players: int = 3,
    current_round: int = 1,
    active_index: int = 0,
    config: SessionConfig | None = None,
    game_ended: bool = False,
    winner_id: str | None = None,
) -> GameState:
    """Create a GameState with sensible defaults for testing."""
    if players is None:
        players = [create_player(i) for i in range(num_players)]
    return GameState(
        variant=variant,
        players=tuple(players),
        current_round=current_round,
        active_index=active_index,
        config=config or SessionConfig(),
        game_ended=game_ended,
        winner_id=winner_id,
    )


@pytest.fixture
def jokeren_rules():
    return AMERIKAANS_JOKEREN_RULES


@pytest.fixture
def tienduizend_rules():
    return TIENDUIZEND_RULES


@pytest.fixture
def id_factory():
    return sequential_ids()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def jokeren_session(storage, id_factory):
    return GameSession(
        AMERIKAANS_JOKEREN_RULES,
        SessionStore(storage, AMERIKAANS_JOKEREN_RULES),
        id_factory=id_factory,
    )


@pytest.fixture
def tienduizend_session(storage, id_factory):
    return GameSession(
        TIENDUIZEND_RULES,
        SessionStore(storage, TIENDUIZEND_RULES),
        id_factory=id_factory,
    )
