"""
Player roster management and standings.
"""

from scorepad.logic.enums import PLAYER_PALETTE, RankOrder
from scorepad.logic.ids import IdFactory, new_id
from scorepad.logic.ledger import clear_ledger
from scorepad.logic.rules import GameRules
from scorepad.logic.state import GameState, Player

DEFAULT_NAME_PREFIX = "Speler"


def default_player_name(position: int) -> str:
    """Name given to the player joining at 1-based ``position``."""
    return f"{DEFAULT_NAME_PREFIX} {position}"


def _clean_name(name: str | None) -> str | None:
    if name is None:
        return None
    return name.strip() or None


def add_player(
    state: GameState,
    name: str | None = None,
    id_factory: IdFactory = new_id,
) -> tuple[GameState, Player]:
    """
    Return new state with a player appended to the roster, and the player.

    Without a name the player is called "Speler <n>". The color is taken from
    the palette by the roster length at join time and never reassigned.
    """
    count = len(state.players)
    player = Player(
        id=id_factory(),
        name=_clean_name(name) or default_player_name(count + 1),
        color=PLAYER_PALETTE[count % len(PLAYER_PALETTE)],
    )
    return state.model_copy(update={"players": (*state.players, player)}), player


def _clamp_active_index(active_index: int, removed_index: int, remaining: int) -> int:
    if remaining == 0:
        return 0
    if removed_index < active_index:
        return active_index - 1
    # the next player in order takes over when the active one leaves
    return active_index % remaining


def remove_player(state: GameState, player_id: str) -> GameState:
    """
    Return new state without the player and its ledger.

    Unknown ids leave the state unchanged. The active player stays active when
    someone else is removed.
    """
    index = state.index_of(player_id)
    if index is None:
        return state
    players = state.players[:index] + state.players[index + 1 :]
    return state.model_copy(
        update={
            "players": players,
            "active_index": _clamp_active_index(state.active_index, index, len(players)),
        }
    )


def rename_player(state: GameState, player_id: str, name: str) -> GameState:
    """Return new state with the player renamed; blank names become the placeholder."""
    index = state.index_of(player_id)
    if index is None:
        return state
    players = list(state.players)
    players[index] = players[index].model_copy(update={"name": _clean_name(name) or DEFAULT_NAME_PREFIX})
    return state.model_copy(update={"players": tuple(players)})


def reset_all_ledgers(state: GameState) -> GameState:
    """Return new state with every ledger emptied; ids, names and colors are kept."""
    players = tuple(player.model_copy(update={"ledger": clear_ledger(player.ledger)}) for player in state.players)
    return state.model_copy(update={"players": players})


def standings(state: GameState, rules: GameRules) -> tuple[Player, ...]:
    """
    Return players sorted by total.

    Lowest first or highest first depending on the game; the sort is stable,
    so tied players keep their roster order.
    """
    descending = rules.rank_order == RankOrder.HIGHEST_FIRST
    return tuple(sorted(state.players, key=lambda p: p.total, reverse=descending))


def rank_of(state: GameState, rules: GameRules, player_id: str) -> int | None:
    """Return the 1-based position of the player in the standings, or None if absent."""
    for position, player in enumerate(standings(state, rules), start=1):
        if player.id == player_id:
            return position
    return None
