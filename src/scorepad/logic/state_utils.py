"""
Immutable state update helpers using Pydantic model_copy.

These functions never mutate their input; they return new state objects with
the requested changes applied.
"""

from scorepad.logic.exceptions import PlayerNotFoundError
from scorepad.logic.state import GameState, Player


def require_player(state: GameState, player_id: str) -> Player:
    """Return the player with the given id, raising PlayerNotFoundError if absent."""
    player = state.find_player(player_id)
    if player is None:
        raise PlayerNotFoundError(player_id)
    return player


def update_player(
    state: GameState,
    player_id: str,
    **updates: object,
) -> GameState:
    """
    Return new state with the player's fields updated.

    Args:
        state: Current game state
        player_id: Id of the player to update
        **updates: Fields to update on the player

    Returns:
        New GameState with the updated player in the same roster position

    Raises:
        PlayerNotFoundError: If no player has that id

    """
    index = state.index_of(player_id)
    if index is None:
        raise PlayerNotFoundError(player_id)
    players = list(state.players)
    players[index] = state.players[index].model_copy(update=updates)
    return state.model_copy(update={"players": tuple(players)})


def mark_game_ended(state: GameState, winner_id: str | None = None) -> GameState:
    """Return new state flagged as ended, keeping an earlier winner if one was set."""
    if state.game_ended:
        return state
    return state.model_copy(update={"game_ended": True, "winner_id": winner_id})
