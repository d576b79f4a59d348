"""
Round and turn progression.

Round-based play (descending-score game): complete_round commits one entry per
player and moves to the next round. Rotating play (race game): record_score and
record_bust update one player's ledger and pass the turn on.

Functions raise GameRuleError subclasses when an operation does not apply; in
that case nothing has changed.
"""

from collections.abc import Mapping

import structlog

from scorepad.logic.enums import EntryKind, TurnPolicy
from scorepad.logic.exceptions import (
    GameEndedError,
    IncompleteRoundError,
    InvalidScoreError,
    UnsupportedActionError,
)
from scorepad.logic.ids import IdFactory, new_id
from scorepad.logic.ledger import append_entry, remove_entry
from scorepad.logic.roster import reset_all_ledgers
from scorepad.logic.rules import GameRules
from scorepad.logic.state import GameState
from scorepad.logic.state_utils import mark_game_ended, require_player, update_player
from scorepad.logic.win import evaluate_game_end

logger = structlog.get_logger()


def _require_policy(rules: GameRules, policy: TurnPolicy, action: str) -> None:
    if rules.turn_policy != policy:
        raise UnsupportedActionError(f"{action} is not available in {rules.variant.value}")


def _is_blank(raw: object) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def parse_amount(raw: object, *, max_digits: int) -> int:
    """
    Parse a submitted score as a non-negative whole number of at most max_digits digits.

    Accepts ints and strings of ASCII digits (surrounding whitespace ignored).

    Raises:
        InvalidScoreError: For anything else, including negatives and bools

    """
    if isinstance(raw, bool):
        raise InvalidScoreError(f"not a score: {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise InvalidScoreError(f"not a score: {raw!r}")

    if value < 0:
        raise InvalidScoreError(f"score must not be negative, got {value}")
    limit = 10**max_digits - 1
    if value > limit:
        raise InvalidScoreError(f"score {value} exceeds the maximum of {limit}")
    return value


def complete_round(
    state: GameState,
    rules: GameRules,
    submissions: Mapping[str, object],
    round_winner_id: str | None = None,
    id_factory: IdFactory = new_id,
) -> GameState:
    """
    Commit one round: append an entry for every player and advance the round.

    submissions maps player id to the entered amount (int or digit string;
    None or blank means not filled in). The round winner scores 0 whatever was
    entered for them and is exempt from the filled-in check. After committing,
    the game end is evaluated and the state flagged as ended when reached.

    Raises:
        UnsupportedActionError: If the game is not round-based
        GameEndedError: If the game has already ended
        IncompleteRoundError: If the roster is empty or a player has no value
        PlayerNotFoundError: If round_winner_id is not in the roster
        InvalidScoreError: If a submitted value is not a valid score

    """
    _require_policy(rules, TurnPolicy.ROUND, "complete_round")
    if evaluate_game_end(state, rules).ended:
        raise GameEndedError("game has ended; start a new game to keep scoring")
    if not state.players:
        raise IncompleteRoundError("a round needs at least one player")
    if round_winner_id is not None:
        require_player(state, round_winner_id)

    amounts: dict[str, int] = {}
    missing: list[str] = []
    for player in state.players:
        if player.id == round_winner_id:
            amounts[player.id] = 0
            continue
        raw = submissions.get(player.id)
        if _is_blank(raw):
            missing.append(player.name)
            continue
        amounts[player.id] = parse_amount(raw, max_digits=rules.max_entry_digits)

    if missing:
        raise IncompleteRoundError(f"no score entered for {', '.join(missing)}")

    players = []
    for player in state.players:
        kind = EntryKind.ROUND_WINNER_ZERO if player.id == round_winner_id else EntryKind.NORMAL
        ledger, _ = append_entry(player.ledger, kind, amounts[player.id], state.current_round, id_factory)
        players.append(player.model_copy(update={"ledger": ledger}))

    new_state = state.model_copy(update={"players": tuple(players), "current_round": state.current_round + 1})

    outcome = evaluate_game_end(new_state, rules)
    if outcome.ended:
        new_state = mark_game_ended(new_state)
    logger.debug("round completed", round=state.current_round, ended=outcome.ended)
    return new_state


def advance_turn(state: GameState) -> GameState:
    """Return new state with the next player active. No-op without players."""
    if not state.players:
        return state
    return state.model_copy(update={"active_index": (state.active_index + 1) % len(state.players)})


def record_score(
    state: GameState,
    rules: GameRules,
    player_id: str,
    raw_amount: object,
    id_factory: IdFactory = new_id,
) -> GameState:
    """
    Add a scored amount to a player's ledger and pass the turn on.

    An amount of 0 cancels the entry: the ledger is left alone but the turn
    still passes. When the new total reaches the target score the game ends with
    this player as winner and the turn stays put; an ended game never reopens.

    Raises:
        UnsupportedActionError: If the game is not turn-based
        PlayerNotFoundError: If the player is not in the roster
        InvalidScoreError: If the amount is not a valid score

    """
    _require_policy(rules, TurnPolicy.ROTATING, "record_score")
    player = require_player(state, player_id)
    amount = parse_amount(raw_amount, max_digits=rules.max_entry_digits)

    if amount == 0:
        return advance_turn(state)

    ledger, _ = append_entry(player.ledger, EntryKind.NORMAL, amount, player.ledger.history_length + 1, id_factory)
    new_state = update_player(state, player_id, ledger=ledger)

    if not new_state.game_ended and rules.target_score is not None and ledger.total >= rules.target_score:
        logger.info("target score reached", player_id=player_id, total=ledger.total)
        return mark_game_ended(new_state, winner_id=player_id)

    if new_state.game_ended:
        return new_state
    return advance_turn(new_state)


def record_bust(
    state: GameState,
    rules: GameRules,
    player_id: str,
    id_factory: IdFactory = new_id,
) -> GameState:
    """
    Record a scoreless turn for the player and pass the turn on.

    Raises:
        UnsupportedActionError: If the game is not turn-based
        PlayerNotFoundError: If the player is not in the roster

    """
    _require_policy(rules, TurnPolicy.ROTATING, "record_bust")
    player = require_player(state, player_id)
    ledger, _ = append_entry(player.ledger, EntryKind.BUST, 0, player.ledger.history_length + 1, id_factory)
    return advance_turn(update_player(state, player_id, ledger=ledger))


def delete_entry(state: GameState, player_id: str, entry_id: str) -> GameState:
    """Return new state without the ledger entry. Missing player or entry is a no-op."""
    player = state.find_player(player_id)
    if player is None:
        return state
    ledger = remove_entry(player.ledger, entry_id)
    if ledger is player.ledger:
        return state
    return update_player(state, player_id, ledger=ledger)


def reset_session(state: GameState) -> GameState:
    """
    Start a new game with the same players.

    Ledgers are emptied, round and turn go back to the start and the game-end
    flag is cleared. Roster membership and config are kept.
    """
    cleared = reset_all_ledgers(state)
    return cleared.model_copy(
        update={"current_round": 1, "active_index": 0, "game_ended": False, "winner_id": None},
    )
