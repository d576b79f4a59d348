"""
Game-end evaluation.

All functions here are pure: they read (roster, controller position, config)
and never modify state, so calling them repeatedly gives the same answer.
"""

from pydantic import BaseModel, ConfigDict

from scorepad.logic.enums import EndCondition, TurnPolicy
from scorepad.logic.roster import standings
from scorepad.logic.rules import GameRules
from scorepad.logic.state import GameState, Player


class GameOutcome(BaseModel):
    """Whether the game is over and who won it."""

    model_config = ConfigDict(frozen=True)

    ended: bool
    winner: Player | None = None


def _round_limit_reached(state: GameState) -> bool:
    config = state.config
    if config.end_condition == EndCondition.ROUNDS:
        # current_round is already the next round to play
        return state.current_round > config.max_rounds
    if config.end_condition == EndCondition.POINTS:
        return any(player.total >= config.max_points for player in state.players)
    return False


def _evaluate_round_game(state: GameState, rules: GameRules) -> GameOutcome:
    ended = state.game_ended or (rules.uses_end_conditions and _round_limit_reached(state))
    if not ended:
        return GameOutcome(ended=False)
    ranked = standings(state, rules)
    return GameOutcome(ended=True, winner=ranked[0] if ranked else None)


def _evaluate_race_game(state: GameState, rules: GameRules) -> GameOutcome:
    target = rules.target_score
    reached = [p for p in standings(state, rules) if target is not None and p.total >= target]
    if not (state.game_ended or reached):
        return GameOutcome(ended=False)

    if state.winner_id is not None:
        recorded = state.find_player(state.winner_id)
        if recorded is not None:
            return GameOutcome(ended=True, winner=recorded)

    # no recorded winner left in the roster: best score at or above target,
    # otherwise the best score overall
    fallback = reached or list(standings(state, rules))
    return GameOutcome(ended=True, winner=fallback[0] if fallback else None)


def evaluate_game_end(state: GameState, rules: GameRules) -> GameOutcome:
    """
    Decide whether the game has ended and who the winner is.

    Round-based game: ends after max_rounds rounds, once any total reaches
    max_points, or never without an end condition. The lowest total wins.

    Race game: ends once a player reaches the target score; that player wins.

    A session already flagged as ended always evaluates as ended.
    """
    if rules.turn_policy == TurnPolicy.ROUND:
        return _evaluate_round_game(state, rules)
    return _evaluate_race_game(state, rules)


def is_loser(state: GameState, rules: GameRules, player_id: str) -> bool:
    """Return True for a player who pushed the game over its points ceiling."""
    if not (rules.uses_end_conditions and state.config.end_condition == EndCondition.POINTS):
        return False
    if not evaluate_game_end(state, rules).ended:
        return False
    player = state.find_player(player_id)
    return player is not None and player.total >= state.config.max_points


def progress_to_limit(state: GameState, rules: GameRules, player_id: str) -> float:
    """
    Return how far the player's total is toward the game's limit, from 0.0 to 1.0.

    The limit is max_points under the points end condition, or the target score
    in a race game. Returns 0.0 when the game has no such limit.
    """
    player = state.find_player(player_id)
    if player is None:
        return 0.0
    if rules.uses_end_conditions and state.config.end_condition == EndCondition.POINTS:
        limit = state.config.max_points
    elif rules.target_score is not None:
        limit = rules.target_score
    else:
        return 0.0
    return min(1.0, max(0.0, player.total / limit))
