"""Rules configuration for each supported game.

One engine serves both games; a frozen GameRules value tells it how turns
progress, which direction standings sort in, and how the game ends.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from scorepad.logic.enums import EndCondition, GameVariant, RankOrder, TurnPolicy
from scorepad.logic.exceptions import InvalidConfigError, UnsupportedRulesError
from scorepad.logic.state import (
    DEFAULT_MAX_POINTS,
    DEFAULT_MAX_ROUNDS,
    MAX_POINTS,
    MAX_ROUNDS,
    MIN_POINTS,
    MIN_ROUNDS,
    GameState,
    SessionConfig,
)

TARGET_SCORE = 10000


class GameRules(BaseModel):
    """
    Rule parameters for one game variant.

    storage_key names the persisted session. quick_scores are preset amounts
    offered by the score keypad.
    """

    model_config = ConfigDict(frozen=True)

    variant: GameVariant
    storage_key: str
    turn_policy: TurnPolicy
    rank_order: RankOrder
    uses_end_conditions: bool = False
    target_score: int | None = None  # first to reach it wins
    max_entry_digits: int = 4
    quick_scores: tuple[int, ...] = ()


AMERIKAANS_JOKEREN_RULES = GameRules(
    variant=GameVariant.AMERIKAANS_JOKEREN,
    storage_key=GameVariant.AMERIKAANS_JOKEREN.value,
    turn_policy=TurnPolicy.ROUND,
    rank_order=RankOrder.LOWEST_FIRST,
    uses_end_conditions=True,
    max_entry_digits=4,
    quick_scores=(5, 10, 15, 20, 25, 30, 40, 50, 100),
)

TIENDUIZEND_RULES = GameRules(
    variant=GameVariant.TIENDUIZEND,
    storage_key=GameVariant.TIENDUIZEND.value,
    turn_policy=TurnPolicy.ROTATING,
    rank_order=RankOrder.HIGHEST_FIRST,
    target_score=TARGET_SCORE,
    max_entry_digits=5,
    quick_scores=(50, 100, 150, 200, 250, 300, 350, 500, 1000),
)

_RULES_BY_VARIANT = {
    GameVariant.AMERIKAANS_JOKEREN: AMERIKAANS_JOKEREN_RULES,
    GameVariant.TIENDUIZEND: TIENDUIZEND_RULES,
}


def rules_for(variant: GameVariant | str) -> GameRules:
    return _RULES_BY_VARIANT[GameVariant(variant)]


def validate_rules(rules: GameRules) -> None:
    """Validate that the rule values can be played.

    Raises UnsupportedRulesError listing every inconsistency found.
    """
    errors: list[str] = []

    if rules.turn_policy == TurnPolicy.ROTATING and rules.target_score is None:
        errors.append("rotating turns need a target_score to end the game")

    if rules.target_score is not None and rules.target_score <= 0:
        errors.append(f"target_score={rules.target_score} must be positive")

    if rules.uses_end_conditions and rules.turn_policy != TurnPolicy.ROUND:
        errors.append("end conditions are only supported with round-based play")

    if rules.max_entry_digits < 1:
        errors.append(f"max_entry_digits={rules.max_entry_digits} must be at least 1")

    if any(score <= 0 for score in rules.quick_scores):
        errors.append("quick_scores must all be positive")

    if not rules.storage_key:
        errors.append("storage_key must not be empty")

    if errors:
        raise UnsupportedRulesError("; ".join(errors))


def initial_state(rules: GameRules) -> GameState:
    """Return an empty session: no players, round 1, first player active."""
    return GameState(variant=rules.variant)


def _lenient_int(value: object, default: int) -> int:
    """Parse like a form field: non-numeric or zero input falls back to default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
    else:
        return default
    return parsed or default


def build_config(
    end_condition: EndCondition | str,
    max_rounds: object = DEFAULT_MAX_ROUNDS,
    max_points: object = DEFAULT_MAX_POINTS,
) -> SessionConfig:
    """
    Build a SessionConfig from user input.

    Rounds are clamped to [1, 99] and points to [100, 9999]. Non-numeric input
    falls back to the defaults (10 rounds, 500 points).
    """
    try:
        condition = EndCondition(end_condition)
    except ValueError as exc:
        raise InvalidConfigError(f"unknown end condition {end_condition!r}") from exc

    rounds = min(MAX_ROUNDS, max(MIN_ROUNDS, _lenient_int(max_rounds, DEFAULT_MAX_ROUNDS)))
    points = min(MAX_POINTS, max(MIN_POINTS, _lenient_int(max_points, DEFAULT_MAX_POINTS)))
    return SessionConfig(end_condition=condition, max_rounds=rounds, max_points=points)
