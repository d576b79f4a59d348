"""Typed domain exceptions for score-keeping rule violations.

Pure logic (roster.py, turn.py) raises subclasses of GameRuleError when an
operation does not apply to the current state. GameSession catches them at
its boundary and reports the operation as not applied; state is left as it
was and nothing is persisted.
"""


class GameRuleError(Exception):
    """Base exception for operations that do not apply to the current state."""


class InvalidScoreError(GameRuleError):
    """Submitted amount is not a whole number in the accepted range."""


class IncompleteRoundError(GameRuleError):
    """Round submission is missing a value for at least one player."""


class PlayerNotFoundError(GameRuleError):
    """Operation targets a player that is not in the roster."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"no player with id {player_id!r}")


class GameEndedError(GameRuleError):
    """Game has ended; only a new game re-opens scoring."""


class UnsupportedActionError(GameRuleError):
    """Operation is not part of this game variant's rules."""


class InvalidConfigError(GameRuleError):
    """End-condition settings could not be understood."""


class UnsupportedRulesError(GameRuleError):
    """Game rules contain inconsistent values."""
