"""
String enum definitions for score-keeping concepts.
"""

from enum import StrEnum


class GameVariant(StrEnum):
    """Supported games. Values double as persistent storage keys."""

    AMERIKAANS_JOKEREN = "amerikaans-jokeren"
    TIENDUIZEND = "tienduizend"


class EntryKind(StrEnum):
    """Kinds of ledger entries."""

    NORMAL = "normal"
    ROUND_WINNER_ZERO = "round_winner_zero"  # round winner, always 0
    BUST = "bust"  # scoreless turn (farkle), always 0


# kinds that never contribute points
ZERO_ENTRY_KINDS = frozenset({EntryKind.ROUND_WINNER_ZERO, EntryKind.BUST})


class EndCondition(StrEnum):
    """When a descending-score game ends on its own."""

    NONE = "none"
    ROUNDS = "rounds"
    POINTS = "points"


class RankOrder(StrEnum):
    """Direction in which standings are sorted."""

    LOWEST_FIRST = "lowest_first"
    HIGHEST_FIRST = "highest_first"


class TurnPolicy(StrEnum):
    """How play progresses between scoring events."""

    ROUND = "round"  # every player scores once per round
    ROTATING = "rotating"  # one active player per turn


class PlayerColor(StrEnum):
    """Player palette, assigned in join order."""

    RED = "#e94560"
    CYAN = "#08d9d6"
    YELLOW = "#f9ed69"
    PURPLE = "#b537f2"
    GREEN = "#06d6a0"
    CORAL = "#ff6b6b"


PLAYER_PALETTE: tuple[PlayerColor, ...] = tuple(PlayerColor)
