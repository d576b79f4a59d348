"""Session façade used by the presentation layer.

GameSession owns the current GameState of one game, applies the pure logic
operations to it and writes every committed change through to its
SessionStore. The presentation layer only reads state or calls these methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import structlog

from scorepad.logic import roster, turn, win
from scorepad.logic.exceptions import GameRuleError, UnsupportedActionError
from scorepad.logic.ids import new_id
from scorepad.logic.rules import build_config, validate_rules
from scorepad.logic.state_utils import mark_game_ended

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from scorepad.logic.enums import EndCondition
    from scorepad.logic.ids import IdFactory
    from scorepad.logic.rules import GameRules
    from scorepad.logic.state import GameState, Player, RecentEntries
    from scorepad.logic.win import GameOutcome
    from scorepad.session.store import SessionStore

logger = structlog.get_logger()


class ActionResult(NamedTuple):
    """
    Outcome of a session operation.

    applied is False when the operation did not apply to the current state
    (invalid input, wrong game, game already over); reason then says why and
    state is unchanged.
    """

    applied: bool
    state: GameState
    reason: str | None = None


class GameSession:
    """Drive one game's session and persist it after every change."""

    def __init__(
        self,
        rules: GameRules,
        store: SessionStore,
        *,
        state: GameState | None = None,
        id_factory: IdFactory = new_id,
    ) -> None:
        validate_rules(rules)
        self._rules = rules
        self._store = store
        self._id_factory = id_factory
        self._state = state if state is not None else store.load()

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> tuple[Player, ...]:
        return self._state.players

    @property
    def active_player(self) -> Player | None:
        return self._state.active_player

    @property
    def quick_scores(self) -> tuple[int, ...]:
        """Preset amounts offered on the score keypad for this game."""
        return self._rules.quick_scores

    def _apply(self, action: str, operation: Callable[[GameState], GameState]) -> ActionResult:
        try:
            new_state = operation(self._state)
        except GameRuleError as exc:
            logger.info("action not applied", action=action, reason=str(exc))
            return ActionResult(applied=False, state=self._state, reason=str(exc))

        if new_state != self._state:
            self._state = new_state
            self._store.save(new_state)
            logger.debug("action applied", action=action, variant=self._rules.variant)
        return ActionResult(applied=True, state=self._state)

    # --- roster ---

    def add_player(self, name: str | None = None) -> ActionResult:
        return self._apply("add_player", lambda s: roster.add_player(s, name, self._id_factory)[0])

    def remove_player(self, player_id: str) -> ActionResult:
        return self._apply("remove_player", lambda s: roster.remove_player(s, player_id))

    def rename_player(self, player_id: str, name: str) -> ActionResult:
        return self._apply("rename_player", lambda s: roster.rename_player(s, player_id, name))

    # --- scoring ---

    def complete_round(
        self,
        submissions: Mapping[str, object],
        round_winner_id: str | None = None,
    ) -> ActionResult:
        return self._apply(
            "complete_round",
            lambda s: turn.complete_round(s, self._rules, submissions, round_winner_id, self._id_factory),
        )

    def record_score(self, player_id: str, amount: object) -> ActionResult:
        return self._apply(
            "record_score",
            lambda s: turn.record_score(s, self._rules, player_id, amount, self._id_factory),
        )

    def record_bust(self, player_id: str) -> ActionResult:
        return self._apply("record_bust", lambda s: turn.record_bust(s, self._rules, player_id, self._id_factory))

    def delete_entry(self, player_id: str, entry_id: str) -> ActionResult:
        return self._apply("delete_entry", lambda s: turn.delete_entry(s, player_id, entry_id))

    def configure(
        self,
        end_condition: EndCondition | str,
        max_rounds: object = None,
        max_points: object = None,
    ) -> ActionResult:
        """
        Change the end condition.

        Omitted limits keep their current value. Out-of-range numbers are
        clamped and non-numeric input falls back to the defaults. When the
        session already meets the new condition the game ends.
        """

        def _configure(state: GameState) -> GameState:
            if not self._rules.uses_end_conditions:
                raise UnsupportedActionError(f"{self._rules.variant.value} has no end conditions")
            config = build_config(
                end_condition,
                state.config.max_rounds if max_rounds is None else max_rounds,
                state.config.max_points if max_points is None else max_points,
            )
            new_state = state.model_copy(update={"config": config})
            # a limit the session already passed ends the game right away
            if win.evaluate_game_end(new_state, self._rules).ended:
                new_state = mark_game_ended(new_state)
            return new_state

        return self._apply("configure", _configure)

    def new_game(self) -> ActionResult:
        """Clear all scores and start again with the same players and settings."""
        self._state = self._store.new_game(self._state)
        return ActionResult(applied=True, state=self._state)

    # --- derived views ---

    def outcome(self) -> GameOutcome:
        return win.evaluate_game_end(self._state, self._rules)

    def standings(self) -> tuple[Player, ...]:
        return roster.standings(self._state, self._rules)

    def rank_of(self, player_id: str) -> int | None:
        return roster.rank_of(self._state, self._rules, player_id)

    def total_of(self, player_id: str) -> int | None:
        player = self._state.find_player(player_id)
        return player.total if player is not None else None

    def recent_entries(self, player_id: str, limit: int) -> RecentEntries | None:
        player = self._state.find_player(player_id)
        return player.ledger.recent_entries(limit) if player is not None else None

    def is_loser(self, player_id: str) -> bool:
        return win.is_loser(self._state, self._rules, player_id)

    def progress_to_limit(self, player_id: str) -> float:
        return win.progress_to_limit(self._state, self._rules, player_id)
