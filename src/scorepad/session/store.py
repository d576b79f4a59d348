import structlog

from scorepad.logic.rules import GameRules, initial_state
from scorepad.logic.state import GameState
from scorepad.logic.turn import reset_session
from scorepad.session.codec import decode_session, encode_session
from shared.storage import KeyValueStorage

logger = structlog.get_logger()


class SessionStore:
    """Persist one game's session under its fixed storage key.

    Loading never raises: missing, unreadable or malformed data gives an empty
    session. Saving failures are logged and the session keeps working in
    memory for the current run.
    """

    def __init__(self, storage: KeyValueStorage, rules: GameRules) -> None:
        self._storage = storage
        self._rules = rules

    @property
    def key(self) -> str:
        return self._rules.storage_key

    def load(self) -> GameState:
        """Return the persisted session, or an empty one if there is none usable."""
        try:
            content = self._storage.read(self.key)
        except OSError:
            logger.exception("failed to read session", key=self.key)
            return initial_state(self._rules)
        except ValueError as exc:
            # stored bytes are not valid text
            logger.warning("discarding unreadable session", key=self.key, error=str(exc))
            return initial_state(self._rules)

        if content is None:
            return initial_state(self._rules)

        try:
            state = decode_session(content, self._rules)
        except ValueError as exc:
            logger.warning("discarding unreadable session", key=self.key, error=str(exc))
            return initial_state(self._rules)

        logger.info("loaded session", key=self.key, players=len(state.players))
        return state

    def save(self, state: GameState) -> bool:
        """Write the full session. Return False if storage is unavailable."""
        content = encode_session(state, self._rules)
        try:
            self._storage.write(self.key, content)
        except OSError:
            logger.exception("failed to save session", key=self.key)
            return False
        return True

    def new_game(self, state: GameState) -> GameState:
        """Reset ledgers and turn position for the same players, then save."""
        new_state = reset_session(state)
        self.save(new_state)
        logger.info("started new game", key=self.key, players=len(new_state.players))
        return new_state
