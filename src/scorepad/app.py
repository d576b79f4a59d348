"""Wire settings, storage and logging into ready-to-use game sessions."""

import structlog

from scorepad.logic.enums import GameVariant
from scorepad.logic.rules import rules_for
from scorepad.session.manager import GameSession
from scorepad.session.store import SessionStore
from scorepad.settings import ScorepadSettings
from shared.logging import setup_logging
from shared.storage import KeyValueStorage, LocalFileStorage

logger = structlog.get_logger()


def configure(settings: ScorepadSettings | None = None) -> ScorepadSettings:
    """Load settings and set up logging. Return the settings in use."""
    settings = settings or ScorepadSettings()
    log_file = setup_logging(log_dir=settings.log_dir, level=settings.log_level, log_format=settings.log_format)
    logger.info("scorepad configured", storage_dir=settings.storage_dir, log_file=str(log_file) if log_file else None)
    return settings


def open_session(
    variant: GameVariant | str,
    settings: ScorepadSettings | None = None,
    storage: KeyValueStorage | None = None,
) -> GameSession:
    """
    Open the persisted session of one game.

    Uses file storage under settings.storage_dir unless a storage is given.
    """
    rules = rules_for(variant)
    if storage is None:
        settings = settings or ScorepadSettings()
        storage = LocalFileStorage(settings.storage_dir)
    return GameSession(rules, SessionStore(storage, rules))
