"""Scorepad configuration via environment variables."""

from pydantic_settings import BaseSettings


class ScorepadSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREPAD_"}

    storage_dir: str = "data/sessions"
    log_dir: str | None = None
    # unset falls back to LOG_LEVEL / LOG_FORMAT
    log_level: str | None = None
    log_format: str | None = None
