import logging

from scorepad.app import configure, open_session
from scorepad.logic.enums import GameVariant
from scorepad.settings import ScorepadSettings
from shared.storage import InMemoryStorage


class TestOpenSession:
    def test_persists_between_sessions_on_disk(self, tmp_path):
        settings = ScorepadSettings(storage_dir=str(tmp_path / "sessions"))

        first = open_session(GameVariant.AMERIKAANS_JOKEREN, settings)
        first.add_player("Anna")
        first.add_player("Bram")

        second = open_session("amerikaans-jokeren", settings)

        assert [p.name for p in second.players] == ["Anna", "Bram"]
        assert (tmp_path / "sessions" / "amerikaans-jokeren.json").exists()

    def test_games_are_stored_separately(self, tmp_path):
        settings = ScorepadSettings(storage_dir=str(tmp_path))

        open_session(GameVariant.TIENDUIZEND, settings).add_player("Anna")

        assert open_session(GameVariant.AMERIKAANS_JOKEREN, settings).players == ()
        assert [p.name for p in open_session(GameVariant.TIENDUIZEND, settings).players] == ["Anna"]

    def test_uses_given_storage(self):
        storage = InMemoryStorage()

        open_session(GameVariant.TIENDUIZEND, storage=storage).add_player()

        assert storage.read("tienduizend") is not None


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SCOREPAD_STORAGE_DIR", raising=False)
        monkeypatch.delenv("SCOREPAD_LOG_DIR", raising=False)
        settings = ScorepadSettings()

        assert settings.storage_dir == "data/sessions"
        assert settings.log_dir is None
        assert settings.log_level is None

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCOREPAD_STORAGE_DIR", str(tmp_path))

        assert ScorepadSettings().storage_dir == str(tmp_path)


class TestConfigure:
    def test_sets_up_logging_and_returns_settings(self, tmp_path):
        settings = ScorepadSettings(storage_dir=str(tmp_path), log_level="debug", log_format="json")
        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        saved_level = root.level
        try:
            result = configure(settings)
            assert result is settings
            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers[:]:
                handler.close()
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
