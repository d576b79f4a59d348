"""Key-value storage for persisted game sessions.

Each key maps to one opaque text blob. The file backend writes one file per
key with owner-only permissions (0o600) inside an owner-only directory (0o700),
replacing the file atomically so a reader never sees a partial write.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

_STORAGE_DIR_MODE = 0o700
_STORAGE_FILE_MODE = 0o600


class KeyValueStorage(Protocol):
    """Protocol for reading and writing text blobs by key."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, content: str) -> None: ...


class InMemoryStorage:
    """Dict-backed storage. Contents live as long as the instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, content: str) -> None:
        self._data[key] = content


class LocalFileStorage:
    """Stores each key as ``<key>.json`` under a local directory."""

    def __init__(self, storage_dir: str | Path) -> None:
        self._storage_dir = Path(storage_dir).resolve()

    def _path_for(self, key: str) -> Path:
        target = (self._storage_dir / f"{key}.json").resolve()
        if not target.is_relative_to(self._storage_dir):
            raise ValueError(f"Path traversal rejected: '{key}' resolves outside storage directory")
        return target

    def read(self, key: str) -> str | None:
        """Return the stored text for key, or None when nothing was written yet."""
        target = self._path_for(key)
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, key: str, content: str) -> None:
        """Write content for key via temp-file-then-rename.

        Creates the storage directory lazily on first write.
        """
        target = self._path_for(key)

        self._storage_dir.mkdir(mode=_STORAGE_DIR_MODE, parents=True, exist_ok=True)
        self._storage_dir.chmod(_STORAGE_DIR_MODE)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._storage_dir), suffix=".tmp", prefix=f".{key}_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _STORAGE_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("stored session blob", key=key, path=str(target))
