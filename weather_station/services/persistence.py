"""File-backed storage for the last good provider payload."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from weather_station.core.errors import WeatherStationError

logger = logging.getLogger(__name__)


class PersistenceWriteError(WeatherStationError):
    """Raised when the payload file cannot be written."""


class PayloadFile:
    """Single file holding the raw payload last parsed successfully."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def save(self, raw: str) -> None:
        """Overwrite the file with ``raw``; readers see old or new content, never a mix."""
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(raw)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceWriteError(f"Failed writing {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Persisted weather payload to %s (%d chars)", self.path, len(raw))

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        # Undecodable bytes surface as a parse failure, which deletes the file.
        with self.path.open(encoding="utf-8", errors="replace", newline="") as handle:
            return handle.read()

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)


__all__ = ["PayloadFile", "PersistenceWriteError"]
