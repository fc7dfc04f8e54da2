"""Savers: where downloaded payloads end up.

A saver plays the part of the browser's save flow. It receives the file
identifier (used as the suggested name) and the full payload.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Name used when the identifier has no usable last segment
DEFAULT_FILENAME = "download"


def suggested_filename(file_id: str) -> str:
    """Local file name for a download of ``file_id``.

    Stored files are addressed as ``<dir>/<name>``; only the last segment
    is kept so a save can never leave the target directory.
    """
    name = file_id.replace("\\", "/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        return DEFAULT_FILENAME
    return name


@runtime_checkable
class Saver(Protocol):
    def save(self, file_id: str, data: bytes) -> None: ...


class MemorySaver:
    """Keeps saved payloads in memory, keyed by identifier."""

    def __init__(self) -> None:
        self.saved: dict[str, bytes] = {}
        self.calls: list[tuple[str, bytes]] = []

    def save(self, file_id: str, data: bytes) -> None:
        self.saved[file_id] = data
        self.calls.append((file_id, data))


class DirectorySaver:
    """Writes payloads into a directory.

    Data goes to a temporary file beside the target first and is then
    renamed into place. The temporary file is always released afterwards.
    """

    def __init__(self, directory: str | os.PathLike[str] = "."):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, file_id: str) -> Path:
        return self._directory / suggested_filename(file_id)

    def save(self, file_id: str, data: bytes) -> None:
        """Write ``data`` to the directory under the suggested name.

        Raises:
            OSError: If the directory or file cannot be written
        """
        target = self.path_for(file_id)
        self._directory.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(
            prefix=".filedrop_", suffix=".part", dir=self._directory
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(temp_name, target)
        finally:
            # Gone already after a successful replace
            with contextlib.suppress(FileNotFoundError):
                os.unlink(temp_name)

        logger.info(
            f"Saved '{file_id}' to {target}",
            extra={"file_id": file_id, "size": len(data)},
        )
