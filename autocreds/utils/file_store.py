"""
File access used by the profile and script writers.

Functions that touch the disk take a FileStore argument instead of using a
module-level instance, so tests can hand in their own implementation.
"""

import logging
import os
import platform
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileStore:
    """Interface for the file operations autocreds needs."""

    def exists(self, path: PathLike) -> bool:
        raise NotImplementedError

    def read_text(self, path: PathLike) -> str:
        """Read a UTF-8 file. Raises FileNotFoundError if it is absent."""
        raise NotImplementedError

    def write_text(self, path: PathLike, content: str) -> None:
        """Write a UTF-8 file, creating parent directories as needed."""
        raise NotImplementedError

    def ensure_dir(self, path: PathLike) -> None:
        raise NotImplementedError

    def set_executable(self, path: PathLike) -> None:
        """Mark a file executable (0o755). No-op where there is no mode bit."""
        raise NotImplementedError


class LocalFileStore(FileStore):
    """FileStore backed by the local file system."""

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def read_text(self, path: PathLike) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, path: PathLike, content: str) -> None:
        target = Path(path)
        self.ensure_dir(target.parent)
        with open(target, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        logger.debug("Wrote %d bytes to %s", len(content), target)

    def ensure_dir(self, path: PathLike) -> None:
        os.makedirs(path, exist_ok=True)

    def set_executable(self, path: PathLike) -> None:
        if platform.system() == "Windows":
            return
        os.chmod(path, 0o755)
