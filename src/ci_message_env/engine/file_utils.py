"""File helpers for writing the CI message into a workspace.

A workspace directory that does not exist yet is created before writing;
if it cannot be created the write fails like any other I/O error.
"""

import logging
from pathlib import Path

from .exceptions import MessageFileWriteError

logger = logging.getLogger(__name__)


class FileOperations:
    """UTF-8 text file operations used by the redirector.

    ``write_text`` raises MessageFileWriteError for every I/O or encoding
    problem so the caller has a single exception to handle; ``stat_size`` is
    advisory and returns None instead of raising.
    """

    @staticmethod
    def write_text(path: Path, content: str, encoding: str = "utf-8") -> int:
        """Write text file, truncating any existing content.

        Args:
            path: File path to write (missing parent directories are created)
            content: Text content to write
            encoding: Text encoding (default: utf-8)

        Returns:
            Number of bytes written

        Raises:
            MessageFileWriteError: Directory cannot be created, permission
                denied, interrupted write, or content not encodable

        Example:
            size = FileOperations.write_text(workspace / ".ci_message.txt", "hello")
        """
        try:
            data = content.encode(encoding)
        except UnicodeEncodeError as e:
            raise MessageFileWriteError(str(path), f"encoding error with {encoding}: {e}") from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MessageFileWriteError(
                str(path), f"failed to create parent directories: {e}"
            ) from e

        try:
            with open(path, "w", encoding=encoding, newline="") as f:
                f.write(content)
        except OSError as e:
            raise MessageFileWriteError(str(path), str(e)) from e

        return len(data)

    @staticmethod
    def stat_size(path: Path) -> int | None:
        """Return the size of an existing regular file, or None.

        Args:
            path: File to inspect

        Returns:
            Size in bytes, or None if the file is missing or cannot be stat'ed
        """
        try:
            if not path.is_file():
                return None
            return path.stat().st_size
        except OSError as e:
            logger.debug(f"Failed to stat '{path}': {e}")
            return None


__all__ = ["FileOperations"]
