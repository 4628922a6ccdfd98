"""CI_MESSAGE file redirector.

Large CI messages can exceed operating-system limits on environment variable
size, so CI_MESSAGE is written to ``.ci_message.txt`` in the run's workspace
and only its path is exported as CI_MESSAGE_FILE.

Architecture:
- redirect() never raises for workspace or I/O problems
- Failures come back as RedirectOutcome.failure(cause)
- The caller owns the fallback (inject CI_MESSAGE directly)
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import MessageFileWriteError, WorkspaceUnavailableError
from .file_utils import FileOperations
from .redirect_result import RedirectOutcome
from .variables import CI_MESSAGE_FILE, CI_MESSAGE_FILE_NAME
from .workspace import RunContext

logger = logging.getLogger(__name__)


class FileRedirector:
    """
    Write CI_MESSAGE into the workspace and report the pointer variable.

    Features:
    - Workspace resolved through the run's own policy (RunContext)
    - UTF-8 write that always overwrites, never appends
    - Optional post-write verification (existence and size), advisory only

    Example:
        redirector = FileRedirector()
        outcome = redirector.redirect(run, "hello")
        if outcome.is_success:
            env[outcome.pointer_variable_name] = outcome.path
    """

    def __init__(self, verify_written_file: bool = True, encoding: str = "utf-8"):
        """
        Initialize redirector.

        Args:
            verify_written_file: Check existence and size after writing
            encoding: Text encoding for the message file
        """
        self.verify_written_file = verify_written_file
        self.encoding = encoding

    def redirect(self, run: RunContext, value: str) -> RedirectOutcome:
        """Write ``value`` to the run's message file.

        Args:
            run: Run whose workspace receives the file
            value: CI_MESSAGE content

        Returns:
            SUCCESS with CI_MESSAGE_FILE and the file path, or FAILED with the cause
        """
        try:
            workspace = run.resolve_workspace()
        except WorkspaceUnavailableError as e:
            logger.warning(f"Cannot redirect CI_MESSAGE: {e}")
            return RedirectOutcome.failure(str(e))

        target = self.target_path(workspace)

        try:
            bytes_written = FileOperations.write_text(target, value, encoding=self.encoding)
        except MessageFileWriteError as e:
            logger.warning(f"Cannot redirect CI_MESSAGE for {run.display_name}: {e}")
            return RedirectOutcome.failure(str(e))

        logger.debug(f"Wrote {bytes_written} bytes to {target}")

        size_bytes = self._verify(target) if self.verify_written_file else None
        return RedirectOutcome.success(
            path=str(target),
            pointer_variable_name=CI_MESSAGE_FILE,
            size_bytes=size_bytes,
        )

    @staticmethod
    def target_path(workspace: Path) -> Path:
        """Message file location: directly under the workspace."""
        return Path(workspace).absolute() / CI_MESSAGE_FILE_NAME

    def _verify(self, target: Path) -> int | None:
        # Advisory: a failed check never downgrades the write
        size = FileOperations.stat_size(target)
        if size is None:
            logger.warning(f"Message file not found after write: {target}")
        else:
            logger.debug(f"Verified message file {target} ({size} bytes)")
        return size


__all__ = ["FileRedirector"]
