"""Exceptions raised while redirecting CI_MESSAGE to the workspace.

Exception Hierarchy:
    CIMessageEnvError (base)
    ├── WorkspaceUnavailableError (no directory could be resolved for the run)
    └── MessageFileWriteError (writing .ci_message.txt failed)

None of these escape the redirector: FileRedirector converts them into a
failed RedirectOutcome so the build always continues.
"""

from __future__ import annotations


class CIMessageEnvError(Exception):
    """Base exception for environment contribution errors."""

    pass


class WorkspaceUnavailableError(CIMessageEnvError):
    """
    No workspace directory could be resolved for a run.

    Raised when a build has no workspace handle (e.g. no node allocated yet)
    or a run exposes no root directory to derive one from.

    Attributes:
        run_name: Display name of the run
        reason: What was missing
    """

    def __init__(self, run_name: str, reason: str):
        self.run_name = run_name
        self.reason = reason
        super().__init__(f"No workspace available for run '{run_name}': {reason}")

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"WorkspaceUnavailableError(run={self.run_name!r}, reason={self.reason!r})"


class MessageFileWriteError(CIMessageEnvError):
    """
    Writing the message file failed.

    Attributes:
        path: Target file path
        cause: Underlying error message
    """

    def __init__(self, path: str, cause: str):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write message file '{path}': {cause}")

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"MessageFileWriteError(path={self.path!r})"


__all__ = [
    "CIMessageEnvError",
    "MessageFileWriteError",
    "WorkspaceUnavailableError",
]
