"""Host run abstraction and workspace resolution.

The host decides how a run maps to a directory on disk. Two kinds of run are
modelled here:

    - BuildRun: a classic build that owns a workspace handle directly
    - PipelineRun: a pipeline-style run that only exposes its persisted root
      directory, with the workspace conventionally at <root>/workspace

Both implement RunContext.resolve_workspace(), so the redirector never needs
to know which kind of run it was handed.

Example:
    >>> run = PipelineRun("app #42", root_dir=Path("/var/ci/jobs/app/builds/42"))
    >>> run.resolve_workspace()
    PosixPath('/var/ci/jobs/app/builds/42/workspace')
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .exceptions import WorkspaceUnavailableError

logger = logging.getLogger(__name__)

# Conventional workspace subdirectory beneath a run's root directory
WORKSPACE_DIR_NAME = "workspace"


class RunContext(ABC):
    """Capability interface for a running build as seen by the contributor.

    Implementations expose where the run lives on disk. The default
    ``resolve_workspace`` derives the workspace from ``root_dir``; runs that
    own a workspace handle override it.
    """

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable run name used in log messages."""
        pass

    @property
    @abstractmethod
    def root_dir(self) -> Path | None:
        """Directory where the host persists this run, if any."""
        pass

    @property
    def has_workspace_handle(self) -> bool:
        """Whether this run exposes a direct workspace handle."""
        return False

    @property
    def workspace(self) -> Path | None:
        """Direct workspace handle (None unless the run owns one)."""
        return None

    def resolve_workspace(self) -> Path:
        """Resolve the directory the message file should be written to.

        Resolution order:
        1. <root_dir>/workspace
        2. <root_dir> itself, if building the child path fails

        Returns:
            Workspace directory path (not checked for existence)

        Raises:
            WorkspaceUnavailableError: The run exposes no root directory
        """
        root = self.root_dir
        if root is None:
            raise WorkspaceUnavailableError(self.display_name, "run has no root directory")

        try:
            return self._workspace_child(root)
        except (TypeError, ValueError) as e:
            logger.debug(
                f"Could not derive workspace under {root!r} for {self.display_name}: {e}; "
                "using run root directory"
            )

        try:
            return Path(root)
        except (TypeError, ValueError) as e:
            raise WorkspaceUnavailableError(
                self.display_name, f"invalid root directory {root!r}: {e}"
            ) from e

    @staticmethod
    def _workspace_child(root: Path) -> Path:
        return Path(root) / WORKSPACE_DIR_NAME


class BuildRun(RunContext):
    """
    Classic build with its own workspace handle.

    The handle is None until the host has allocated a workspace on a node;
    such a build has no workspace to write to.

    Attributes:
        name: Build display name (e.g. "app #42")
    """

    def __init__(self, name: str, workspace: Path | None, root_dir: Path | None = None):
        """
        Initialize a build run.

        Args:
            name: Build display name
            workspace: Workspace directory allocated by the host, or None
            root_dir: Persisted build directory (optional)
        """
        self.name = name
        self._workspace = Path(workspace) if workspace is not None else None
        self._root_dir = Path(root_dir) if root_dir is not None else None

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def root_dir(self) -> Path | None:
        return self._root_dir

    @property
    def has_workspace_handle(self) -> bool:
        return True

    @property
    def workspace(self) -> Path | None:
        return self._workspace

    def resolve_workspace(self) -> Path:
        """Return the build's workspace handle.

        Raises:
            WorkspaceUnavailableError: No workspace has been allocated
        """
        if self._workspace is None:
            raise WorkspaceUnavailableError(self.name, "build has no workspace allocated")
        return self._workspace

    def __repr__(self) -> str:
        return f"BuildRun(name={self.name!r}, workspace={self._workspace!r})"


class PipelineRun(RunContext):
    """Pipeline-style run without a direct workspace handle."""

    def __init__(self, name: str, root_dir: Path | str | None):
        self.name = name
        self._root_dir = root_dir

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def root_dir(self) -> Path | None:
        if self._root_dir is None:
            return None
        return Path(self._root_dir)

    def __repr__(self) -> str:
        return f"PipelineRun(name={self.name!r}, root_dir={self._root_dir!r})"


def resolve_workspace(run: RunContext) -> Path:
    """Resolve the workspace directory for any kind of run.

    Raises:
        WorkspaceUnavailableError: No directory could be resolved
    """
    return run.resolve_workspace()


__all__ = [
    "WORKSPACE_DIR_NAME",
    "BuildRun",
    "PipelineRun",
    "RunContext",
    "resolve_workspace",
]
