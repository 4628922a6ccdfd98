"""RedirectOutcome for the CI_MESSAGE file redirection.

The redirector never raises: every way a redirect can go wrong (no workspace,
permission denied, missing directory, interrupted write) comes back as a
FAILED outcome carrying the cause, and the contributor falls back to injecting
CI_MESSAGE directly.
"""

from dataclasses import dataclass
from enum import Enum

from .variables import CI_MESSAGE_FILE


class RedirectStatus(str, Enum):
    """Status of a redirect operation.

    Using a discriminated union pattern ensures type safety by preventing
    invalid state combinations.
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RedirectOutcome:
    """
    Result of writing CI_MESSAGE to the workspace.

    SUCCESS carries the pointer variable name and the written file path;
    FAILED carries a human-readable cause. ``size_bytes`` is filled in by
    post-write verification and is diagnostic only.

    Usage:
        outcome = redirector.redirect(run, message)
        if outcome.is_success:
            env[outcome.pointer_variable_name] = outcome.path
        else:
            env["CI_MESSAGE"] = message
    """

    status: RedirectStatus
    pointer_variable_name: str | None = None
    path: str | None = None
    cause: str | None = None
    size_bytes: int | None = None

    def __post_init__(self) -> None:
        """Validate state consistency after initialization.

        Ensures that the result data matches the declared state:
        - SUCCESS results must have a pointer variable and a path
        - FAILED results must have a cause
        """
        if self.status == RedirectStatus.SUCCESS:
            if not self.pointer_variable_name or not self.path:
                raise ValueError("Success outcome must have a pointer variable and a path")
        if self.status == RedirectStatus.FAILED and not self.cause:
            raise ValueError("Failed outcome must have a cause")

    @property
    def is_success(self) -> bool:
        return self.status == RedirectStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == RedirectStatus.FAILED

    @classmethod
    def success(
        cls,
        path: str,
        pointer_variable_name: str = CI_MESSAGE_FILE,
        size_bytes: int | None = None,
    ) -> "RedirectOutcome":
        """Create a successful outcome.

        Args:
            path: Absolute path of the written file
            pointer_variable_name: Variable that will hold the path
            size_bytes: Verified file size, if known

        Returns:
            RedirectOutcome with SUCCESS status
        """
        return cls(
            status=RedirectStatus.SUCCESS,
            pointer_variable_name=pointer_variable_name,
            path=path,
            size_bytes=size_bytes,
        )

    @classmethod
    def failure(cls, cause: str) -> "RedirectOutcome":
        """Create a failed outcome.

        Args:
            cause: Why the message could not be redirected

        Returns:
            RedirectOutcome with FAILED status
        """
        return cls(status=RedirectStatus.FAILED, cause=cause)

    def __bool__(self) -> bool:
        """Allow using the outcome in if statements."""
        return self.is_success


__all__ = ["RedirectOutcome", "RedirectStatus"]
