"""
Pydantic models for message-derived variables and classification decisions.

A CI message carries a flat mapping of variable names to string values. Each
entry becomes a CandidateVariable, and the classifier turns each candidate into
exactly one Decision:

- SkipDecision: reserved by a job parameter, already set in the environment,
  or unusable (empty name, missing value)
- InjectEnvDecision: written verbatim into the build environment
- RedirectToFileDecision: CI_MESSAGE only, written to a file in the workspace

Decisions form a discriminated union on ``kind`` so callers can match on the
tag without isinstance chains.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

# Variable redirected to a file instead of the environment
CI_MESSAGE = "CI_MESSAGE"

# Pointer variable injected in its place
CI_MESSAGE_FILE = "CI_MESSAGE_FILE"

# Fixed name of the file written directly under the workspace
CI_MESSAGE_FILE_NAME = ".ci_message.txt"


class CandidateVariable(BaseModel):
    """A (name, value) pair taken from the incoming message."""

    name: str = Field(min_length=1, description="Variable name")
    value: str = Field(description="Variable value (may be empty)")

    model_config = {"frozen": True}


class JobParameter(BaseModel):
    """A job-level parameter value supplied by the host.

    Only the name matters for classification: parameter names are reserved and
    message variables never overwrite them.
    """

    name: str = Field(min_length=1, description="Parameter name")
    value: str | None = Field(default=None, description="Parameter value")

    model_config = {"frozen": True}


class SkipReason(str, Enum):
    """Why a candidate was not injected."""

    RESERVED = "reserved by job parameter"
    ALREADY_SET = "already set in environment"
    INVALID = "empty name or missing value"


class SkipDecision(BaseModel):
    kind: Literal["skip"] = "skip"
    name: str
    reason: SkipReason

    model_config = {"frozen": True}


class InjectEnvDecision(BaseModel):
    kind: Literal["inject_env"] = "inject_env"
    name: str
    value: str

    model_config = {"frozen": True}


class RedirectToFileDecision(BaseModel):
    """Write the value to the workspace and inject a pointer variable."""

    kind: Literal["redirect_to_file"] = "redirect_to_file"
    name: Literal["CI_MESSAGE"] = CI_MESSAGE
    value: str
    pointer_variable_name: Literal["CI_MESSAGE_FILE"] = CI_MESSAGE_FILE
    file_name: Literal[".ci_message.txt"] = CI_MESSAGE_FILE_NAME

    model_config = {"frozen": True}


Decision = Annotated[
    SkipDecision | InjectEnvDecision | RedirectToFileDecision,
    Field(discriminator="kind"),
]


def reserved_names(job_params: list[JobParameter] | None) -> frozenset[str]:
    """Build the reserved name set from job parameters.

    A missing parameter list is an empty reserved set, not an error.
    """
    if job_params is None:
        return frozenset()
    return frozenset(param.name for param in job_params)


__all__ = [
    "CI_MESSAGE",
    "CI_MESSAGE_FILE",
    "CI_MESSAGE_FILE_NAME",
    "CandidateVariable",
    "Decision",
    "InjectEnvDecision",
    "JobParameter",
    "RedirectToFileDecision",
    "SkipDecision",
    "SkipReason",
    "reserved_names",
]
