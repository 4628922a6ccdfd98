"""Core of the CI message environment contribution.

Key Components:

- VariableClassifier: Decides skip / inject / redirect per message variable
- FileRedirector: Writes CI_MESSAGE to the workspace, reports the pointer
- EnvironmentContributor: Applies decisions to a build environment with fallback
- RunContext: Host run capability interface (BuildRun, PipelineRun)
- RedirectOutcome: Success/failure result of a redirect
"""

from .classifier import VariableClassifier, classify
from .contributor import ContributionReport, EnvironmentContributor
from .exceptions import CIMessageEnvError, MessageFileWriteError, WorkspaceUnavailableError
from .redirect_result import RedirectOutcome, RedirectStatus
from .redirector import FileRedirector
from .variables import (
    CI_MESSAGE,
    CI_MESSAGE_FILE,
    CI_MESSAGE_FILE_NAME,
    CandidateVariable,
    Decision,
    InjectEnvDecision,
    JobParameter,
    RedirectToFileDecision,
    SkipDecision,
    SkipReason,
)
from .workspace import BuildRun, PipelineRun, RunContext, resolve_workspace

__all__ = [
    "CI_MESSAGE",
    "CI_MESSAGE_FILE",
    "CI_MESSAGE_FILE_NAME",
    "BuildRun",
    "CIMessageEnvError",
    "CandidateVariable",
    "ContributionReport",
    "Decision",
    "EnvironmentContributor",
    "FileRedirector",
    "InjectEnvDecision",
    "JobParameter",
    "MessageFileWriteError",
    "PipelineRun",
    "RedirectOutcome",
    "RedirectStatus",
    "RedirectToFileDecision",
    "RunContext",
    "SkipDecision",
    "SkipReason",
    "VariableClassifier",
    "WorkspaceUnavailableError",
    "classify",
    "resolve_workspace",
]
