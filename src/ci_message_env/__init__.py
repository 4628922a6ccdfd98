"""Contribute CI message variables to a running build's environment."""

from .engine import (
    CI_MESSAGE,
    CI_MESSAGE_FILE,
    CI_MESSAGE_FILE_NAME,
    BuildRun,
    ContributionReport,
    EnvironmentContributor,
    FileRedirector,
    JobParameter,
    PipelineRun,
    RedirectOutcome,
    RunContext,
    VariableClassifier,
    classify,
)
from .settings import ContributorSettings, SettingsLoader, configure_logging

__version__ = "0.1.0"

__all__ = [
    "CI_MESSAGE",
    "CI_MESSAGE_FILE",
    "CI_MESSAGE_FILE_NAME",
    "BuildRun",
    "ContributionReport",
    "ContributorSettings",
    "EnvironmentContributor",
    "FileRedirector",
    "JobParameter",
    "PipelineRun",
    "RedirectOutcome",
    "RunContext",
    "SettingsLoader",
    "VariableClassifier",
    "__version__",
    "classify",
    "configure_logging",
]
