"""
Environment contributor for message-triggered builds.

Contributes the variables of an inciting CI message into a running build's
environment. The host calls ``build_environment`` (any run) or
``build_env_vars`` (classic builds) while assembling the environment for a
step; both share ``contribute``.

Flow:
    1. Classify every message variable against job parameters and the
       current environment
    2. Inject plain variables verbatim
    3. Redirect CI_MESSAGE to the workspace and inject CI_MESSAGE_FILE
    4. If redirection fails, inject CI_MESSAGE directly instead

Nothing here aborts the build: every failure path ends with the message
content available in the environment.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field

from ..settings import ContributorSettings
from .classifier import VariableClassifier
from .redirect_result import RedirectOutcome
from .redirector import FileRedirector
from .variables import (
    CI_MESSAGE,
    CI_MESSAGE_FILE,
    InjectEnvDecision,
    JobParameter,
    RedirectToFileDecision,
    SkipDecision,
    reserved_names,
)
from .workspace import BuildRun, RunContext

logger = logging.getLogger(__name__)


@dataclass
class ContributionReport:
    """What one contribution pass did to the environment.

    Attributes:
        injected: Variable names written into the environment, in write order
        skipped: Skip decisions (reserved, already set or invalid)
        redirect: Outcome of the CI_MESSAGE redirect, if one was attempted
    """

    injected: list[str] = field(default_factory=list)
    skipped: list[SkipDecision] = field(default_factory=list)
    redirect: RedirectOutcome | None = None

    @property
    def fell_back(self) -> bool:
        """True if CI_MESSAGE was injected directly after a failed redirect."""
        return self.redirect is not None and self.redirect.is_failure


class EnvironmentContributor:
    """
    Contribute CI message variables to a build environment.

    Design:
    - Message and job parameters are fixed at construction
    - The environment is borrowed per call and only written via item assignment
    - Job parameters and existing variables are never overwritten

    Example:
        contributor = EnvironmentContributor(
            {"CI_MESSAGE": payload, "CI_STATUS": "success"},
            job_params=[JobParameter(name="CI_STATUS", value="passed")],
        )
        report = contributor.build_environment(run, env)
    """

    def __init__(
        self,
        message_params: Mapping[str, str] | None,
        job_params: list[JobParameter] | None = None,
        settings: ContributorSettings | None = None,
        redirector: FileRedirector | None = None,
        classifier: VariableClassifier | None = None,
    ):
        """
        Initialize contributor.

        Args:
            message_params: Variables carried by the CI message (None for none)
            job_params: Job parameter values whose names are reserved (None for none)
            settings: Contributor settings (defaults if omitted)
            redirector: File redirector (built from settings if omitted)
            classifier: Variable classifier (default instance if omitted)
        """
        self.settings = settings or ContributorSettings()
        self.message_params = dict(message_params) if message_params is not None else None
        self.job_params = reserved_names(job_params)
        self.redirector = redirector or FileRedirector(
            verify_written_file=self.settings.verify_written_file
        )
        self.classifier = classifier or VariableClassifier()

    def build_environment(
        self, run: RunContext, env: MutableMapping[str, str] | None
    ) -> ContributionReport:
        """Contribute variables for any kind of run."""
        return self.contribute(run, env)

    def build_env_vars(
        self, build: BuildRun, env: MutableMapping[str, str] | None
    ) -> ContributionReport:
        """Contribute variables for a classic build."""
        return self.contribute(build, env)

    def contribute(
        self, run: RunContext, env: MutableMapping[str, str] | None
    ) -> ContributionReport:
        """
        Classify message variables and apply them to ``env``.

        Args:
            run: Run being built (used only to resolve the workspace)
            env: Environment to write into (None means nothing to do)

        Returns:
            ContributionReport describing the writes made
        """
        report = ContributionReport()
        if env is None or self.message_params is None:
            return report

        decisions = self.classifier.classify(self.message_params, self.job_params, env)

        redirects: list[RedirectToFileDecision] = []
        for decision in decisions:
            if isinstance(decision, SkipDecision):
                logger.debug(f"Skipping {decision.name}: {decision.reason.value}")
                report.skipped.append(decision)
            elif isinstance(decision, InjectEnvDecision):
                env[decision.name] = decision.value
                report.injected.append(decision.name)
            else:
                redirects.append(decision)

        # Redirect after plain injection so CI_MESSAGE_FILE is checked against
        # the final environment
        for redirect in redirects:
            report.redirect = self._apply_redirect(run, redirect, env, report)

        return report

    def _apply_redirect(
        self,
        run: RunContext,
        decision: RedirectToFileDecision,
        env: MutableMapping[str, str],
        report: ContributionReport,
    ) -> RedirectOutcome:
        pointer = decision.pointer_variable_name
        if pointer in self.job_params:
            outcome = RedirectOutcome.failure(f"{pointer} is reserved by a job parameter")
        elif pointer in env:
            outcome = RedirectOutcome.failure(f"{pointer} is already set in environment")
        else:
            outcome = self.redirector.redirect(run, decision.value)

        if outcome.is_success and outcome.path is not None:
            env[pointer] = outcome.path
            report.injected.append(pointer)
            logger.info(f"{CI_MESSAGE} for {run.display_name} written to {outcome.path}")
        else:
            env[decision.name] = decision.value
            report.injected.append(decision.name)
            logger.warning(
                f"Injecting {CI_MESSAGE} directly for {run.display_name} "
                f"instead of {CI_MESSAGE_FILE}: {outcome.cause}"
            )

        return outcome


__all__ = ["ContributionReport", "EnvironmentContributor"]
