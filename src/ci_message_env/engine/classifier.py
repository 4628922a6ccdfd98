"""
Variable classification for environment injection.

Routes each message variable to one of three outcomes:
    SKIP: Name is reserved by a job parameter, already set in the environment,
          or unusable (empty name, missing value)
    INJECT_ENV: Name/value written verbatim into the build environment
    REDIRECT_TO_FILE: CI_MESSAGE only, written to the workspace instead

Priority order (first match wins):
    0. Empty name or missing value -> skip
    1. Reserved job parameter  -> skip
    2. Already in environment  -> skip
    3. CI_MESSAGE              -> redirect to file
    4. Anything else           -> inject
"""

import logging
from collections.abc import Collection, Mapping

from .variables import (
    CI_MESSAGE,
    CandidateVariable,
    Decision,
    InjectEnvDecision,
    RedirectToFileDecision,
    SkipDecision,
    SkipReason,
)

logger = logging.getLogger(__name__)


class VariableClassifier:
    """
    Classify message variables into skip / inject / redirect decisions.

    Pure decision logic: no I/O, never mutates its inputs, never raises.
    Entries with an empty name or a None value are skipped rather than
    rejected. Each candidate is decided on its own, so the output order only
    mirrors the candidate mapping's iteration order.

    Example:
        classifier = VariableClassifier()
        decisions = classifier.classify(
            {"CI_MESSAGE": "hello", "CI_STATUS": "success"},
            reserved=frozenset(),
            env={},
        )
        # [RedirectToFileDecision(value="hello"),
        #  InjectEnvDecision(name="CI_STATUS", value="success")]
    """

    def classify(
        self,
        candidates: Mapping[str, str],
        reserved: Collection[str] | None,
        env: Mapping[str, str],
    ) -> list[Decision]:
        """
        Produce exactly one decision per candidate.

        Args:
            candidates: Message-derived variable names and values
            reserved: Names defined as job parameters (None means none)
            env: Current environment snapshot, used for existence checks only

        Returns:
            List of decisions in candidate order
        """
        reserved = reserved or frozenset()
        decisions: list[Decision] = []
        for name, value in candidates.items():
            if not name or value is None:
                # Unusable entry: skip it, keep contributing the rest
                decisions.append(SkipDecision(name=name or "", reason=SkipReason.INVALID))
                continue
            candidate = CandidateVariable(name=name, value=value)
            decisions.append(self.classify_one(candidate, reserved, env))

        summary = ", ".join(f"{d.name}={d.kind}" for d in decisions)
        logger.debug(f"Classified {len(decisions)} message variable(s): {summary}")
        return decisions

    def classify_one(
        self,
        candidate: CandidateVariable,
        reserved: Collection[str],
        env: Mapping[str, str],
    ) -> Decision:
        """
        Classify a single candidate variable.

        Args:
            candidate: Variable to classify
            reserved: Names defined as job parameters
            env: Current environment snapshot

        Returns:
            SkipDecision, RedirectToFileDecision or InjectEnvDecision
        """
        if candidate.name in reserved:
            return SkipDecision(name=candidate.name, reason=SkipReason.RESERVED)

        if candidate.name in env:
            return SkipDecision(name=candidate.name, reason=SkipReason.ALREADY_SET)

        if candidate.name == CI_MESSAGE:
            return RedirectToFileDecision(value=candidate.value)

        return InjectEnvDecision(name=candidate.name, value=candidate.value)


def classify(
    candidates: Mapping[str, str],
    reserved: Collection[str] | None,
    env: Mapping[str, str],
) -> list[Decision]:
    """Classify candidates with a default VariableClassifier."""
    return VariableClassifier().classify(candidates, reserved, env)


__all__ = ["VariableClassifier", "classify"]
