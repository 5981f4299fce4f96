"""Classify a build's result trend against its history."""

from __future__ import annotations

from collections.abc import Iterator

from buildtrend.core.errors import MissingOutcome, UnknownOutcome
from buildtrend.core.log import logger
from buildtrend.model.build import BuildRef
from buildtrend.model.outcome import Outcome
from buildtrend.model.trend import Trend


def iter_predecessors(build: BuildRef) -> Iterator[BuildRef]:
    """Yield earlier builds, newest first, starting before `build`.

    Lazy: each predecessor is fetched only when the caller asks for
    it, so histories of any length are walked without being loaded.
    """
    previous = build.predecessor()
    while previous is not None:
        yield previous
        previous = previous.predecessor()


def first_meaningful_predecessor(build: BuildRef) -> BuildRef | None:
    """Return the nearest earlier build that ran to completion.

    Builds that are still running, aborted or not built are skipped.
    """
    for previous in iter_predecessors(build):
        outcome = previous.outcome()
        if outcome is not None and outcome.is_complete_build:
            return previous
        logger.spew(
            "Skipping predecessor without a comparable outcome",
            build=str(previous),
            outcome=str(outcome),
        )
    return None


class TrendClassifier:
    """Labels a build by comparing its outcome with the last
    meaningful build before it.

    Stateless; one instance can be shared freely.
    """

    def classify(self, build: BuildRef) -> Trend:
        """Return the trend of `build`.

        Args:
            build: A finished build

        Returns:
            Trend for the build

        Raises:
            MissingOutcome: If the build has no outcome yet
            UnknownOutcome: If the outcome is not one handled here
        """
        outcome = build.outcome()
        if outcome is None:
            raise MissingOutcome(build)

        trend = self._classify(build, outcome)
        logger.debug(
            "Classified build",
            build=str(build),
            outcome=str(outcome),
            trend=trend.name,
        )
        return trend

    def _classify(self, build: BuildRef, outcome: Outcome) -> Trend:
        if outcome is Outcome.ABORTED:
            return Trend.ABORTED
        if outcome is Outcome.NOT_BUILT:
            return Trend.NOT_BUILT

        if outcome not in (Outcome.SUCCESS, Outcome.UNSTABLE,
                           Outcome.FAILURE):
            raise UnknownOutcome(outcome, build)

        previous = first_meaningful_predecessor(build)
        prev_outcome = previous.outcome() if previous is not None else None

        if outcome is Outcome.SUCCESS:
            # Recovery from UNSTABLE counts as a fix too
            if (prev_outcome is not None
                    and prev_outcome.is_worse_than(Outcome.SUCCESS)):
                return Trend.FIXED
            return Trend.SUCCESS

        if outcome is Outcome.UNSTABLE:
            if prev_outcome is Outcome.UNSTABLE:
                return Trend.STILL_UNSTABLE
            if prev_outcome is Outcome.FAILURE:
                return Trend.NOW_UNSTABLE
            return Trend.UNSTABLE

        if prev_outcome is Outcome.FAILURE:
            return Trend.STILL_FAILING
        return Trend.FAILURE


_default_classifier = TrendClassifier()


def classify_build(build: BuildRef) -> Trend:
    """Classify `build` with a shared TrendClassifier."""
    return _default_classifier.classify(build)


__all__ = [
    "TrendClassifier",
    "classify_build",
    "first_meaningful_predecessor",
    "iter_predecessors",
]
