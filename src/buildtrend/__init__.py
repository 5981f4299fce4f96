"""Build result trend classification."""

from buildtrend.classifier import (
    TrendClassifier,
    classify_build,
    first_meaningful_predecessor,
    iter_predecessors,
)
from buildtrend.core.errors import (
    ClassificationError,
    MissingOutcome,
    UnknownOutcome,
)
from buildtrend.model import BuildRecord, BuildRef, Outcome, Trend, build_chain

__all__ = [
    "BuildRecord",
    "BuildRef",
    "ClassificationError",
    "MissingOutcome",
    "Outcome",
    "Trend",
    "TrendClassifier",
    "UnknownOutcome",
    "build_chain",
    "classify_build",
    "first_meaningful_predecessor",
    "iter_predecessors",
]
