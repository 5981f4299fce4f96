"""Value types: outcomes, trends and build records."""

from buildtrend.model.build import BuildRecord, BuildRef, build_chain
from buildtrend.model.outcome import Outcome
from buildtrend.model.trend import Trend

__all__ = ["BuildRecord", "BuildRef", "Outcome", "Trend", "build_chain"]
