"""Build outcome values and their severity order."""

from __future__ import annotations

from enum import Enum


class Outcome(Enum):
    """Terminal status of a single build.

    Values are ordinals: SUCCESS < UNSTABLE < FAILURE is the severity
    order trends compare on. NOT_BUILT and ABORTED sort after FAILURE
    but carry no signal about the code and are skipped when looking
    for a build to compare against.
    """

    SUCCESS = 0
    UNSTABLE = 1
    FAILURE = 2
    NOT_BUILT = 3
    ABORTED = 4

    @property
    def is_complete_build(self) -> bool:
        """True for outcomes of a build that actually ran to the end."""
        return self.value <= Outcome.FAILURE.value

    def is_worse_than(self, other: Outcome) -> bool:
        return self.value > other.value

    def __str__(self) -> str:
        return self.name


__all__ = ["Outcome"]
