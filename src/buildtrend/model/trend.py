"""Trend labels for a build compared with its history."""

from enum import Enum


class Trend(Enum):
    """Outcome of a build relative to the last meaningful one before it.

    Each member's value is its short English description.
    """

    # Previous build was FAILURE or UNSTABLE and this one is SUCCESS
    FIXED = "Fixed"
    # This build (and the previous one, if any) is SUCCESS
    SUCCESS = "Success"
    # Previous build was FAILURE and this one is 'only' UNSTABLE
    NOW_UNSTABLE = "Now unstable"
    STILL_UNSTABLE = "Still unstable"
    # Previous build (if any) was SUCCESS and this one is UNSTABLE
    UNSTABLE = "Unstable"
    STILL_FAILING = "Still failing"
    # Previous build (if any) was SUCCESS or UNSTABLE, this one failed
    FAILURE = "Failure"
    ABORTED = "Aborted"
    # Build didn't run (yet)
    NOT_BUILT = "Not built"

    @property
    def description(self) -> str:
        return self.value

    @property
    def upper_case_description(self) -> str:
        return self.value.upper()

    def __str__(self) -> str:
        return self.value


__all__ = ["Trend"]
