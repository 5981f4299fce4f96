"""Exceptions raised while classifying a build."""

from __future__ import annotations

from typing import Any


class ClassificationError(Exception):
    """Base class for classification failures."""


class MissingOutcome(ClassificationError):
    """The build being classified has not finished yet."""

    def __init__(self, build: Any):
        self.build = build
        super().__init__(
            f"Build {build!r} has no outcome; "
            f"only finished builds can be classified"
        )


class UnknownOutcome(ClassificationError):
    """The build's outcome is not one the classifier understands."""

    def __init__(self, outcome: Any, build: Any):
        self.outcome = outcome
        self.build = build
        super().__init__(f"Unknown outcome: '{outcome}' for build: {build!r}")


__all__ = ["ClassificationError", "MissingOutcome", "UnknownOutcome"]
