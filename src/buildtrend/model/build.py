"""Read interface over a job's build history, and an in-memory record."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from buildtrend.model.outcome import Outcome


@runtime_checkable
class BuildRef(Protocol):
    """What the classifier needs from a build.

    Hosts own the history and may append newer builds at any time;
    a build's outcome must not change once it is non-None.
    """

    def outcome(self) -> Outcome | None:
        """Terminal status, or None while the build is running."""
        ...

    def predecessor(self) -> BuildRef | None:
        """The previous build of the same job, or None for the first."""
        ...


class BuildRecord(BaseModel):
    """Immutable build node linked to the build before it."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(description="Build number within the job")
    result: Outcome | None = Field(
        default=None,
        description="Terminal status, None while still running",
    )
    previous: BuildRecord | None = Field(
        default=None,
        description="Immediately preceding build",
    )

    def outcome(self) -> Outcome | None:
        return self.result

    def predecessor(self) -> BuildRecord | None:
        return self.previous

    def __repr__(self) -> str:
        # Don't recurse into the chain
        result = self.result.name if self.result else None
        return f"BuildRecord(number={self.number}, result={result})"

    __str__ = __repr__


def coerce_outcome(value: Outcome | str | None) -> Outcome | None:
    """Accept an Outcome, its name in any case, or None.

    Raises:
        ValueError: If a string names no outcome
    """
    if value is None or isinstance(value, Outcome):
        return value
    try:
        return Outcome[value.strip().upper()]
    except KeyError:
        valid = ", ".join(o.name for o in Outcome)
        raise ValueError(
            f"Unknown outcome '{value}' (expected one of: {valid})"
        ) from None


def build_chain(outcomes: Sequence[Outcome | str | None]) -> BuildRecord:
    """Link outcomes (newest first) into records; return the newest.

    The oldest build is number 1.

    Raises:
        ValueError: If outcomes is empty or names an unknown outcome
    """
    if not outcomes:
        raise ValueError("A build history needs at least one build")

    head = None
    for number, value in enumerate(reversed(outcomes), start=1):
        head = BuildRecord(
            number=number,
            result=coerce_outcome(value),
            previous=head,
        )
    return head


__all__ = ["BuildRef", "BuildRecord", "build_chain", "coerce_outcome"]
