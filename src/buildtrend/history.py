"""Load a job's build history from a YAML file."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from buildtrend.core.log import logger
from buildtrend.model.build import BuildRecord, coerce_outcome
from buildtrend.model.outcome import Outcome


class BuildEntry(BaseModel):
    """One build as written in a history file."""

    number: int | None = Field(
        default=None,
        description="Build number; defaults to one past the build before",
    )
    result: Outcome | None = Field(
        default=None,
        description="Outcome name (any case); omit for a running build",
    )

    @model_validator(mode='before')
    @classmethod
    def _accept_bare_outcome(cls, data):
        # "- SUCCESS" is shorthand for "- {result: SUCCESS}"
        if data is None or isinstance(data, (str, Outcome)):
            return {"result": data}
        return data

    @field_validator('result', mode='before')
    @classmethod
    def _parse_result(cls, value):
        return coerce_outcome(value)


class JobHistory(BaseModel):
    """A job's builds, newest first."""

    job: str = Field(default="default", description="Job name")
    builds: list[BuildEntry] = Field(
        min_length=1,
        description="Builds of the job, newest first",
    )

    def head(self) -> BuildRecord:
        """Link the entries and return the newest build."""
        head = None
        count = len(self.builds)
        number = 0
        for entry in reversed(self.builds):
            # Unnumbered builds follow the build before them
            if entry.number is not None:
                number = entry.number
            else:
                number += 1
            head = BuildRecord(number=number, result=entry.result,
                               previous=head)
        logger.debug("Linked build history", job=self.job, builds=count)
        return head


def load_history(path: Path) -> JobHistory:
    """Read and validate a history file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the document is malformed
    """
    path = Path(path)
    with logger.span("Loading build history", file=str(path)):
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return JobHistory.model_validate(data)


__all__ = ["BuildEntry", "JobHistory", "load_history"]
