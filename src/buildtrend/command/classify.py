"""Classify command - print the trend of a job's newest build."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, Field, ValidationError

from buildtrend.classifier import TrendClassifier
from buildtrend.core.errors import MissingOutcome
from buildtrend.core.log import logger
from buildtrend.history import load_history

if TYPE_CHECKING:
    from buildtrend.core.config import State


class ClassifyCommand(BaseModel):
    """Classify the newest build in a history file.

    The file lists the job's builds newest first; the trend
    description of the first one is printed to stdout.
    """

    history: Path = Field(
        description="YAML file listing the job's builds, newest first",
    )
    upper: bool = Field(
        default=False,
        description="Print the description in upper case",
    )

    def run(self, state: State) -> int:
        """Run the classification.

        Args:
            state: Loaded application state

        Returns:
            Exit code (0=classified, 1=unreadable history or newest
            build unfinished)
        """
        try:
            job_history = load_history(self.history)
        except (OSError, ValidationError, yaml.YAMLError) as e:
            logger.error(
                "Cannot read build history",
                file=str(self.history),
                error=str(e),
            )
            return 1
        head = job_history.head()

        try:
            trend = TrendClassifier().classify(head)
        except MissingOutcome as e:
            logger.error(str(e), job=job_history.job)
            return 1

        logger.info(
            "Trend computed",
            job=job_history.job,
            build=head.number,
            trend=trend.name,
        )
        print(trend.upper_case_description if self.upper
              else trend.description)
        return 0
