"""Pytest configuration and fixtures for buildtrend tests."""

import tempfile
from pathlib import Path

import pytest

from buildtrend.core.log import ConsoleSink, setup_logger
from buildtrend.model.outcome import Outcome


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Console-only logging at debug level for the whole session."""
    test_log_root = Path(tempfile.gettempdir()) / "buildtrend-tests"
    setup_logger(
        log_root=test_log_root,
        job_name="test",
        console=ConsoleSink(level="debug"),
    )


class CountingBuild:
    """BuildRef test double that counts predecessor() calls.

    Plain object rather than BuildRecord so chains can be long
    without pydantic recursing through them.
    """

    calls = 0

    def __init__(self, result, previous=None, number=1):
        self.result = result
        self.previous = previous
        self.number = number

    def outcome(self):
        return self.result

    def predecessor(self):
        CountingBuild.calls += 1
        return self.previous

    def __repr__(self):
        return f"CountingBuild(#{self.number} {self.result})"


@pytest.fixture
def counting_chain():
    """Build a CountingBuild chain from outcomes, newest first."""
    def _chain(outcomes):
        head = None
        for number, result in enumerate(reversed(outcomes), start=1):
            head = CountingBuild(result, head, number)
        CountingBuild.calls = 0
        return head
    return _chain


@pytest.fixture
def outcomes():
    """The five outcomes, for parametrizing inside tests."""
    return list(Outcome)
