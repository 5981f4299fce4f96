"""CLI command modules for buildtrend."""

from buildtrend.command.classify import ClassifyCommand

__all__ = ["ClassifyCommand"]
