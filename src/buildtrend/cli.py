#!/usr/bin/env python3
"""buildtrend CLI - classify build result trends."""

import contextlib
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from buildtrend.command.classify import ClassifyCommand
from buildtrend.core.config import State
from buildtrend.core.log import logger


class CliState(State):
    """Classify the result trend of a job's newest build.

    A trend compares the newest build's outcome with the last earlier
    build that ran to completion: Fixed, Still failing, Now unstable,
    and so on. Aborted and not-built runs are skipped.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.log_level debug)
    2. Environment variables (BUILDTREND_CONFIG__LOG_LEVEL=debug)
    3. .env file
    4. buildtrend.yaml in the current directory, then the user
       config directory, then package defaults
    """

    classify: CliSubCommand[ClassifyCommand]

    def cli_cmd(self):
        """Dispatch to the active subcommand, or show help."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            # --help exits 0 from argparse; no subcommand is an error
            with contextlib.suppress(SystemExit):
                CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        # Closes file sinks however the command exits
        with logger:
            exit_code = subcommand.run(self)
        raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
