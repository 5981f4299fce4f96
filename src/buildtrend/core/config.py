"""Application configuration."""

from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from buildtrend.core.base import BaseConfig
from buildtrend.core.log import Logger
from buildtrend.core.yaml_settings import YamlWithIncludesSettingsSource


class Config(BaseConfig):
    """Settings loaded from YAML/env/CLI.

    Building a Config configures the global logger; closing it closes
    the logger's sinks, which the global logger shares.
    """

    job: str = Field(
        default="default",
        description="Job name, used to place log files",
    )
    log_level: str = Field(
        default="info",
        description=(
            "Log level when logger.level is not set: "
            "'spew', 'trace', 'debug', 'info', 'warn', 'error', 'fatal'"
        ),
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "buildtrend"
        ),
        description="Root directory for log files",
    )
    logger: Logger | None = Field(
        default=None,
        description="Logger sinks and levels",
    )

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Initialize the global logger from this config."""
        from buildtrend.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger(level=self.log_level)
        elif 'level' not in self.logger.model_fields_set:
            self.logger.level = self.log_level

        setup_logger(
            log_root=self.log_root,
            job_name=self.job,
            level=self.logger.level,
            console=self.logger.console,
            file=self.logger.file,
        )
        return self


class State(BaseSettings):
    """Everything a command needs: the loaded configuration.

    Loaded from init arguments, environment variables
    (BUILDTREND_CONFIG__LOG_LEVEL=debug), .env, YAML files and file
    secrets, in that priority order.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDTREND_",
        env_nested_delimiter="__",
        cli_prog_name="buildtrend",
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            file_secret_settings,
        )


__all__ = ["Config", "State"]
