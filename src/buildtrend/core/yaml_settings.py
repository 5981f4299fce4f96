"""YAML configuration loading with include directive support."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

from buildtrend.core.log import logger

DEFAULTS_FILE = Path(__file__).parent.parent / "defaults" / "default.yaml"
CONFIG_NAME = "buildtrend.yaml"


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """YAML settings source layering several files.

    Loads, in increasing priority: package defaults, the user config
    file, ./buildtrend.yaml, then any explicitly given yaml_file.
    Each file may pull in others with an `include:` key (a path or a
    list of paths, relative to the including file). Later data is
    deep-merged over earlier data.
    """

    def __init__(self, settings_cls: type[BaseSettings], yaml_file=None):
        super().__init__(settings_cls, yaml_file)

    def _read_files(self, files, deep_merge: bool = True):
        files_to_load = [
            DEFAULTS_FILE,
            Path(user_config_dir("buildtrend", appauthor=False))
            / CONFIG_NAME,
            Path(CONFIG_NAME),
        ]
        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        result = {}
        for file_path in files_to_load:
            if file_path.is_file():
                with logger.span(
                    "Configuration loading", file=str(file_path)
                ):
                    data = self._load_file_recursive(file_path, set())
                    result = self._deep_merge(result, data)
            else:
                logger.debug(
                    "Configuration file not found (skipping)",
                    file=str(file_path),
                )
        return result

    def _load_file_recursive(
        self, filepath: Path, visited: set[Path]
    ) -> dict:
        """Load a file with its include: directives resolved.

        Included files are merged first; the including file wins.

        Raises:
            ValueError: If an include cycle is found
        """
        filepath = filepath.resolve()
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        includes = data.pop("include", None) or []
        if isinstance(includes, str):
            includes = [includes]

        merged = {}
        for inc in includes:
            inc_path = Path(inc).expanduser()
            if not inc_path.is_absolute():
                inc_path = filepath.parent / inc_path
            logger.debug(
                "Including configuration",
                included_from=str(filepath),
                include_file=str(inc_path),
            )
            merged = self._deep_merge(
                merged, self._load_file_recursive(inc_path, visited.copy())
            )
        return self._deep_merge(merged, data)

    @classmethod
    def _deep_merge(cls, base: dict, override: dict) -> dict:
        """Merge override into a copy of base; override wins."""
        result = base.copy()
        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = cls._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
