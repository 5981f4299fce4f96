"""Test log level filtering, especially spew level."""

import pytest

from buildtrend.core.log import (
    LEVELS,
    ConsoleSink,
    FileSink,
    level_name,
    setup_logger,
)


def _log_all_levels(logger):
    logger.spew("SPEW message")
    logger.trace("TRACE message")
    logger.debug("DEBUG message")
    logger.info("INFO message")
    logger.warn("WARN message")
    logger.error("ERROR message")


@pytest.mark.parametrize("level, kept, dropped", [
    ("spew", ["SPEW", "TRACE", "DEBUG", "INFO", "WARN", "ERROR"], []),
    ("trace", ["TRACE", "DEBUG", "INFO", "WARN", "ERROR"], ["SPEW"]),
    ("debug", ["DEBUG", "INFO", "WARN", "ERROR"], ["SPEW", "TRACE"]),
    ("info", ["INFO", "WARN", "ERROR"], ["SPEW", "TRACE", "DEBUG"]),
    ("warn", ["WARN", "ERROR"], ["SPEW", "TRACE", "DEBUG", "INFO"]),
    ("error", ["ERROR"], ["SPEW", "TRACE", "DEBUG", "INFO", "WARN"]),
])
def test_file_sink_filters_by_level(tmp_path, level, kept, dropped):
    """File sink keeps messages at or above its level."""
    log_file = tmp_path / f"{level}.log"

    logger = setup_logger(
        log_root=tmp_path,
        job_name="test",
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, level=level, path=str(log_file)),
    )
    _log_all_levels(logger)
    logger.close()

    content = log_file.read_text()
    for name in kept:
        assert f"{name} message" in content
    for name in dropped:
        assert f"{name} message" not in content


def test_sink_inherits_logger_level(tmp_path):
    """A sink without its own level uses the logger's."""
    log_file = tmp_path / "inherit.log"

    logger = setup_logger(
        log_root=tmp_path,
        job_name="test",
        level="warn",
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, path=str(log_file)),
    )
    assert logger.file.level == "warn"
    assert logger.console.level == "warn"

    logger.info("INFO message")
    logger.warn("WARN message")
    logger.close()

    content = log_file.read_text()
    assert "INFO message" not in content
    assert "WARN message" in content


def test_level_ordering():
    """Severity numbers increase from spew to fatal."""
    order = ['spew', 'trace', 'debug', 'info', 'warn', 'error', 'fatal']
    numbers = [LEVELS[name] for name in order]
    assert numbers == sorted(numbers)
    assert len(set(numbers)) == len(numbers)


def test_level_name_round_trip():
    for name, number in LEVELS.items():
        assert level_name(number) == name
    assert level_name(0) == "unknown"
