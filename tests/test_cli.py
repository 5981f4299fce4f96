"""Tests for the buildtrend command line."""

import pytest
from pydantic_settings import CliApp

from buildtrend.cli import CliState


@pytest.fixture
def run_cli(tmp_path, monkeypatch):
    """Run the CLI in an empty directory and return its exit code."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "buildtrend.core.yaml_settings.user_config_dir",
        lambda *args, **kwargs: str(tmp_path / "user-config"),
    )

    def _run(*args):
        with pytest.raises(SystemExit) as exc_info:
            CliApp.run(CliState, cli_args=list(args))
        return exc_info.value.code
    return _run


@pytest.fixture
def quiet_cli(run_cli, monkeypatch):
    """Like run_cli, with console logging off."""
    monkeypatch.setenv("BUILDTREND_CONFIG__LOGGER__CONSOLE__ENABLED", "false")
    return run_cli


def _write(tmp_path, text):
    path = tmp_path / "history.yaml"
    path.write_text(text)
    return path


def test_classify_prints_description(quiet_cli, tmp_path, capsys):
    path = _write(tmp_path, "builds: [SUCCESS, ABORTED, FAILURE]\n")

    code = quiet_cli("classify", "--history", str(path))

    assert code == 0
    assert capsys.readouterr().out == "Fixed\n"


def test_classify_upper_case(quiet_cli, tmp_path, capsys):
    path = _write(tmp_path, "builds: [UNSTABLE, FAILURE]\n")

    code = quiet_cli("classify", "--history", str(path), "--upper")

    assert code == 0
    assert capsys.readouterr().out == "NOW UNSTABLE\n"


def test_stdout_holds_only_description_with_console_logging(
    run_cli, tmp_path, capsys
):
    """Console log lines go to stderr, leaving stdout to the trend."""
    path = _write(tmp_path, "builds: [UNSTABLE, ABORTED, FAILURE]\n")

    code = run_cli("--config.log_level", "debug",
                   "classify", "--history", str(path))

    assert code == 0
    assert capsys.readouterr().out == "Now unstable\n"


def test_unfinished_build_exits_nonzero(quiet_cli, tmp_path, capsys):
    path = _write(tmp_path, "builds: [{number: 7}, SUCCESS]\n")

    code = quiet_cli("classify", "--history", str(path))

    assert code == 1
    assert capsys.readouterr().out == ""


def test_misspelled_outcome_exits_nonzero(quiet_cli, tmp_path, capsys):
    """A bad history file is reported, not raised."""
    path = _write(tmp_path, "builds: [SUCESS, FAILURE]\n")

    code = quiet_cli("classify", "--history", str(path))

    assert code == 1
    assert capsys.readouterr().out == ""


def test_missing_history_file_exits_nonzero(quiet_cli, tmp_path, capsys):
    code = quiet_cli("classify", "--history", str(tmp_path / "none.yaml"))

    assert code == 1
    assert capsys.readouterr().out == ""


def test_no_subcommand_shows_help(quiet_cli, capsys):
    code = quiet_cli()

    assert code == 1
    assert "classify" in capsys.readouterr().out
