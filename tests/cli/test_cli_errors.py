# tests/cli/test_cli_errors.py
from pathlib import Path
from typer.testing import CliRunner
from gtree.cli.app import app

runner = CliRunner()


def test_missing_starting_directory():
    r = runner.invoke(app, [])
    assert r.exit_code == 1
    assert "No starting directory specified" in r.output


def test_invalid_starting_directory(tmp_path: Path):
    r = runner.invoke(app, [str(tmp_path / "nope")])
    assert r.exit_code == 1
    assert "Invalid starting directory specified" in r.output


def test_file_is_not_a_starting_directory(tmp_path: Path):
    f = tmp_path / "plain.txt"
    f.write_text("x")
    r = runner.invoke(app, [str(f)])
    assert r.exit_code == 1
    assert "Invalid starting directory specified" in r.output


def test_unknown_option_fails(tmp_path: Path):
    r = runner.invoke(app, ["-x", str(tmp_path)])
    assert r.exit_code != 0


def test_non_integer_depth_fails(tmp_path: Path):
    r = runner.invoke(app, ["-d", "deep", str(tmp_path)])
    assert r.exit_code != 0
