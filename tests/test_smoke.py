"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from dagedit.__main__ import main


def test_import():
    import dagedit

    assert dagedit.EditSession is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "DAG export files" in result.output
