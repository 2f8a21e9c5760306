from typer.testing import CliRunner

import glyphsmith
from glyphsmith.ui.cli import app


def test_get_version_matches_public_api() -> None:
    assert glyphsmith.get_version() == glyphsmith.__version__
    assert isinstance(glyphsmith.__version__, str)


def test_cli_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.strip() == glyphsmith.get_version()
