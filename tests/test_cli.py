from __future__ import annotations

from pathlib import Path
import textwrap

from PIL import Image
from typer.testing import CliRunner

from glyphsmith.ui.cli import app


def _flat(text: str) -> str:
    return " ".join(text.split())


def _write_plan(tmp_path: Path, font_dir: Path, *, font: str = "DemoBlock", extra: str = "") -> Path:
    path = tmp_path / "plan.yaml"
    path.write_text(
        textwrap.dedent(
            f"""\
            target_directory: {tmp_path / "png"}
            font_dirs: [{font_dir}]
            selections:
              - name: latin
                fonts:
                  names: [{font}]
                  size: 40
                  style: plain
                pixel_width: 64
                pixel_height: 64
                colors: [black{extra}]
                ranges:
                  - {{start: "U+0041", end: "U+0044"}}
            """
        ),
        encoding="utf-8",
    )
    return path


def test_generate_exports_the_plan(tmp_path: Path, block_font_dir: Path) -> None:
    plan = _write_plan(tmp_path, block_font_dir)
    runner = CliRunner()

    result = runner.invoke(app, ["generate", str(plan), "--workers", "2"])

    assert result.exit_code == 0, result.output
    directory = tmp_path / "png" / "latin" / "black" / "U+0041_U+0044"
    assert sorted(path.name for path in directory.iterdir()) == ["DemoBlock_U+0041.png"]
    with Image.open(directory / "DemoBlock_U+0041.png") as image:
        assert image.size == (64, 64)
    assert "File count: 1" in result.stdout
    assert "No font support: 66-67" in result.stdout
    assert "Files written: 1" in result.stdout


def test_generate_output_option_overrides_target(tmp_path: Path, block_font_dir: Path) -> None:
    plan = _write_plan(tmp_path, block_font_dir, extra=", white")
    runner = CliRunner()

    result = runner.invoke(app, ["generate", str(plan), "--output", str(tmp_path / "elsewhere")])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "elsewhere" / "latin" / "white" / "U+0041_U+0044").is_dir()
    assert not (tmp_path / "png").exists()
    assert "File count: 2" in result.stdout


def test_generate_plan_errors_exit_with_code_two(tmp_path: Path, block_font_dir: Path) -> None:
    plan = _write_plan(tmp_path, block_font_dir, extra=", chartreuse")
    runner = CliRunner()

    result = runner.invoke(app, ["generate", str(plan)])

    assert result.exit_code == 2
    assert "Plan creation failed" in _flat(result.output)
    assert "unknown color" in _flat(result.output)


def test_generate_unknown_font_is_a_plan_error(tmp_path: Path, block_font_dir: Path) -> None:
    plan = _write_plan(tmp_path, block_font_dir, font="Nope Sans")
    runner = CliRunner()

    result = runner.invoke(app, ["generate", str(plan)])

    assert result.exit_code == 2
    assert "Nope Sans" in _flat(result.output)


def test_generate_missing_plan_exits_with_code_two(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["generate", str(tmp_path / "absent.yaml")])

    assert result.exit_code == 2
    assert "Plan creation failed" in _flat(result.output)


def test_range_command_reports_counts(tmp_path: Path, block_font_dir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "range",
            "65",
            "U+0043",
            "--font",
            "DemoBlock",
            "--font-dir",
            str(block_font_dir),
            "--size",
            "32",
            "--color",
            "light gray",
            "--width",
            "48",
            "--height",
            "48",
            "--output",
            str(tmp_path / "out"),
        ],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "DemoBlock_U+0041.png").exists()
    assert "Created: 1" in result.stdout
    assert "No Image: 1" in result.stdout
    assert "Size: 48x48" in result.stdout


def test_range_command_validates_bounds(tmp_path: Path, block_font_dir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app, ["range", "70", "65", "--font", "DemoBlock", "--font-dir", str(block_font_dir)]
    )

    assert result.exit_code == 2


def test_range_command_rejects_unknown_font(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app, ["range", "65", "70", "--font", "Ghost", "--output", str(tmp_path)]
    )

    assert result.exit_code == 2
    assert "not a valid font option" in _flat(result.output)


def test_fonts_lists_families(block_font_dir: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["fonts", "--font-dir", str(block_font_dir)])

    assert result.exit_code == 0, result.output
    assert "1. DemoBlock" in result.stdout


def test_fonts_without_any_fonts(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["fonts", "--font-dir", str(tmp_path)])

    assert result.exit_code == 0
    assert "No fonts found." in result.stdout
