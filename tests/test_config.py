from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from glyphsmith.core.colors import BLACK
from glyphsmith.core.config import GeneratorPlan, load_plan, parse_plan
from glyphsmith.core.exceptions import PlanError
from glyphsmith.fonts.locator import FontLocator
from glyphsmith.fonts.typeface import FontStyle, TypefaceRegistry


def _write_plan(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "plan.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def _selection(**overrides: object) -> dict[str, object]:
    selection: dict[str, object] = {
        "name": "latin",
        "fonts": {"names": ["DemoBlock"], "size": 32},
        "pixel_width": 48,
        "pixel_height": 48,
        "colors": ["black"],
        "ranges": [{"start": 65, "end": 91}],
    }
    selection.update(overrides)
    return selection


def test_load_plan_parses_yaml(tmp_path: Path) -> None:
    path = _write_plan(
        tmp_path,
        """\
        target_directory: out
        font_dirs: [fonts]
        selections:
          - name: latin
            fonts:
              names: [DejaVu Sans, Noto Sans Symbols 2]
              size: 48
              style: 2
            pixel_width: 64
            pixel_height: 64
            colors:
              - black
              - {red: 10, green: 20, blue: 30}
            ranges:
              - {start: 65, end: 91}
              - {start: "U+00C0", end: "0x100"}
        """,
    )

    plan = load_plan(path)

    assert plan.target_directory == Path("out")
    assert plan.font_dirs == [Path("fonts")]
    (selection,) = plan.selections
    assert selection.fonts.style is FontStyle.BOLD
    assert [color.to_color().name for color in selection.colors] == ["black", "RGBA_10_20_30_255"]
    assert [item.as_tuple() for item in selection.ranges] == [(65, 91), (0xC0, 0x100)]


@pytest.mark.parametrize(
    ("overrides", "fragment"),
    [
        ({"colors": ["chartreuse"]}, "unknown color"),
        ({"colors": [{"red": 1, "green": 2}]}, "red, green and blue"),
        ({"colors": [{"name": "black", "red": 1}]}, "not both"),
        ({"colors": []}, "colors"),
        ({"ranges": [{"start": 70, "end": 65}]}, "less than start"),
        ({"ranges": [{"start": "U+ZZZZ", "end": 65}]}, "invalid code point"),
        ({"pixel_width": 0}, "pixel_width"),
        ({"fonts": {"names": ["A"], "size": 12, "style": 7}}, "style"),
        ({"fonts": {"names": [], "size": 12}}, "names"),
        ({"unexpected": True}, "unexpected"),
    ],
)
def test_invalid_selections_raise_plan_error(overrides: dict[str, object], fragment: str) -> None:
    with pytest.raises(PlanError) as excinfo:
        parse_plan({"selections": [_selection(**overrides)]})

    assert fragment in str(excinfo.value)


def test_duplicate_selection_names_are_rejected() -> None:
    with pytest.raises(PlanError, match="duplicate selection name"):
        parse_plan({"selections": [_selection(), _selection()]})


def test_load_plan_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PlanError, match="Failed to read"):
        load_plan(tmp_path / "absent.yaml")


def test_load_plan_reports_bad_yaml(tmp_path: Path) -> None:
    path = _write_plan(tmp_path, "selections: [\n")

    with pytest.raises(PlanError, match="Invalid YAML"):
        load_plan(path)


def test_load_plan_requires_a_mapping(tmp_path: Path) -> None:
    path = _write_plan(tmp_path, "- just\n- a list\n")

    with pytest.raises(PlanError, match="must be a mapping"):
        load_plan(path)


def test_build_requests_resolves_typefaces(block_font_dir: Path) -> None:
    plan = GeneratorPlan.model_validate(
        {"font_dirs": [str(block_font_dir)], "selections": [_selection()]}
    )

    (request,) = plan.build_requests(TypefaceRegistry(plan.font_locator(use_fontconfig=False)))

    assert request.name == "latin"
    assert [typeface.name for typeface in request.typefaces] == ["DemoBlock"]
    assert request.colors == (BLACK,)
    assert request.ranges == ((65, 91),)
    assert (request.width, request.height, request.size) == (48, 48, 32)


def test_unknown_font_is_a_plan_error(tmp_path: Path) -> None:
    plan = parse_plan({"selections": [_selection(fonts={"names": ["Nope Sans"], "size": 12})]})
    registry = TypefaceRegistry(FontLocator(search_paths=[tmp_path], use_fontconfig=False))

    with pytest.raises(PlanError, match="Nope Sans"):
        plan.build_requests(registry)


def test_empty_range_is_accepted_next_to_a_real_one(block_font_dir: Path) -> None:
    ranges = [{"start": "U+005A", "end": "U+005A"}, {"start": 65, "end": 68}]
    plan = GeneratorPlan.model_validate(
        {"font_dirs": [str(block_font_dir)], "selections": [_selection(ranges=ranges)]}
    )

    (request,) = plan.build_requests(TypefaceRegistry(plan.font_locator(use_fontconfig=False)))

    assert request.ranges == ((0x5A, 0x5A), (65, 68))
    assert list(request.codepoints()) == [65, 66, 67]


def test_only_empty_ranges_is_a_plan_error(block_font_dir: Path) -> None:
    plan = GeneratorPlan.model_validate(
        {
            "font_dirs": [str(block_font_dir)],
            "selections": [_selection(ranges=[{"start": 65, "end": 65}])],
        }
    )

    with pytest.raises(PlanError, match="no non-empty range"):
        plan.build_requests(TypefaceRegistry(plan.font_locator(use_fontconfig=False)))
