from __future__ import annotations

import dataclasses
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from wireglobe.core.style import DEFAULT_STYLE
from wireglobe.export.svg import export_svg, scene_to_svg
from wireglobe.render.scene import Scene

_NS = "{http://www.w3.org/2000/svg}"


def _parse(text: str) -> ET.Element:
    return ET.fromstring(text.encode("utf-8"))


def test_empty_scene_has_background_only() -> None:
    root = _parse(scene_to_svg(Scene(), side=120, style=DEFAULT_STYLE))

    assert root.tag == f"{_NS}svg"
    assert root.get("viewBox") == "0 0 120 120"
    children = list(root)
    assert len(children) == 1
    assert children[0].tag == f"{_NS}rect"
    assert children[0].get("fill") == "#FFFFFF"


def test_segments_and_dots_become_lines_and_circles() -> None:
    scene = Scene()
    scene.draw_segment(-1, 0, 0, 1, 0, 0)
    scene.draw_dot(0, 0, -1, 0.02)
    scene.colorize((1.0, 0.0, 0.0, 0.5))

    style = dataclasses.replace(DEFAULT_STYLE, line_width=1.0, scale=1.0)
    root = _parse(scene_to_svg(scene, side=200, style=style))

    line = root.find(f"{_NS}line")
    circle = root.find(f"{_NS}circle")
    assert line is not None and circle is not None
    assert line.get("stroke") == "#FF0000"
    assert line.get("stroke-opacity") == "0.500"
    # line_width=1 は一辺の 1/50
    assert line.get("stroke-width") == "4.000"
    assert (line.get("x1"), line.get("x2")) == ("0.000", "200.000")
    assert circle.get("fill") == "#FF0000"
    assert circle.get("fill-opacity") == "0.500"


def test_opaque_colors_omit_opacity() -> None:
    scene = Scene()
    scene.draw_segment(0, 0, 0, 1, 0, 0)
    text = scene_to_svg(scene, side=50, style=DEFAULT_STYLE)
    assert "opacity" not in text


def test_near_primitives_are_written_last() -> None:
    scene = Scene()
    scene.draw_dot(0, 0, -1, 0.01)
    scene.colorize((1, 0, 0))
    scene.begin()
    scene.draw_dot(0, 0, 1, 0.01)
    scene.colorize((0, 0, 1))
    scene.end()

    circles = _parse(scene_to_svg(scene, side=64, style=DEFAULT_STYLE)).findall(f"{_NS}circle")
    assert [c.get("fill") for c in circles] == ["#0000FF", "#FF0000"]


def test_output_is_deterministic() -> None:
    scene = Scene()
    scene.draw_segment(0.1, 0.2, 0.3, -0.4, 0.5, -0.6)
    a = scene_to_svg(scene, side=256, style=DEFAULT_STYLE)
    b = scene_to_svg(scene, side=256, style=DEFAULT_STYLE)
    assert a == b
    assert a.endswith("</svg>\n")


def test_rejects_non_positive_side() -> None:
    with pytest.raises(ValueError):
        scene_to_svg(Scene(), side=0, style=DEFAULT_STYLE)


def test_export_svg_creates_parent_dirs(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "globe.svg"
    path = export_svg(Scene(), out, side=32, style=DEFAULT_STYLE)

    assert path == out
    assert out.read_text(encoding="utf-8") == scene_to_svg(Scene(), side=32, style=DEFAULT_STYLE)
