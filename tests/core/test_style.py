"""表示スタイルとスタイル上書き（`wireglobe.core.style`）のテスト。"""

from __future__ import annotations

import dataclasses

import pytest

from wireglobe.core.style import (
    DEFAULT_STYLE,
    SetColor,
    Style,
    apply_overrides,
    check_overrides,
    coerce_color,
    color,
    color_to_hex,
    gray,
    rgb01_to_rgb255,
)


class _Recorder:
    def __init__(self) -> None:
        self.colors: list[tuple[float, ...]] = []

    def colorize(self, c) -> None:
        self.colors.append(c)


def test_coerce_color_appends_alpha_and_clamps() -> None:
    assert coerce_color((0.2, 0.4, 0.6)) == (0.2, 0.4, 0.6, 1.0)
    assert coerce_color([1.5, -0.5, 0.5, 0.25]) == (1.0, 0.0, 0.5, 0.25)


@pytest.mark.parametrize("value", [(0.1, 0.2), (0.1, 0.2, 0.3, 0.4, 0.5), "red", None, ("a", 0, 0)])
def test_coerce_color_rejects_invalid_values(value) -> None:
    with pytest.raises(ValueError):
        coerce_color(value)


def test_gray_and_hex_conversion() -> None:
    assert rgb01_to_rgb255(gray(192)) == (192, 192, 192)
    assert color_to_hex(gray(32)) == "#202020"
    assert color_to_hex((1.0, 0.0, 0.0, 0.3)) == "#FF0000"


def test_default_style_values() -> None:
    assert rgb01_to_rgb255(DEFAULT_STYLE.graticule_color[:3]) == (192, 192, 192)
    assert rgb01_to_rgb255(DEFAULT_STYLE.line_color[:3]) == (32, 32, 32)
    assert DEFAULT_STYLE.dot_color == (1.0, 0.0, 0.0, 1.0)
    assert DEFAULT_STYLE.background == (1.0, 1.0, 1.0, 1.0)
    assert DEFAULT_STYLE.line_width == pytest.approx(0.1)
    assert DEFAULT_STYLE.scale == pytest.approx(0.7)


def test_style_is_immutable_and_replaceable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_STYLE.scale = 1.0  # type: ignore[misc]

    wide = dataclasses.replace(DEFAULT_STYLE, line_width=0.5)
    assert wide.line_width == 0.5
    assert DEFAULT_STYLE.line_width == pytest.approx(0.1)


def test_style_rejects_invalid_numbers() -> None:
    with pytest.raises(ValueError):
        dataclasses.replace(DEFAULT_STYLE, line_width=-0.1)
    with pytest.raises(ValueError):
        dataclasses.replace(DEFAULT_STYLE, scale=0.0)


def test_style_allows_zero_line_width() -> None:
    s = Style(
        graticule_color=(0, 0, 0),
        line_color=(0, 0, 0),
        dot_color=(0, 0, 0),
        background=(1, 1, 1),
        line_width=0,
        scale=1,
    )
    assert s.line_width == 0.0
    assert s.graticule_color == (0.0, 0.0, 0.0, 1.0)


def test_color_builds_set_color() -> None:
    override = color((0.0, 0.5, 1.0))
    assert isinstance(override, SetColor)
    assert override.color == (0.0, 0.5, 1.0, 1.0)


def test_apply_overrides_applies_base_then_overrides_in_order() -> None:
    target = _Recorder()
    apply_overrides(target, SetColor((0, 0, 0)), [color((1, 0, 0)), color((0, 1, 0))])
    assert target.colors == [(0.0, 0.0, 0.0, 1.0), (1.0, 0.0, 0.0, 1.0), (0.0, 1.0, 0.0, 1.0)]


def test_apply_overrides_rejects_unknown_override() -> None:
    with pytest.raises(TypeError):
        apply_overrides(_Recorder(), SetColor((0, 0, 0)), [(1.0, 0.0, 0.0)])  # type: ignore[list-item]


def test_check_overrides_returns_tuple_in_call_order() -> None:
    a, b = color((1, 0, 0)), color((0, 1, 0))
    assert check_overrides(iter([a, b])) == (a, b)
    assert check_overrides([]) == ()


def test_check_overrides_rejects_raw_colors() -> None:
    with pytest.raises(TypeError):
        check_overrides([color((1, 0, 0)), (0.0, 1.0, 0.0)])


def test_apply_overrides_does_not_touch_target_on_unknown_override() -> None:
    target = _Recorder()
    with pytest.raises(TypeError):
        apply_overrides(target, SetColor((0, 0, 0)), ["blue"])  # type: ignore[list-item]
    assert target.colors == []
