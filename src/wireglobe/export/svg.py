"""
どこで: `src/wireglobe/export/svg.py`。
何を: Scene を透視投影して正方形の SVG として書き出す関数を提供する。
なぜ: ラスタライズ前の正（ソース）となるベクタ出力を、外部依存なしで決定的に作るため。
"""

from __future__ import annotations

import logging
from pathlib import Path

from wireglobe.core.style import Color, Style, color_to_hex, coerce_color
from wireglobe.render.scene import ProjectedPrimitive, Scene

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3

LINE_WIDTH_UNIT = 50.0
"""Style.line_width=1 が一辺の 1/LINE_WIDTH_UNIT [px] になる。"""


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _opacity_attr(name: str, color: Color) -> str:
    alpha = coerce_color(color)[3]
    if alpha >= 1.0:
        return ""
    return f' {name}="{_fmt(alpha)}"'


def _primitive_to_element(prim: ProjectedPrimitive, *, stroke_width: str) -> str:
    hex_color = color_to_hex(prim.color)
    if prim.is_dot:
        return (
            f'  <circle cx="{_fmt(prim.x1)}" cy="{_fmt(prim.y1)}" r="{_fmt(prim.radius)}" '
            f'fill="{hex_color}"{_opacity_attr("fill-opacity", prim.color)} />'
        )
    return (
        f'  <line x1="{_fmt(prim.x1)}" y1="{_fmt(prim.y1)}" '
        f'x2="{_fmt(prim.x2)}" y2="{_fmt(prim.y2)}" '
        f'stroke="{hex_color}"{_opacity_attr("stroke-opacity", prim.color)} '
        f'stroke-width="{stroke_width}" stroke-linecap="round" />'
    )


def scene_to_svg(scene: Scene, *, side: int, style: Style) -> str:
    """Scene を一辺 side px の SVG テキストにして返す。

    Parameters
    ----------
    scene : Scene
        出力対象のシーン。
    side : int
        画像の一辺 [px]。
    style : Style
        背景色・線幅・カメラ倍率の供給元。

    Returns
    -------
    str
        末尾改行付きの SVG テキスト。
    """
    side_i = int(side)
    if side_i <= 0:
        raise ValueError(f"side は正の値である必要がある: got={side!r}")

    stroke_width = _fmt(float(style.line_width) * side_i / LINE_WIDTH_UNIT)

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {side_i} {side_i}" '
            f'width="{side_i}" height="{side_i}">'
        )
    )
    lines.append(
        f'  <rect width="{side_i}" height="{side_i}" '
        f'fill="{color_to_hex(style.background)}"'
        f'{_opacity_attr("fill-opacity", style.background)} />'
    )
    for prim in scene.project(side_i, style.scale):
        lines.append(_primitive_to_element(prim, stroke_width=stroke_width))
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def export_svg(scene: Scene, path: str | Path, *, side: int, style: Style) -> Path:
    """Scene を SVG として保存する。

    Returns
    -------
    Path
        保存先パス。親ディレクトリは作成する。書き込めない場合は OSError がそのまま伝播する。
    """
    _path = Path(path)
    text = scene_to_svg(scene, side=side, style=style)

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)

    _logger.debug("svg exported: path=%s side=%d primitives=%d", _path, int(side), len(scene))
    return _path


__all__ = ["LINE_WIDTH_UNIT", "export_svg", "scene_to_svg"]
