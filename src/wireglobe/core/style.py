"""
どこで: `src/wireglobe/core/style.py`。
何を: 地球儀の表示スタイル（Style）と、描画呼び出し単位のスタイル上書き（SetColor）を定義する。
なぜ: 既定スタイルを明示的な値として Globe に渡し、上書きの適用順（後勝ち）を 1 箇所で保証するため。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, Union, cast

Color = tuple[float, ...]
"""0..1 float の `(r, g, b)` または `(r, g, b, a)`。"""


def coerce_color(value: object) -> Color:
    """値を 0..1 float の RGBA タプルに正規化して返す。

    Parameters
    ----------
    value : object
        `(r, g, b)` または `(r, g, b, a)` のシーケンス（各要素 0..1）。

    Returns
    -------
    tuple[float, float, float, float]
        clamp 済みの RGBA。alpha 省略時は 1.0。

    Raises
    ------
    ValueError
        長さ 3/4 の数値シーケンスでない場合。
    """
    try:
        items = [float(cast(Any, v)) for v in value]  # type: ignore[attr-defined]
    except Exception as exc:
        raise ValueError(f"color must be a length-3/4 numeric sequence: {value!r}") from exc
    if len(items) == 3:
        items.append(1.0)
    if len(items) != 4:
        raise ValueError(f"color must be a length-3/4 numeric sequence: {value!r}")

    def _clamp(v: float) -> float:
        return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v

    r, g, b, a = (_clamp(v) for v in items)
    return r, g, b, a


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = float(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgb255_to_rgb01(rgb: tuple[int, int, int]) -> tuple[float, float, float]:
    """0..255 int の RGB を 0..1 float の RGB に変換して返す。"""

    r, g, b = rgb
    return float(r) / 255.0, float(g) / 255.0, float(b) / 255.0


def gray(level: int) -> Color:
    """0..255 の輝度からグレーの RGB を返す。"""
    return rgb255_to_rgb01((level, level, level))


def color_to_hex(color: Color) -> str:
    """色を `#RRGGBB` に変換して返す（alpha は捨てる）。"""
    r, g, b, _ = coerce_color(color)
    r255, g255, b255 = rgb01_to_rgb255((r, g, b))
    return f"#{r255:02X}{g255:02X}{b255:02X}"


@dataclass(frozen=True, slots=True)
class Style:
    """地球儀の表示スタイル。

    Attributes
    ----------
    graticule_color : Color
        緯線・経線の既定色。
    line_color : Color
        大円線・矩形・境界線の既定色。
    dot_color : Color
        点の既定色。
    background : Color
        背景色。
    line_width : float
        線幅（0 以上）。出力画像の一辺の 1/50 を 1 とする相対値。
    scale : float
        カメラ倍率（正）。1 で球の半径が画像の半辺にほぼ一致する。
    """

    graticule_color: Color
    line_color: Color
    dot_color: Color
    background: Color
    line_width: float
    scale: float

    def __post_init__(self) -> None:
        for name in ("graticule_color", "line_color", "dot_color", "background"):
            object.__setattr__(self, name, coerce_color(getattr(self, name)))
        if float(self.line_width) < 0.0:
            raise ValueError(f"line_width は 0 以上である必要がある: got={self.line_width!r}")
        if float(self.scale) <= 0.0:
            raise ValueError(f"scale は正の値である必要がある: got={self.scale!r}")
        object.__setattr__(self, "line_width", float(self.line_width))
        object.__setattr__(self, "scale", float(self.scale))


DEFAULT_STYLE = Style(
    graticule_color=gray(192),
    line_color=gray(32),
    dot_color=(1.0, 0.0, 0.0, 1.0),
    background=(1.0, 1.0, 1.0),
    line_width=0.1,
    scale=0.7,
)


class Colorizable(Protocol):
    """スタイル上書きの適用先（描画バックエンド）が満たすべき最小インターフェース。"""

    def colorize(self, color: Color) -> None: ...


@dataclass(frozen=True, slots=True)
class SetColor:
    """現在のスコープの描画色を color にする上書き。"""

    color: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", coerce_color(self.color))

    def apply(self, target: Colorizable) -> None:
        target.colorize(self.color)


# 上書きの種類を増やすときはここに追加する。
Override = Union[SetColor]


def color(c: Color) -> SetColor:
    """描画色を c に上書きする Override を返す。"""
    return SetColor(c)


def check_overrides(overrides: Iterable[object]) -> tuple[Override, ...]:
    """overrides がすべて既知の上書き型であることを確かめ、タプルにして返す。

    Raises
    ------
    TypeError
        未対応の値を含む場合。
    """
    out: list[Override] = []
    for override in overrides:
        if not isinstance(override, SetColor):
            raise TypeError(f"未対応のスタイル上書きです: {override!r}")
        out.append(override)
    return tuple(out)


def apply_overrides(target: Colorizable, base: Override, overrides: Iterable[Override]) -> None:
    """base を適用した後、overrides を呼び出し順に適用する（後勝ち）。"""
    checked = check_overrides(overrides)
    base.apply(target)
    for override in checked:
        override.apply(target)


__all__ = [
    "Color",
    "Colorizable",
    "DEFAULT_STYLE",
    "Override",
    "SetColor",
    "Style",
    "apply_overrides",
    "check_overrides",
    "coerce_color",
    "color",
    "color_to_hex",
    "gray",
    "rgb01_to_rgb255",
    "rgb255_to_rgb01",
]
