"""
どこで: `src/wireglobe/globe.py`。
何を: 緯線・経線・点・大円線・矩形・境界線を単位球上に描き、視点を合わせて画像出力する描画面 Globe を提供する。
なぜ: 緯度経度で考える呼び出し側と、3D プリミティブしか知らない Scene の間を 1 箇所でつなぐため。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from PIL import Image

from wireglobe.core.geo import cartesian, deg_to_rad, great_circle_points
from wireglobe.core.paths import PathTable, country_paths, land_paths
from wireglobe.core.style import (
    DEFAULT_STYLE,
    Override,
    SetColor,
    Style,
    apply_overrides,
    check_overrides,
)
from wireglobe.export.image import export_png, render_image
from wireglobe.export.svg import export_svg, scene_to_svg
from wireglobe.render.scene import Scene

_logger = logging.getLogger(__name__)

GRATICULE_LINE_STEP = 1.0
"""緯線・経線を構成する線分の刻み [deg]。"""

LINE_POINT_INTERVAL = 500.0
"""大円線を折れ線で近似するときの 1 区間の最大長 [km]。"""


def _check_interval(interval: float) -> float:
    iv = float(interval)
    if not iv > 0.0:
        raise ValueError(f"interval は正の値である必要がある: got={interval!r}")
    return iv


class Globe:
    """単位球上のワイヤーフレーム可視化。

    Parameters
    ----------
    style : Style, optional
        表示スタイル。以後 `globe.style = ...` で差し替えられる（描画呼び出しは変更しない）。
    scene : Scene or None, optional
        プリミティブの蓄積先。None なら空の Scene を作る。

    Notes
    -----
    描画呼び出しはすべて追記であり、同じ呼び出しを 2 回行えば 2 重に描かれる。
    """

    def __init__(self, style: Style = DEFAULT_STYLE, *, scene: Scene | None = None) -> None:
        self.style = style
        self._scene = scene if scene is not None else Scene()

    @property
    def scene(self) -> Scene:
        return self._scene

    @contextmanager
    def _styled(self, base: Override, *overrides: Override) -> Iterator[Scene]:
        """1 回の論理描画をスコープで囲み、終了時に base → overrides の順で色を適用する。

        overrides の型はスコープを開く前に検査する（不正なら何も描かずに TypeError）。
        描画中の例外時は色を適用せずにスコープだけ閉じ、例外をそのまま伝播する。
        """
        checked = check_overrides(overrides)
        scene = self._scene
        scene.begin()
        try:
            yield scene
            apply_overrides(scene, base, checked)
        finally:
            scene.end()

    def _segment(self, lat1: float, lng1: float, lat2: float, lng2: float) -> None:
        x1, y1, z1 = cartesian(lat1, lng1)
        x2, y2, z2 = cartesian(lat2, lng2)
        self._scene.draw_segment(x1, y1, z1, x2, y2, z2)

    def draw_parallel(self, lat: float, *style: Override) -> None:
        """緯度 lat の緯線を描く。既定色は graticule_color。"""
        with self._styled(SetColor(self.style.graticule_color), *style):
            n = int(round(360.0 / GRATICULE_LINE_STEP))
            for i in range(n):
                lng = -180.0 + i * GRATICULE_LINE_STEP
                self._segment(lat, lng, lat, lng + GRATICULE_LINE_STEP)

    def draw_parallels(self, interval: float, *style: Override) -> None:
        """赤道と、interval 刻みの緯線（90° 未満、南北対称）を描く。"""
        iv = _check_interval(interval)
        self.draw_parallel(0.0, *style)
        k = 1
        while k * iv < 90.0:
            lat = k * iv
            self.draw_parallel(lat, *style)
            self.draw_parallel(-lat, *style)
            k += 1

    def draw_meridian(self, lng: float, *style: Override) -> None:
        """経度 lng の経線（南極 → 北極）を描く。既定色は graticule_color。"""
        with self._styled(SetColor(self.style.graticule_color), *style):
            n = int(round(180.0 / GRATICULE_LINE_STEP))
            for i in range(n):
                lat = -90.0 + i * GRATICULE_LINE_STEP
                self._segment(lat, lng, lat + GRATICULE_LINE_STEP, lng)

    def draw_meridians(self, interval: float, *style: Override) -> None:
        """-180° から interval 刻みで経線を描く（+180° は -180° と同一なので含めない）。"""
        iv = _check_interval(interval)
        k = 0
        while -180.0 + k * iv < 180.0:
            self.draw_meridian(-180.0 + k * iv, *style)
            k += 1

    def draw_graticule(self, interval: float, *style: Override) -> None:
        """interval 刻みの経緯線網を描く。緯線・経線は同じ上書きを共有する。"""
        self.draw_parallels(interval, *style)
        self.draw_meridians(interval, *style)

    def draw_dot(self, lat: float, lng: float, radius: float, *style: Override) -> None:
        """(lat, lng) に半径 radius の点を描く。既定色は dot_color。"""
        with self._styled(SetColor(self.style.dot_color), *style) as scene:
            x, y, z = cartesian(lat, lng)
            scene.draw_dot(x, y, z, radius)

    def draw_line(
        self, lat1: float, lng1: float, lat2: float, lng2: float, *style: Override
    ) -> None:
        """2 点を結ぶ大円線を描く。既定色は line_color。

        Notes
        -----
        1 区間の大円長が LINE_POINT_INTERVAL を超えないよう `ceil(d / 500)` 区間に分割する。
        距離 0 の場合は何も描かない。
        """
        with self._styled(SetColor(self.style.line_color), *style):
            points = great_circle_points(
                lat1, lng1, lat2, lng2, max_step_km=LINE_POINT_INTERVAL
            )
            for (a_lat, a_lng), (b_lat, b_lng) in zip(points, points[1:]):
                self._segment(a_lat, a_lng, b_lat, b_lng)

    def draw_rect(
        self,
        min_lat: float,
        min_lng: float,
        max_lat: float,
        max_lng: float,
        *style: Override,
    ) -> None:
        """4 隅で決まる矩形の各辺を大円線として描く。既定色は line_color。"""
        self.draw_line(min_lat, min_lng, max_lat, min_lng, *style)
        self.draw_line(max_lat, min_lng, max_lat, max_lng, *style)
        self.draw_line(max_lat, max_lng, min_lat, max_lng, *style)
        self.draw_line(min_lat, max_lng, min_lat, min_lng, *style)

    def draw_paths(self, table: PathTable, *style: Override) -> None:
        """PathTable の各パスの隣接点を直線（弦）で結んで描く。既定色は line_color。"""
        with self._styled(SetColor(self.style.line_color), *style):
            for path in table.paths:
                for (lat1, lng1), (lat2, lng2) in zip(path, path[1:]):
                    self._segment(lat1, lng1, lat2, lng2)

    def draw_land_boundaries(self, *style: Override) -> None:
        """陸地の境界線を描く。"""
        self.draw_paths(land_paths(), *style)

    def draw_country_boundaries(self, *style: Override) -> None:
        """国境線を描く。"""
        self.draw_paths(country_paths(), *style)

    def center_on(self, lat: float, lng: float) -> None:
        """(lat, lng) が正面に来るよう、これまでに描いたプリミティブを回転する。

        Notes
        -----
        z 軸回りに `-lng - π/2`、続いて x 軸回りに `π/2 - lat` 回す。
        `cartesian` の `z = -sin(lat)` と対の式で、(lat, lng) は視点側の (0, 0, -1) に移る。
        """
        self._scene.rotate(0.0, 0.0, -deg_to_rad(lng) - math.pi / 2)
        self._scene.rotate(math.pi / 2 - deg_to_rad(lat), 0.0, 0.0)

    def svg(self, side: int) -> str:
        """一辺 side px の SVG テキストを返す。"""
        return scene_to_svg(self._scene, side=side, style=self.style)

    def save_svg(self, path: str | Path, side: int) -> Path:
        """一辺 side px の SVG を path に保存する。"""
        return export_svg(self._scene, path, side=side, style=self.style)

    def image(self, side: int) -> Image.Image:
        """一辺 side px の画像をメモリ上に描いて返す（何度でも呼べる）。"""
        return render_image(self._scene, side=side, style=self.style)

    def save_png(self, path: str | Path, side: int) -> Path:
        """一辺 side px の PNG を path に保存する。

        Raises
        ------
        OSError
            保存先に書き込めない場合。
        RuntimeError
            resvg が見つからない、または失敗した場合。
        """
        out = export_png(self._scene, path, side=side, style=self.style)
        _logger.info("saved %s (%dx%d, %d primitives)", out, int(side), int(side), len(self._scene))
        return out


__all__ = ["GRATICULE_LINE_STEP", "Globe", "LINE_POINT_INTERVAL"]
