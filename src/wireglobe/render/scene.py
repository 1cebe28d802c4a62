"""
どこで: `src/wireglobe/render/scene.py`。
何を: 3D 線分・点を蓄積し、スコープ単位の着色・回転と 2D への透視投影を行うワイヤーフレームシーン。
なぜ: Globe が発行するプリミティブ描画呼び出しの受け皿として、SVG/PNG 出力から独立した状態を持つため。

スコープ規約:
- `begin()` 時点のプリミティブ数をスタックに積み、`end()` で降ろす。
- `colorize` / `rotate` は最内スコープ内のプリミティブ（スコープ外なら全プリミティブ）に作用する。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from wireglobe.core.style import Color, coerce_color

CAMERA_DISTANCE = 4.0
"""視点の z 位置は `-CAMERA_DISTANCE`。+z 方向を向く。"""

_DEFAULT_COLOR: Color = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class ProjectedPrimitive:
    """画像座標（px, y 下向き）へ投影済みのプリミティブ。

    `radius > 0` のものは点（円）、それ以外は線分。
    """

    x1: float
    y1: float
    x2: float
    y2: float
    radius: float
    depth: float
    color: Color

    @property
    def is_dot(self) -> bool:
        return self.radius > 0.0


class Scene:
    """線分・点の 3D プリミティブ列。

    Notes
    -----
    座標は `(N, 2, 3)` の端点配列として保持する。点は両端点が一致し radius > 0。
    """

    def __init__(self) -> None:
        self._segments: list[list[float]] = []
        self._radii: list[float] = []
        self._colors: list[Color] = []
        self._stack: list[int] = []

    def __len__(self) -> int:
        return len(self._segments)

    @property
    def depth(self) -> int:
        """現在開いているスコープの数。"""
        return len(self._stack)

    def _scope_start(self) -> int:
        return self._stack[-1] if self._stack else 0

    def begin(self) -> None:
        self._stack.append(len(self._segments))

    def end(self) -> None:
        if self._stack:
            self._stack.pop()

    def colorize(self, color: Color) -> None:
        """スコープ内のプリミティブを color で塗り直す。"""
        c = coerce_color(color)
        for i in range(self._scope_start(), len(self._colors)):
            self._colors[i] = c

    def draw_segment(
        self, x1: float, y1: float, z1: float, x2: float, y2: float, z2: float
    ) -> None:
        self._segments.append(
            [float(x1), float(y1), float(z1), float(x2), float(y2), float(z2)]
        )
        self._radii.append(0.0)
        self._colors.append(_DEFAULT_COLOR)

    def draw_dot(self, x: float, y: float, z: float, radius: float) -> None:
        r = float(radius)
        if r <= 0.0:
            raise ValueError(f"dot の radius は正の値である必要がある: got={radius!r}")
        self._segments.append([float(x), float(y), float(z), float(x), float(y), float(z)])
        self._radii.append(r)
        self._colors.append(_DEFAULT_COLOR)

    def rotate(self, x: float, y: float, z: float) -> None:
        """スコープ内のプリミティブを x → y → z 軸の順に回転する（ラジアン）。"""
        start = self._scope_start()
        if start >= len(self._segments):
            return

        cx, sx = np.cos(x), np.sin(x)
        cy, sy = np.cos(y), np.sin(y)
        cz, sz = np.cos(z), np.sin(z)
        rx_mat = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]], dtype=np.float64)
        ry_mat = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]], dtype=np.float64)
        rz_mat = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
        # 適用順序: x → y → z（row-vector のため転置で適用）
        rot = rz_mat @ ry_mat @ rx_mat

        points = np.asarray(self._segments[start:], dtype=np.float64).reshape(-1, 3)
        rotated = (points @ rot.T).reshape(-1, 6)
        self._segments[start:] = rotated.tolist()

    def coords(self) -> np.ndarray:
        """全プリミティブの端点を shape (N, 2, 3) の float64 配列で返す。"""
        if not self._segments:
            return np.zeros((0, 2, 3), dtype=np.float64)
        return np.asarray(self._segments, dtype=np.float64).reshape(-1, 2, 3)

    def radii(self) -> np.ndarray:
        return np.asarray(self._radii, dtype=np.float64)

    def colors(self) -> list[Color]:
        return list(self._colors)

    def project(self, side: int, scale: float) -> list[ProjectedPrimitive]:
        """一辺 side px の正方形画像へ透視投影したプリミティブを奥から順に返す。

        Parameters
        ----------
        side : int
            出力画像の一辺 [px]。
        scale : float
            カメラ倍率。z=0 の平面で半径 1 が `scale * side / 2` px になる。

        Returns
        -------
        list[ProjectedPrimitive]
            奥（z 大）→ 手前（z 小）の順。画家のアルゴリズムでそのまま描ける。
        """
        if int(side) <= 0:
            raise ValueError(f"side は正の値である必要がある: got={side!r}")
        coords = self.coords()
        if coords.shape[0] == 0:
            return []

        half = float(side) / 2.0
        z = coords[:, :, 2]
        f = CAMERA_DISTANCE / (CAMERA_DISTANCE + z)
        k = f * float(scale) * half
        px = half + coords[:, :, 0] * k
        # 画像の y は下向き。球の +y を上に出す。
        py = half - coords[:, :, 1] * k
        radii = self.radii() * k[:, 0]
        depth = z.mean(axis=1)

        order = np.argsort(-depth, kind="stable")
        colors = self._colors
        out: list[ProjectedPrimitive] = []
        for i in order.tolist():
            out.append(
                ProjectedPrimitive(
                    x1=float(px[i, 0]),
                    y1=float(py[i, 0]),
                    x2=float(px[i, 1]),
                    y2=float(py[i, 1]),
                    radius=float(radii[i]) if self._radii[i] > 0.0 else 0.0,
                    depth=float(depth[i]),
                    color=colors[i],
                )
            )
        return out

    def __iter__(self) -> Iterator[tuple[tuple[float, ...], float, Color]]:
        for seg, r, c in zip(self._segments, self._radii, self._colors):
            yield tuple(seg), r, c


__all__ = ["CAMERA_DISTANCE", "ProjectedPrimitive", "Scene"]
