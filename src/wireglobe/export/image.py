"""
どこで: `src/wireglobe/export/image.py`。
何を: Scene を SVG 経由で外部ラスタライザ（resvg）により PNG 化し、ファイル保存またはメモリ上の画像として返す。
なぜ: ベクタ出力を正として、ラスタ画像は常に同じ SVG から再生成できる導線にするため。
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from PIL import Image

from wireglobe.core.runtime_config import output_root_dir, resvg_command
from wireglobe.core.style import Color, Style, color_to_hex
from wireglobe.export.svg import export_svg
from wireglobe.render.scene import Scene

_logger = logging.getLogger(__name__)


def default_png_output_path(stem: str) -> Path:
    """PNG の既定保存パス `{output_root}/png/{stem}.png` を返す。"""

    return output_root_dir() / "png" / f"{stem}.png"


def _resvg_command(
    *,
    input_svg: Path,
    output_png: Path,
    output_size: tuple[int, int],
    background_color: Color,
) -> list[str]:
    out_w, out_h = output_size
    if int(out_w) <= 0 or int(out_h) <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    return [
        resvg_command(),
        "--width",
        str(int(out_w)),
        "--height",
        str(int(out_h)),
        "--background",
        color_to_hex(background_color),
        str(input_svg),
        str(output_png),
    ]


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background_color: Color = (1.0, 1.0, 1.0),
) -> Path:
    """SVG を PNG として保存する。

    Parameters
    ----------
    svg_path : str or Path
        入力 SVG パス。
    png_path : str or Path
        出力 PNG パス。
    output_size : tuple[int, int]
        出力 PNG の (width, height) ピクセルサイズ。
    background_color : Color
        背景色（0..1）。既定は白。

    Returns
    -------
    Path
        出力 PNG パス。

    Raises
    ------
    RuntimeError
        resvg が見つからない、またはラスタライズに失敗した場合。
    """

    _svg_path = Path(svg_path)
    _png_path = Path(png_path)
    _png_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = _resvg_command(
        input_svg=_svg_path,
        output_png=_png_path,
        output_size=output_size,
        background_color=background_color,
    )
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通すか、"
            "config.yaml の export.resvg を設定してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    return _png_path


def _rasterize_scene(scene: Scene, workdir: Path, *, side: int, style: Style) -> Path:
    svg_path = export_svg(scene, workdir / "scene.svg", side=side, style=style)
    return rasterize_svg_to_png(
        svg_path,
        workdir / "scene.png",
        output_size=(int(side), int(side)),
        background_color=style.background,
    )


def export_png(scene: Scene, path: str | Path, *, side: int, style: Style) -> Path:
    """Scene を一辺 side px の PNG として path に保存する。

    Raises
    ------
    RuntimeError
        resvg が見つからない、または失敗した場合。
    OSError
        保存先に書き込めない場合（そのまま伝播する）。
    """
    _path = Path(path)
    with tempfile.TemporaryDirectory(prefix="wireglobe-") as tmp:
        png = _rasterize_scene(scene, Path(tmp), side=side, style=style)
        _path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(png, _path)

    _logger.debug("png exported: path=%s side=%d primitives=%d", _path, int(side), len(scene))
    return _path


def render_image(scene: Scene, *, side: int, style: Style) -> Image.Image:
    """Scene を一辺 side px の RGBA 画像としてメモリ上に返す。"""
    with tempfile.TemporaryDirectory(prefix="wireglobe-") as tmp:
        png = _rasterize_scene(scene, Path(tmp), side=side, style=style)
        with Image.open(png) as im:
            image = im.convert("RGBA")
    return image


__all__ = [
    "default_png_output_path",
    "export_png",
    "rasterize_svg_to_png",
    "render_image",
]
