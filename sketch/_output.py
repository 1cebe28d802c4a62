"""
どこで: `sketch/_output.py`。
何を: sketch 共通の出力オプション `--filename` / `--side` と PNG 保存を提供する。
なぜ: どの sketch も同じ引数で出力先とサイズを差し替えられるようにするため。
"""

from __future__ import annotations

import argparse
from pathlib import Path

from wireglobe import Globe
from wireglobe.export.image import default_png_output_path

DEFAULT_SIDE = 400


def output_parser(prog: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog)
    p.add_argument("--filename", default=None, help="出力 PNG（省略時は {output_dir}/png/<sketch 名>.png）")
    p.add_argument("--side", type=int, default=DEFAULT_SIDE, help="出力画像の一辺 [px]")
    return p


def save(g: Globe, args: argparse.Namespace, *, stem: str) -> Path:
    """args の出力先（無ければ既定パス）へ PNG を保存して返す。"""
    path = Path(args.filename) if args.filename else default_png_output_path(stem)
    return g.save_png(path, args.side)
