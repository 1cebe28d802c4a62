"""
どこで: `sketch/starbucks.py`。
何を: `[{"latitude": ..., "longitude": ...}, ...]` 形式の店舗 JSON を緑の半透明の点として描く。

使い方:
    python -m sketch.starbucks --input starbucks.json
"""

from __future__ import annotations

import json
from pathlib import Path

from sketch._output import output_parser, save
from wireglobe import Globe, color
from wireglobe.core.geo import GeoPoint

NAME = Path(__file__).stem
JFK = (40.645423, -73.903879)
SHOP_COLOR = (0x00 / 255, 0x64 / 255, 0x3C / 255, 192 / 255)


def load_shops(path: Path) -> list[GeoPoint]:
    """店舗の (lat, lng) を返す。キーが欠けたエントリは KeyError。"""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return [(float(s["latitude"]), float(s["longitude"])) for s in raw]


def main(argv: list[str] | None = None) -> Path:
    p = output_parser(NAME)
    p.add_argument("--input", default="starbucks.json")
    args = p.parse_args(argv)

    g = Globe()
    g.draw_graticule(10.0)
    for lat, lng in load_shops(Path(args.input)):
        g.draw_dot(lat, lng, 0.05, color(SHOP_COLOR))
    g.center_on(*JFK)
    return save(g, args, stem=NAME)


if __name__ == "__main__":
    print(main())
