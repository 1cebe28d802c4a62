"""
どこで: `sketch/cities.py`。
何を: `[{"lat": ..., "lng": ...}, ...]` 形式の JSON から都市を読み、半透明の点として描く。
なぜ: 大量の点と alpha 付きの色上書きの見え方を確認するため。

使い方:
    python -m sketch.cities --input cities.json --side 400
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sketch._output import output_parser, save
from wireglobe import Globe, color
from wireglobe.core.geo import GeoPoint

_logger = logging.getLogger("cities")

NAME = Path(__file__).stem
BRISTOL = (51.453349, -2.588323)
CITY_COLOR = (0x11 / 255, 0x2F / 255, 0x56 / 255, 0.5)


def load_cities(path: Path) -> list[GeoPoint]:
    """都市の (lat, lng) を返す。数値として読めないエントリは捨てる。"""
    raw = json.loads(path.read_text(encoding="utf-8"))
    cities: list[GeoPoint] = []
    for entry in raw:
        try:
            cities.append((float(entry["lat"]), float(entry["lng"])))
        except (KeyError, TypeError, ValueError):
            continue
    if len(cities) < len(raw):
        _logger.info("skipped %d malformed entries", len(raw) - len(cities))
    return cities


def main(argv: list[str] | None = None) -> Path:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    p = output_parser(NAME)
    p.add_argument("--input", default="cities.json")
    args = p.parse_args(argv)

    g = Globe()
    g.draw_graticule(10.0)
    for lat, lng in load_cities(Path(args.input)):
        g.draw_dot(lat, lng, 0.02, color(CITY_COLOR))
    g.center_on(*BRISTOL)
    return save(g, args, stem=NAME)


if __name__ == "__main__":
    print(main())
