"""
どこで: `tools/build_geodata.py`。
何を: GeoJSON の FeatureCollection から Polygon/MultiPolygon のリングを取り出し、wireglobe の境界線テーブル JSON に変換する。
なぜ: 境界線データを実行時にパースせず、事前に平坦な (lat, lng) パス列として用意するため。

使い方:
    python tools/build_geodata.py --input ne_110m_land.geojson --output data/land.json --name land

補足:
- Point/MultiPoint は警告を出して捨てる。それ以外の未対応ジオメトリは ValueError で中断する。
- GeoJSON の座標は [lng, lat] なので [lat, lng] に入れ替える。
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

_logger = logging.getLogger("build_geodata")

_POINT_TYPES = ("Point", "MultiPoint")


def load_feature_collection(path: Path) -> list[dict[str, Any]]:
    """GeoJSON ファイルを読み、features 配列を返す。"""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise ValueError(f"FeatureCollection ではありません: {path}")
    features = payload.get("features")
    if not isinstance(features, list):
        raise ValueError(f"features が配列ではありません: {path}")
    return features


def extract_rings(features: list[dict[str, Any]]) -> list[list[list[float]]]:
    """features から全ポリゴンのリングを平坦なリストとして返す（座標は GeoJSON 順のまま）。

    Raises
    ------
    ValueError
        未対応のジオメトリ種別を含む場合。
    """
    rings: list[list[list[float]]] = []
    for i, feature in enumerate(features):
        geom = feature.get("geometry") or {}
        gtype = geom.get("type")
        coords = geom.get("coordinates")
        if gtype == "Polygon":
            polygons = [coords]
        elif gtype == "MultiPolygon":
            polygons = list(coords)
        elif gtype in _POINT_TYPES:
            _logger.warning("discarding point geometry type %s (feature=%d)", gtype, i)
            continue
        else:
            raise ValueError(f"no handler for geometry type {gtype!r} (feature={i})")

        for polygon in polygons:
            rings.extend(polygon)
    return rings


def to_lat_lng(rings: list[list[list[float]]]) -> list[list[list[float]]]:
    """[lng, lat] のリング列を [lat, lng] に入れ替えて返す。

    Raises
    ------
    ValueError
        座標が 2 要素でない場合。
    """
    out: list[list[list[float]]] = []
    for ring in rings:
        path: list[list[float]] = []
        for point in ring:
            if len(point) != 2:
                raise ValueError(f"point must have two coordinates: got={point!r}")
            lng, lat = point
            path.append([float(lat), float(lng)])
        out.append(path)
    return out


def build_path_table(features: list[dict[str, Any]], *, name: str) -> dict[str, Any]:
    """features から境界線テーブルの payload を作って返す。"""
    paths = to_lat_lng(extract_rings(features))
    return {"name": str(name), "paths": paths}


def write_path_table(payload: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, separators=(",", ":")) + "\n", encoding="utf-8")
    return path


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="build_geodata")
    p.add_argument("--input", required=True, help="入力 GeoJSON（FeatureCollection）")
    p.add_argument("--output", required=True, help="出力 JSON（wireglobe の path table 形式）")
    p.add_argument("--name", required=True, help="テーブル名（例: land, countries）")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    args = _parse_args(argv)

    features = load_feature_collection(Path(args.input))
    _logger.info("loaded %d features", len(features))

    try:
        payload = build_path_table(features, name=args.name)
    except ValueError as exc:
        _logger.error("%s", exc)
        return 1
    _logger.info("extracted %d paths", len(payload["paths"]))

    out = write_path_table(payload, Path(args.output))
    _logger.info("wrote %s", out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
