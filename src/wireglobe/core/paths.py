# どこで: `src/wireglobe/core/paths.py`。
# 何を: 事前生成済みの境界線テーブル（陸地・国境）を JSON から読み込み、読み取り専用で提供する。
# なぜ: 描画面が境界線データの出所（同梱 / config 差し替え）を意識せずに済むようにするため。

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from wireglobe.core.geo import GeoPoint
from wireglobe.core.runtime_config import geodata_path

_logger = logging.getLogger(__name__)

LAND = "land"
COUNTRIES = "countries"
_BUNDLED_TABLES = (LAND, COUNTRIES)

GeoPath = tuple[GeoPoint, ...]


@dataclass(frozen=True, slots=True)
class PathTable:
    """名前付きのパス列。各パスは (lat, lng)[deg] の列で、自動では閉じない。"""

    name: str
    paths: tuple[GeoPath, ...]

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def point_count(self) -> int:
        return sum(len(p) for p in self.paths)


_CACHE: dict[str, PathTable] = {}


def parse_path_table(payload: Any, *, source: str) -> PathTable:
    """JSON 由来の payload を検証して PathTable を返す。

    Parameters
    ----------
    payload : Any
        `{"name": str, "paths": [[[lat, lng], ...], ...]}`。
    source : str
        エラーメッセージ用の出所。

    Raises
    ------
    ValueError
        形式が不正な場合。
    """
    if not isinstance(payload, dict):
        raise ValueError(f"path table は mapping である必要がある: source={source}")
    name = payload.get("name")
    raw_paths = payload.get("paths")
    if not isinstance(name, str) or not name:
        raise ValueError(f"path table の name が不正: source={source}, name={name!r}")
    if not isinstance(raw_paths, list):
        raise ValueError(f"path table の paths は配列である必要がある: source={source}")

    paths: list[GeoPath] = []
    for i, raw in enumerate(raw_paths):
        if not isinstance(raw, list):
            raise ValueError(f"path[{i}] は配列である必要がある: source={source}")
        points: list[GeoPoint] = []
        for j, pt in enumerate(raw):
            if not isinstance(pt, (list, tuple)) or len(pt) != 2:
                raise ValueError(
                    f"path[{i}][{j}] は [lat, lng] である必要がある: source={source}, got={pt!r}"
                )
            points.append((float(pt[0]), float(pt[1])))
        paths.append(tuple(points))
    return PathTable(name=name, paths=tuple(paths))


def _read_bundled(name: str) -> str:
    return (
        resources.files("wireglobe")
        .joinpath("resource", f"{name}.json")
        .read_text(encoding="utf-8")
    )


def load_path_table(name: str) -> PathTable:
    """境界線テーブル name をロードして返す（キャッシュ）。

    Notes
    -----
    config.yaml の `geodata.<name>` があればそのファイルを、無ければ同梱 JSON を読む。

    Raises
    ------
    KeyError
        同梱にも config にも無い名前の場合。
    ValueError
        ファイルの形式が不正な場合。
    """
    cached = _CACHE.get(name)
    if cached is not None:
        return cached

    override = geodata_path(name)
    if override is not None:
        text = Path(override).read_text(encoding="utf-8")
        source = str(override)
    elif name in _BUNDLED_TABLES:
        text = _read_bundled(name)
        source = f"wireglobe/resource/{name}.json"
    else:
        raise KeyError(f"未知の境界線テーブルです: {name!r}")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"path table の JSON が不正です: source={source}") from exc

    table = parse_path_table(payload, source=source)
    _logger.debug(
        "path table loaded: name=%s source=%s paths=%d points=%d",
        name,
        source,
        len(table),
        table.point_count,
    )
    _CACHE[name] = table
    return table


def clear_path_table_cache() -> None:
    """ロード済みテーブルのキャッシュを破棄する（config 切り替え後に使う）。"""
    _CACHE.clear()


def land_paths() -> PathTable:
    return load_path_table(LAND)


def country_paths() -> PathTable:
    return load_path_table(COUNTRIES)


__all__ = [
    "COUNTRIES",
    "GeoPath",
    "LAND",
    "PathTable",
    "clear_path_table_cache",
    "country_paths",
    "land_paths",
    "load_path_table",
    "parse_path_table",
]
