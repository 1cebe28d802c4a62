"""境界線テーブルのロード（`wireglobe.core.paths`）のテスト。"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wireglobe.core import paths
from wireglobe.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    paths.clear_path_table_cache()
    yield
    set_config_path(None)
    paths.clear_path_table_cache()


def _write_config(tmp_path: Path, body: str) -> Path:
    cfg = tmp_path / "config.yaml"
    cfg.write_text(body, encoding="utf-8")
    set_config_path(cfg)
    return cfg


@pytest.mark.parametrize("name", [paths.LAND, paths.COUNTRIES])
def test_bundled_tables_load_with_valid_coordinates(name: str) -> None:
    table = paths.load_path_table(name)

    assert table.name == name
    assert len(table) > 0
    assert table.point_count >= 2 * len(table)
    for path in table.paths:
        for lat, lng in path:
            assert -90.0 <= lat <= 90.0
            assert -180.0 <= lng <= 180.0


def test_load_is_cached_until_cleared() -> None:
    a = paths.land_paths()
    assert paths.land_paths() is a

    paths.clear_path_table_cache()
    assert paths.land_paths() is not a


def test_config_geodata_overrides_bundled_table(tmp_path: Path) -> None:
    custom = tmp_path / "land_custom.json"
    custom.write_text(
        json.dumps({"name": "land", "paths": [[[0, 0], [1, 1], [2, 0]]]}),
        encoding="utf-8",
    )
    _write_config(tmp_path, f'geodata:\n  land: "{custom.as_posix()}"\n')

    table = paths.land_paths()
    assert table.paths == (((0.0, 0.0), (1.0, 1.0), (2.0, 0.0)),)
    # 差し替えていない側は同梱のまま
    assert len(paths.country_paths()) > 1


def test_config_can_add_new_table_name(tmp_path: Path) -> None:
    rivers = tmp_path / "rivers.json"
    rivers.write_text(json.dumps({"name": "rivers", "paths": [[[10, 20], [11, 21]]]}), encoding="utf-8")
    _write_config(tmp_path, f'geodata:\n  rivers: "{rivers.as_posix()}"\n')

    assert paths.load_path_table("rivers").point_count == 2


def test_unknown_table_raises_key_error() -> None:
    with pytest.raises(KeyError):
        paths.load_path_table("oceans")


def test_broken_json_raises_value_error(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    _write_config(tmp_path, f'geodata:\n  land: "{broken.as_posix()}"\n')

    with pytest.raises(ValueError):
        paths.land_paths()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"name": "", "paths": []},
        {"name": "x", "paths": {}},
        {"name": "x", "paths": [[[0, 0, 0]]]},
        {"name": "x", "paths": ["abc"]},
    ],
)
def test_parse_path_table_rejects_malformed_payload(payload) -> None:
    with pytest.raises(ValueError):
        paths.parse_path_table(payload, source="test")


def test_parse_path_table_keeps_paths_open() -> None:
    table = paths.parse_path_table({"name": "x", "paths": [[[0, 0], [0, 1]]]}, source="test")
    assert table.paths == (((0.0, 0.0), (0.0, 1.0)),)
