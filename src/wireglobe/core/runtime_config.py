# どこで: `src/wireglobe/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（出力先・resvg・境界線データの差し替え）をロードしてキャッシュする。
# なぜ: 環境ごとの違いをコードではなく設定ファイルで吸収するため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

CONFIG_VERSION = 1
_PACKAGED_SOURCE = "wireglobe/resource/default_config.yaml"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """wireglobe の実行時設定。

    Attributes
    ----------
    config_path : Path or None
        同梱デフォルトの上に重ねたファイル（明示指定 > 自動探索）。無ければ None。
    output_dir : Path
        出力ファイルの既定ルート。
    resvg : str
        PNG ラスタライズに使う resvg の実行ファイル名またはパス。
    geodata : dict[str, Path]
        境界線テーブル名 → 差し替え JSON のパス。
    """

    config_path: Path | None
    output_dir: Path
    resvg: str
    geodata: dict[str, Path]


_explicit_path: Path | None = None
_cached: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config パスを設定し、キャッシュを破棄する。None で自動探索に戻す。"""

    global _explicit_path, _cached
    _explicit_path = None if path is None else Path(str(path)).expanduser()
    _cached = None


def _discover() -> Path | None:
    for candidate in (
        Path.cwd() / ".wireglobe" / "config.yaml",
        Path.home() / ".config" / "wireglobe" / "config.yaml",
    ):
        if candidate.is_file():
            return candidate
    return None


def _parse(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return data


def _section(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")
    return value


def _path_or_none(value: Any) -> Path | None:
    text = "" if value is None else str(value).strip()
    if not text:
        return None
    return Path(os.path.expandvars(os.path.expanduser(text)))


def _build(payload: dict[str, Any], *, config_path: Path | None) -> RuntimeConfig:
    version = payload.get("version")
    try:
        ok = int(version) == CONFIG_VERSION
    except (TypeError, ValueError):
        ok = False
    if not ok:
        raise RuntimeError(f"未対応の config.yaml version です: got={version!r}")

    output_dir = _path_or_none(_section(payload, "paths").get("output_dir"))
    if output_dir is None:
        raise RuntimeError("paths.output_dir が未設定です")

    resvg = str(_section(payload, "export").get("resvg") or "").strip()
    if not resvg:
        raise RuntimeError("export.resvg が未設定です")

    geodata: dict[str, Path] = {}
    for name, value in _section(payload, "geodata").items():
        p = _path_or_none(value)
        if p is not None:
            geodata[str(name)] = p

    return RuntimeConfig(config_path=config_path, output_dir=output_dir, resvg=resvg, geodata=geodata)


def runtime_config() -> RuntimeConfig:
    """実行時設定を返す（キャッシュ）。

    上書き順（トップレベルキー単位で後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.wireglobe/config.yaml` または `~/.config/wireglobe/config.yaml`
    3) `set_config_path(...)` で指定したパス

    Raises
    ------
    FileNotFoundError
        明示指定したファイルが存在しない場合。
    RuntimeError
        YAML や値が不正な場合。
    """

    global _cached
    if _cached is not None:
        return _cached

    explicit = _explicit_path
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")

    packaged = resources.files("wireglobe").joinpath("resource", "default_config.yaml")
    payload = dict(_parse(packaged.read_text(encoding="utf-8"), source=_PACKAGED_SOURCE))

    discovered = _discover()
    for layer in (discovered, explicit):
        if layer is not None:
            payload.update(_parse(layer.read_text(encoding="utf-8"), source=str(layer)))

    _cached = _build(payload, config_path=explicit or discovered)
    return _cached


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return runtime_config().output_dir


def resvg_command() -> str:
    return runtime_config().resvg


def geodata_path(name: str) -> Path | None:
    """境界線テーブル name の差し替えファイルを返す。未設定なら None。"""

    return runtime_config().geodata.get(str(name))


__all__ = [
    "CONFIG_VERSION",
    "RuntimeConfig",
    "geodata_path",
    "output_root_dir",
    "resvg_command",
    "runtime_config",
    "set_config_path",
]
