# どこで: `src/wireglobe/__init__.py`。
# 何を: ルート `wireglobe` パッケージを定義し、描画面とスタイルを再エクスポートする。
# なぜ: import 起点を `wireglobe` に統一するため。

from __future__ import annotations

from wireglobe.core.paths import PathTable, load_path_table
from wireglobe.core.style import DEFAULT_STYLE, SetColor, Style, color
from wireglobe.globe import Globe

__all__ = ["DEFAULT_STYLE", "Globe", "PathTable", "SetColor", "Style", "color", "load_path_table"]
