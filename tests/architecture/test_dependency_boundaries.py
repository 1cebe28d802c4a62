"""依存境界（core → render → export → globe）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path


def _package_root() -> Path:
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / "src" / "wireglobe").is_dir() and (parent / "tests").is_dir():
            return parent / "src" / "wireglobe"
    raise RuntimeError("src/wireglobe が見つからない")


def _imported_modules(path: Path) -> set[str]:
    """path 内の import 先モジュール名を返す。相対 import は ValueError。"""
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                raise ValueError(f"相対 import は使わない: line={node.lineno}")
            base = str(node.module)
            modules.add(base)
            modules.update(f"{base}.{alias.name}" for alias in node.names if alias.name != "*")
    return modules


def _assert_no_forbidden_imports(subdir: str, forbidden_prefixes: tuple[str, ...]) -> None:
    root = _package_root()
    violations: list[str] = []
    for path in sorted(p for p in (root / subdir).rglob("*.py") if p.is_file()):
        rel = path.relative_to(root.parent)
        try:
            modules = _imported_modules(path)
        except ValueError as e:
            violations.append(f"{rel}: {e}")
            continue
        bad = sorted(m for m in modules if m.startswith(forbidden_prefixes))
        if bad:
            violations.append(f"{rel}: {', '.join(bad)}")

    if violations:
        joined = "\n".join(violations)
        raise AssertionError(f"依存境界違反の import を検出:\n{joined}")


def test_core_does_not_depend_on_render_export_or_globe() -> None:
    _assert_no_forbidden_imports(
        "core",
        ("wireglobe.render", "wireglobe.export", "wireglobe.globe", "PIL", "subprocess"),
    )


def test_render_does_not_depend_on_export_or_globe() -> None:
    _assert_no_forbidden_imports("render", ("wireglobe.export", "wireglobe.globe", "PIL"))


def test_export_does_not_depend_on_globe() -> None:
    _assert_no_forbidden_imports("export", ("wireglobe.globe",))


def test_imported_modules_rejects_relative_imports(tmp_path: Path) -> None:
    src = tmp_path / "mod.py"
    src.write_text("from ..export import svg\n", encoding="utf-8")
    try:
        _imported_modules(src)
    except ValueError:
        return
    raise AssertionError("相対 import は ValueError にする")


def test_imported_modules_expands_from_imports(tmp_path: Path) -> None:
    src = tmp_path / "mod.py"
    src.write_text("import numpy as np\nfrom wireglobe.export import svg\n", encoding="utf-8")
    assert _imported_modules(src) == {"numpy", "wireglobe.export", "wireglobe.export.svg"}
