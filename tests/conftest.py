"""Shared test fixtures — directory trees built under tmp_path."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union

import pytest

from dirdiff.compare.engine import CompareResult, compare
from dirdiff.config.schema import DirDiffConfig

Files = Dict[str, Union[str, bytes, None]]


def write_tree(root: Path, files: Files) -> Path:
    """Create *root* with *files*; a ``None`` value (or trailing '/') makes a directory."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        if content is None or rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
    return root


@pytest.fixture
def make_trees(tmp_path: Path) -> Callable[[Files, Files], Tuple[Path, Path]]:
    """Build a left and a right tree under tmp_path."""

    def _make(left: Files, right: Files) -> Tuple[Path, Path]:
        return (
            write_tree(tmp_path / "left", left),
            write_tree(tmp_path / "right", right),
        )

    return _make


@pytest.fixture
def run_compare(tmp_path: Path) -> Callable[..., CompareResult]:
    """Run the full pipeline with defaults; tmp_path is the working directory."""

    def _run(left: Path, right: Path, config: Optional[DirDiffConfig] = None) -> CompareResult:
        return compare(left, right, config or DirDiffConfig(), base_dir=tmp_path)

    return _run


@pytest.fixture
def java_class() -> Callable[[str, str], str]:
    """Source of a minimal Java class in *package*."""

    def _source(package: str, body: str = "") -> str:
        return f"package {package};\n\npublic class MyClass {{\n{body}}}\n"

    return _source
