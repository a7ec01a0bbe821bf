"""JSON reporter — nested tree or flattened table."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from dirdiff.compare.engine import CompareResult
from dirdiff.compare.models import DiffEntry, DiffNode, DiffTree, FileDiff


def _node_to_dict(tree: DiffTree, node: DiffNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": node.name,
        "relative_path": node.relative_path,
        "directory": node.is_directory,
        "status": node.status.value,
    }
    if node.is_directory:
        data["children"] = [_node_to_dict(tree, c) for c in tree.children(node)]
    else:
        data.update({
            "added": node.added,
            "removed": node.removed,
            "modified": node.modified,
            "percentage": round(node.percentage, 2),
        })
    if node.source_path is not None:
        data["source_path"] = node.source_path
    return data


def entry_to_dict(entry: DiffEntry) -> Dict[str, Any]:
    return {
        "path": entry.path,
        "relative_path": entry.relative_path,
        "directory": entry.is_directory,
        "status": entry.status.value,
        "added": entry.added,
        "removed": entry.removed,
        "modified": entry.modified,
        "percentage": round(entry.percentage, 2),
        **({"source_path": entry.source_path} if entry.source_path else {}),
    }


def to_dict(
    result: CompareResult,
    *,
    view: str = "tree",
    entries: Optional[List[DiffEntry]] = None,
) -> Dict[str, Any]:
    """Convert CompareResult to a JSON-serialisable dict.

    *entries* lets the caller pass an already filtered table view.
    """
    data: Dict[str, Any] = {
        "version": "1.0",
        "left": str(result.left) if result.left else None,
        "right": str(result.right) if result.right else None,
        "identical": result.identical,
        "summary": {status.value: count for status, count in result.summary().items()},
        "moves": [
            {"source": m.source, "destination": m.destination, "status": m.status.value}
            for m in result.moves
        ],
        "duration_ms": result.duration_ms,
    }
    if view == "table":
        rows = result.entries if entries is None else entries
        data["entries"] = [entry_to_dict(e) for e in rows]
    else:
        data["tree"] = _node_to_dict(result.tree, result.tree.root)
    return data


def render(result: CompareResult, *, view: str = "tree", entries: Optional[List[DiffEntry]] = None) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, view=view, entries=entries), indent=2)


def file_diff_to_dict(diff: FileDiff, relative_path: str, source_path: Optional[str] = None) -> Dict[str, Any]:
    return {
        "relative_path": relative_path,
        **({"source_path": source_path} if source_path else {}),
        "added": diff.added,
        "removed": diff.removed,
        "modified": diff.modified,
        "percentage": round(diff.percentage, 2),
        "lines": [
            {"left": line.left, "right": line.right, "status": line.status.value}
            for line in diff.lines
        ],
    }


def render_file_diff(diff: FileDiff, relative_path: str, source_path: Optional[str] = None) -> str:
    return json.dumps(file_diff_to_dict(diff, relative_path, source_path), indent=2)
