"""Entry filters shared by the table view and the CSV export."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Iterable, List

from dirdiff.compare.models import DiffEntry, DiffStatus

ALL = "all"

_TYPE_BY_SUFFIX = {
    ".java": "java",
    ".xml": "xml",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".properties": "props",
}

ENTRY_TYPES: tuple[str, ...] = ("directory", *sorted(set(_TYPE_BY_SUFFIX.values())), "file")
STATUS_FILTERS: tuple[str, ...] = tuple(s.value for s in DiffStatus)


def entry_type(entry: DiffEntry) -> str:
    """Coarse entry type derived from the file extension."""
    if entry.is_directory:
        return "directory"
    return _TYPE_BY_SUFFIX.get(PurePosixPath(entry.path).suffix.lower(), "file")


def filter_entries(
    entries: Iterable[DiffEntry],
    type_filter: str = ALL,
    status_filter: str = ALL,
) -> List[DiffEntry]:
    """Keep entries matching both filters; ``all`` disables a filter."""
    kept: List[DiffEntry] = []
    for entry in entries:
        if type_filter != ALL and entry_type(entry) != type_filter:
            continue
        if status_filter != ALL and entry.status.value != status_filter:
            continue
        kept.append(entry)
    return kept
