"""CSV export of flattened entries.

Counts and percentage are shown as ``-`` for directories and for files that
moved unchanged; MOVED_MODIFIED rows carry the diff against the old file.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, List

from dirdiff.compare.models import DiffEntry, DiffStatus

HEADER = [
    "Destination Path",
    "Source Path",
    "Type",
    "Status",
    "Diff %",
    "Added",
    "Modified",
    "Deleted",
]

# Statuses whose counts are meaningful in an export row
_SHOWS_COUNTS = {
    DiffStatus.ADDED: True,
    DiffStatus.REMOVED: True,
    DiffStatus.MODIFIED: True,
    DiffStatus.IDENTICAL: True,
    DiffStatus.MOVED: False,
    DiffStatus.MOVED_MODIFIED: True,
}


def to_row(entry: DiffEntry) -> List[str]:
    counts = not entry.is_directory and _SHOWS_COUNTS[entry.status]
    return [
        entry.path,
        entry.source_path or "",
        "Directory" if entry.is_directory else "File",
        entry.status.name,
        f"{entry.percentage:.1f}%" if counts else "-",
        str(entry.added) if counts else "-",
        str(entry.modified) if counts else "-",
        str(entry.removed) if counts else "-",
    ]


def render(entries: Iterable[DiffEntry]) -> str:
    """Return the CSV document (header plus one row per entry)."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADER)
    for entry in entries:
        writer.writerow(to_row(entry))
    return buf.getvalue()
