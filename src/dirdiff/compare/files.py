"""Positional line diff of two optional files.

Line *i* of the left file is compared with line *i* of the right file.
There is no edit-distance alignment: an inserted line shows up as a run of
MODIFIED lines followed by ADDED ones.
"""

from __future__ import annotations

import locale
import re
from pathlib import Path
from typing import List, Optional, Sequence

from dirdiff.compare.models import FileDiff, FileDiffLine, LineStatus

# Maps every byte to a code point, so it is always the last resort.
BYTE_PRESERVING_ENCODING = "iso-8859-1"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split on CRLF, CR or LF. A trailing terminator adds no empty line."""
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def percentage_of(changed: int, total: int) -> float:
    return 0.0 if total == 0 else changed / total * 100


class FileComparator:
    """Compare two optional files line by line."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    @property
    def encodings(self) -> List[str]:
        """Decode chain: primary, platform default, byte-preserving."""
        chain: List[str] = []
        for enc in (self.encoding, locale.getpreferredencoding(False)):
            if enc and enc.lower() not in chain and enc.lower() != BYTE_PRESERVING_ENCODING:
                chain.append(enc.lower())
        chain.append(BYTE_PRESERVING_ENCODING)
        return chain

    def decode(self, raw: bytes) -> str:
        for enc in self.encodings[:-1]:
            try:
                return raw.decode(enc)
            except (UnicodeDecodeError, LookupError):
                continue
        return raw.decode(BYTE_PRESERVING_ENCODING)

    def read_lines(self, path: Optional[Path]) -> List[str]:
        """Read *path* as lines. An absent path yields no lines."""
        if path is None or not path.exists():
            return []
        return split_lines(self.decode(path.read_bytes()))

    def compare_files(self, left: Optional[Path], right: Optional[Path]) -> FileDiff:
        return compare_texts(self.read_lines(left), self.read_lines(right))


def compare_texts(left_lines: Sequence[str], right_lines: Sequence[str]) -> FileDiff:
    """Align two line sequences by index and count each classification."""
    lines: List[FileDiffLine] = []
    added = removed = modified = 0
    total = max(len(left_lines), len(right_lines))

    for i in range(total):
        left = left_lines[i] if i < len(left_lines) else None
        right = right_lines[i] if i < len(right_lines) else None

        if left is None:
            status = LineStatus.ADDED
            added += 1
        elif right is None:
            status = LineStatus.REMOVED
            removed += 1
        elif left != right:
            status = LineStatus.MODIFIED
            modified += 1
        else:
            status = LineStatus.IDENTICAL

        lines.append(FileDiffLine(left=left, right=right, status=status))

    return FileDiff(
        lines=lines,
        added=added,
        removed=removed,
        modified=modified,
        percentage=percentage_of(added + removed + modified, total),
    )
