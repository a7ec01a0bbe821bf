"""Compare pipeline — ignore filtering, tree union, move detection.

I/O safety: filesystem errors abort the comparison. They are re-raised as
CompareError so callers never receive a partially built tree.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dirdiff.compare.files import FileComparator
from dirdiff.compare.flatten import flatten
from dirdiff.compare.ignore import IgnoreMatcher
from dirdiff.compare.models import DiffEntry, DiffStatus, DiffTree
from dirdiff.compare.moves import Move, MoveDetector
from dirdiff.compare.tree import TreeComparator
from dirdiff.config.schema import DirDiffConfig
from dirdiff.namespaces.registry import ExtractorRegistry, build_registry

logger = logging.getLogger(__name__)


class CompareError(Exception):
    """Raised when a comparison cannot be completed (I/O failure)."""


@dataclass
class CompareResult:
    """Complete result of one comparison."""

    tree: DiffTree
    left: Optional[Path]
    right: Optional[Path]
    moves: List[Move] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def entries(self) -> List[DiffEntry]:
        return flatten(self.tree)

    @property
    def identical(self) -> bool:
        return self.tree.root.status == DiffStatus.IDENTICAL

    def summary(self) -> Dict[DiffStatus, int]:
        return self.tree.status_counts()


def build_matcher(config: DirDiffConfig, base_dir: Path) -> IgnoreMatcher:
    """IgnoreMatcher from the configured ignore file plus extra patterns."""
    ignore_file = Path(config.ignore.file)
    if not ignore_file.is_absolute():
        ignore_file = base_dir / ignore_file
    return IgnoreMatcher.from_file(ignore_file, extra=config.ignore.patterns)


def compare(
    left: Optional[Path],
    right: Optional[Path],
    config: DirDiffConfig,
    *,
    matcher: Optional[IgnoreMatcher] = None,
    extractors: Optional[ExtractorRegistry] = None,
    base_dir: Optional[Path] = None,
) -> CompareResult:
    """Compare *left* with *right*. Returns a CompareResult."""
    start = time.perf_counter()
    base_dir = base_dir or Path.cwd()

    if matcher is None:
        try:
            matcher = build_matcher(config, base_dir)
        except ValueError as exc:
            raise CompareError(str(exc)) from exc
    file_comparator = FileComparator(encoding=config.compare.encoding)
    comparator = TreeComparator(matcher, file_comparator)

    logger.debug("Ignore patterns: %s", ", ".join(matcher.patterns) or "(none)")

    try:
        tree = comparator.compare_directories(left, right)
        moves: List[Move] = []
        if config.compare.detect_moves:
            if extractors is None:
                extractors = build_registry(config, base_dir)
            detector = MoveDetector(left, right, file_comparator, extractors)
            moves = detector.detect(tree)
    except OSError as exc:
        raise CompareError(f"Comparison of {left} and {right} failed: {exc}") from exc

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Compared %s and %s: %d nodes, %d moves in %.0fms",
        left, right, len(tree), len(moves), elapsed,
    )

    return CompareResult(
        tree=tree,
        left=left,
        right=right,
        moves=moves,
        duration_ms=round(elapsed, 2),
    )
