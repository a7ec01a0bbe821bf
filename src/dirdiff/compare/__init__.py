"""Comparison engine — ignore filtering, tree and line diff, moves, flattening."""

from dirdiff.compare.engine import CompareError, CompareResult, compare
from dirdiff.compare.files import FileComparator, compare_texts
from dirdiff.compare.flatten import flatten
from dirdiff.compare.ignore import IgnoreMatcher
from dirdiff.compare.models import (
    DiffEntry,
    DiffNode,
    DiffStatus,
    DiffTree,
    FileDiff,
    FileDiffLine,
    LineStatus,
)
from dirdiff.compare.moves import Move, MoveDetector
from dirdiff.compare.tree import TreeComparator

__all__ = [
    "CompareError",
    "CompareResult",
    "DiffEntry",
    "DiffNode",
    "DiffStatus",
    "DiffTree",
    "FileComparator",
    "FileDiff",
    "FileDiffLine",
    "IgnoreMatcher",
    "LineStatus",
    "Move",
    "MoveDetector",
    "TreeComparator",
    "compare",
    "compare_texts",
    "flatten",
]
