"""Data models for tree and line comparison.

The diff tree is an arena: every ``DiffNode`` lives in a slot of a
``DiffTree`` and refers to its parent and children by index. Nodes are
frozen; the tree replaces a node in its slot when its status or counts
change, so no half-built node is ever visible to a reader.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class DiffStatus(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    IDENTICAL = "identical"
    MOVED = "moved"
    MOVED_MODIFIED = "moved_modified"


class LineStatus(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    IDENTICAL = "identical"


ONE_SIDED = frozenset({DiffStatus.ADDED, DiffStatus.REMOVED})


@dataclass(frozen=True, slots=True)
class FileDiffLine:
    """One positional line pair. ``None`` marks a side with no line here."""

    left: Optional[str]
    right: Optional[str]
    status: LineStatus


@dataclass(frozen=True)
class FileDiff:
    """Line-level diff of two file contents."""

    lines: List[FileDiffLine] = field(default_factory=list)
    added: int = 0
    removed: int = 0
    modified: int = 0
    percentage: float = 0.0


@dataclass(frozen=True)
class DiffNode:
    """A directory or file in the diff tree."""

    index: int
    name: str
    is_directory: bool
    status: DiffStatus
    relative_path: str  # '' for the root
    parent: Optional[int] = None
    child_ids: Tuple[int, ...] = ()
    added: int = 0
    removed: int = 0
    modified: int = 0
    percentage: float = 0.0
    source_path: Optional[str] = None  # set on MOVED / MOVED_MODIFIED


@dataclass(frozen=True)
class DiffEntry:
    """Flattened, read-only projection of a DiffNode."""

    path: str
    is_directory: bool
    status: DiffStatus
    relative_path: str
    added: int = 0
    removed: int = 0
    modified: int = 0
    percentage: float = 0.0
    source_path: Optional[str] = None


def derive_directory_status(current: DiffStatus, children: List[DiffNode]) -> DiffStatus:
    """Status of a directory given its children.

    A directory that exists on one side only keeps ADDED / REMOVED.
    """
    if current in ONE_SIDED:
        return current
    if any(c.status != DiffStatus.IDENTICAL for c in children):
        return DiffStatus.MODIFIED
    return DiffStatus.IDENTICAL


class DiffTree:
    """Arena of DiffNodes; index 0 is the root."""

    def __init__(self) -> None:
        self._slots: List[DiffNode] = []
        self._attached: List[bool] = []

    # ---- construction ----

    def add(
        self,
        name: str,
        *,
        is_directory: bool,
        status: DiffStatus,
        relative_path: str,
        parent: Optional[int] = None,
    ) -> int:
        """Append a node and return its index."""
        index = len(self._slots)
        self._slots.append(
            DiffNode(
                index=index,
                name=name,
                is_directory=is_directory,
                status=status,
                relative_path=relative_path,
                parent=parent,
            )
        )
        self._attached.append(True)
        return index

    def update(self, index: int, **changes) -> DiffNode:
        """Replace the node at *index* with a copy carrying *changes*."""
        node = replace(self._slots[index], **changes)
        self._slots[index] = node
        return node

    def detach(self, index: int) -> Optional[int]:
        """Remove a node (and its subtree) from its parent. Returns the parent index."""
        node = self._slots[index]
        for sub in self.walk(node):
            self._attached[sub.index] = False
        if node.parent is None:
            return None
        parent = self._slots[node.parent]
        self.update(
            parent.index,
            child_ids=tuple(c for c in parent.child_ids if c != index),
        )
        return parent.index

    def rederive_status(self, index: int) -> bool:
        """Recompute a directory's status from its children. Returns True if it changed."""
        node = self._slots[index]
        if not node.is_directory:
            return False
        status = derive_directory_status(node.status, self.children(node))
        if status == node.status:
            return False
        self.update(index, status=status)
        return True

    # ---- queries ----

    @property
    def empty(self) -> bool:
        return not self._slots

    @property
    def root(self) -> DiffNode:
        return self._slots[0]

    def node(self, index: int) -> DiffNode:
        return self._slots[index]

    def children(self, node: DiffNode | int) -> List[DiffNode]:
        if isinstance(node, int):
            node = self._slots[node]
        return [self._slots[i] for i in node.child_ids]

    def parent(self, node: DiffNode | int) -> Optional[DiffNode]:
        if isinstance(node, int):
            node = self._slots[node]
        return None if node.parent is None else self._slots[node.parent]

    def ancestors(self, node: DiffNode | int) -> Iterator[DiffNode]:
        """Yield parents from the nearest up to the root."""
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def walk(self, start: Optional[DiffNode] = None) -> Iterator[DiffNode]:
        """Pre-order traversal from *start* (default: the root)."""
        if not self._slots:
            return
        stack = [start if start is not None else self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(self._slots[i] for i in reversed(node.child_ids))

    def leaves(self) -> Iterator[DiffNode]:
        return (n for n in self.walk() if not n.is_directory)

    def find(self, relative_path: str) -> Optional[DiffNode]:
        """Return the attached node at *relative_path* ('' is the root)."""
        if not self._slots:
            return None
        current = self.root
        for part in [p for p in relative_path.split("/") if p]:
            match = next((c for c in self.children(current) if c.name == part), None)
            if match is None:
                return None
            current = match
        return current

    def is_attached(self, index: int) -> bool:
        return self._attached[index]

    def status_counts(self) -> Dict[DiffStatus, int]:
        """Number of files per status."""
        counts = {status: 0 for status in DiffStatus}
        for leaf in self.leaves():
            counts[leaf.status] += 1
        return counts

    def __len__(self) -> int:
        return sum(1 for _ in self.walk())
