"""Namespace extractor model — pattern stored as string, compiled on first use."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from fnmatch import fnmatch
from typing import List, Optional


@dataclass
class NamespaceExtractor:
    """Reads the declared package / namespace of one kind of source file.

    ``pattern`` must define a named group ``namespace``. It is compiled with
    ``re.MULTILINE`` so ``^`` anchors at any line start; the first match in
    the file wins.
    """

    id: str
    name: str
    file_patterns: List[str]
    pattern: str
    enabled: bool = True

    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        if self._compiled_pattern is None:
            self._compiled_pattern = re.compile(self.pattern, re.MULTILINE)
        return self._compiled_pattern

    def applies_to(self, filename: str) -> bool:
        return any(fnmatch(filename, pat) for pat in self.file_patterns)

    def extract(self, text: str) -> Optional[str]:
        """Return the declared namespace, or None if the file declares none."""
        m = self.compiled_pattern.search(text)
        if m is None:
            return None
        return m.group("namespace").strip()
