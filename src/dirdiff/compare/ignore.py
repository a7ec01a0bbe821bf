"""Ignore-list support — glob patterns that exclude entries from comparison.

Ignore file format:
  - One glob per line.
  - Blank lines and lines starting with ``#`` are skipped.

Glob syntax:
  - ``*`` and ``?`` never cross a ``/``; ``**`` does.
  - ``[abc]`` / ``[!abc]`` character classes, ``{a,b}`` alternatives.
  - ``\\`` escapes the next character.

A bare name such as ``node_modules`` excludes that name at any depth. A
relative glob such as ``*.class`` is also tried under ``**/`` so it matches
at any depth. Patterns starting with ``**/`` or ``/`` are used as given.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePath
from typing import Iterable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS: tuple[str, ...] = ("target", ".git", "build", "node_modules")

_WILDCARDS = ("/", "*", "?")


def glob_to_regex(pattern: str) -> str:
    """Translate a glob into a regex meant for ``re.fullmatch``."""
    out: List[str] = []
    i = 0
    n = len(pattern)
    in_group = False

    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                negate = body.startswith("!")
                if negate:
                    body = body[1:]
                body = body.replace("\\", "\\\\")
                out.append(f"[{'^' if negate else ''}{body}]")
                i = end
        elif c == "{" and not in_group:
            in_group = True
            out.append("(?:")
        elif c == "," and in_group:
            out.append("|")
        elif c == "}" and in_group:
            in_group = False
            out.append(")")
        elif c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(pattern[i]))
        else:
            out.append(re.escape(c))
        i += 1

    if in_group:
        raise ValueError(f"Unclosed '{{' in glob: {pattern!r}")
    return "".join(out)


def compile_pattern(pattern: str) -> List[re.Pattern[str]]:
    """Compile one ignore pattern into one or two matchers."""
    if not any(ch in pattern for ch in _WILDCARDS):
        globs = [f"**/{pattern}", pattern]
    elif pattern.startswith("**/") or pattern.startswith("/"):
        globs = [pattern]
    else:
        globs = [f"**/{pattern}", pattern]
    return [re.compile(glob_to_regex(g)) for g in globs]


def read_ignore_file(path: Path) -> Optional[List[str]]:
    """Return the patterns listed in *path*, or None if it cannot be read."""
    try:
        with open(path, encoding="utf-8") as f:
            raw_lines = f.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Ignore file %s not usable (%s); using defaults", path, exc)
        return None

    patterns: List[str] = []
    for raw in raw_lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


class IgnoreMatcher:
    """Decide whether a filesystem entry is left out of the comparison."""

    def __init__(self, patterns: Optional[Sequence[str]] = None) -> None:
        self._patterns: List[str] = list(DEFAULT_PATTERNS if patterns is None else patterns)
        self._matchers: List[re.Pattern[str]] = []
        for pat in self._patterns:
            try:
                self._matchers.extend(compile_pattern(pat))
            except (ValueError, re.error) as exc:
                raise ValueError(f"Invalid ignore pattern {pat!r}: {exc}") from exc

    @classmethod
    def from_file(cls, path: Optional[Path], extra: Iterable[str] = ()) -> "IgnoreMatcher":
        """Load patterns from an ignore file, falling back to the defaults."""
        patterns = read_ignore_file(path) if path is not None else None
        if patterns is None:
            patterns = list(DEFAULT_PATTERNS)
        patterns.extend(p.strip() for p in extra if p.strip())
        return cls(patterns)

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def is_ignored(self, path: Union[str, PurePath]) -> bool:
        """Return True if *path* (full path or bare name) matches any pattern."""
        pure = PurePath(path)
        full = pure.as_posix()
        name = pure.name
        return any(m.fullmatch(full) or m.fullmatch(name) for m in self._matchers)
