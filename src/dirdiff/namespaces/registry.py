"""Extractor registry — loads built-in and custom extractors, applies config filters."""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from dirdiff.config.schema import DirDiffConfig
from dirdiff.namespaces.models import NamespaceExtractor

CUSTOM_DIR_NAME = ".dirdiff-extractors"


class ExtractorError(Exception):
    """Raised when a custom extractor file is malformed."""


class ExtractorRegistry:
    """Central store for namespace extractors, in registration order."""

    def __init__(self) -> None:
        self._extractors: Dict[str, NamespaceExtractor] = {}

    # ---- registration ----

    def register(self, extractor: NamespaceExtractor) -> None:
        self._extractors[extractor.id] = extractor

    def register_many(self, extractors: list[NamespaceExtractor]) -> None:
        for e in extractors:
            self.register(e)

    # ---- queries ----

    @property
    def all_extractors(self) -> List[NamespaceExtractor]:
        return list(self._extractors.values())

    def get(self, extractor_id: str) -> Optional[NamespaceExtractor]:
        return self._extractors.get(extractor_id)

    def enabled_extractors(self) -> List[NamespaceExtractor]:
        return [e for e in self._extractors.values() if e.enabled]

    def for_file(self, filename: str) -> Optional[NamespaceExtractor]:
        """First enabled extractor whose file patterns match *filename*."""
        for extractor in self.enabled_extractors():
            if extractor.applies_to(filename):
                return extractor
        return None

    # ---- config filtering ----

    def apply_config(self, config: DirDiffConfig) -> None:
        disabled = set(config.namespaces.disable)
        for extractor in self._extractors.values():
            if extractor.id in disabled:
                extractor.enabled = False

    # ---- custom extractor loading ----

    def load_custom(self, directory: Path) -> int:
        """Load YAML extractor files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml(path)
        return count

    def _load_yaml(self, path: Path) -> int:
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ExtractorError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            try:
                patterns = entry["file_patterns"]
                extractor = NamespaceExtractor(
                    id=entry["id"],
                    name=entry.get("name", entry["id"]),
                    file_patterns=[patterns] if isinstance(patterns, str) else list(patterns),
                    pattern=entry["pattern"],
                    enabled=entry.get("enabled", True),
                )
                groups = extractor.compiled_pattern.groupindex
            except (KeyError, TypeError, re.error) as exc:
                raise ExtractorError(f"Invalid extractor in {path}: {exc}") from exc
            if "namespace" not in groups:
                raise ExtractorError(
                    f"Extractor {extractor.id} in {path} has no (?P<namespace>...) group"
                )
            self.register(extractor)
            count += 1
        return count


def build_registry(config: DirDiffConfig, base_dir: Path) -> ExtractorRegistry:
    """Create a fully populated, config-filtered extractor registry."""
    from dirdiff.namespaces.builtin import ALL_BUILTIN_EXTRACTORS

    registry = ExtractorRegistry()
    # Copies, so config filters never leak into the shared built-ins
    registry.register_many([dataclasses.replace(e) for e in ALL_BUILTIN_EXTRACTORS])

    registry.load_custom(base_dir / CUSTOM_DIR_NAME)
    registry.apply_config(config)
    return registry
