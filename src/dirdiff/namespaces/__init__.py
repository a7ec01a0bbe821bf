"""Namespace extraction — models, registry, built-in extractors."""

from dirdiff.namespaces.models import NamespaceExtractor
from dirdiff.namespaces.registry import ExtractorError, ExtractorRegistry, build_registry

__all__ = ["ExtractorError", "ExtractorRegistry", "NamespaceExtractor", "build_registry"]
