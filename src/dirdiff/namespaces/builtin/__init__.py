"""Built-in namespace extractors — aggregate all languages."""

from dirdiff.namespaces.builtin.dotnet import ALL_DOTNET_EXTRACTORS
from dirdiff.namespaces.builtin.jvm import ALL_JVM_EXTRACTORS
from dirdiff.namespaces.builtin.scripting import ALL_SCRIPTING_EXTRACTORS
from dirdiff.namespaces.models import NamespaceExtractor

ALL_BUILTIN_EXTRACTORS: list[NamespaceExtractor] = [
    *ALL_JVM_EXTRACTORS,
    *ALL_DOTNET_EXTRACTORS,
    *ALL_SCRIPTING_EXTRACTORS,
]

__all__ = ["ALL_BUILTIN_EXTRACTORS"]
