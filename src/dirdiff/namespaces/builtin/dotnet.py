"""C# namespaces — block-scoped and file-scoped forms."""

from dirdiff.namespaces.models import NamespaceExtractor

CSHARP_NAMESPACE = NamespaceExtractor(
    id="CSHARP_NAMESPACE",
    name="C# namespace",
    file_patterns=["*.cs"],
    pattern=r"^\s*namespace\s+(?P<namespace>[A-Za-z_@][\w.]*)\s*[;{]?",
)

ALL_DOTNET_EXTRACTORS = [CSHARP_NAMESPACE]
