"""PHP namespaces and Go packages."""

from dirdiff.namespaces.models import NamespaceExtractor

PHP_NAMESPACE = NamespaceExtractor(
    id="PHP_NAMESPACE",
    name="PHP namespace",
    file_patterns=["*.php"],
    pattern=r"^\s*namespace\s+(?P<namespace>[A-Za-z_\\][\w\\]*)\s*[;{]",
)

GO_PACKAGE = NamespaceExtractor(
    id="GO_PACKAGE",
    name="Go package",
    file_patterns=["*.go"],
    pattern=r"^\s*package\s+(?P<namespace>[A-Za-z_]\w*)\s*$",
)

ALL_SCRIPTING_EXTRACTORS = [PHP_NAMESPACE, GO_PACKAGE]
