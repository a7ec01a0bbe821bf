"""JVM languages — ``package a.b.c`` declarations."""

from dirdiff.namespaces.models import NamespaceExtractor

JAVA_PACKAGE = NamespaceExtractor(
    id="JAVA_PACKAGE",
    name="Java package",
    file_patterns=["*.java"],
    pattern=r"^\s*package\s+(?P<namespace>[A-Za-z_][\w.]*)\s*;",
)

KOTLIN_PACKAGE = NamespaceExtractor(
    id="KOTLIN_PACKAGE",
    name="Kotlin / Groovy / Scala package",
    file_patterns=["*.kt", "*.kts", "*.groovy", "*.scala"],
    pattern=r"^\s*package\s+(?P<namespace>[A-Za-z_`][\w.`]*)\s*;?\s*$",
)

ALL_JVM_EXTRACTORS = [JAVA_PACKAGE, KOTLIN_PACKAGE]
