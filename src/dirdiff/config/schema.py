"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["terminal", "json", "csv"]
ViewType = Literal["tree", "table"]

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "csv")
VIEW_TYPES: tuple[str, ...] = ("tree", "table")


@dataclass
class CompareConfig:
    detect_moves: bool = True
    encoding: str = "utf-8"  # primary encoding; platform default and latin-1 follow


@dataclass
class IgnoreConfig:
    file: str = ".dirdiff-ignore"  # relative to the working directory
    patterns: List[str] = field(default_factory=list)  # appended to the file's patterns


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    view: ViewType = "tree"
    show_summary: bool = True
    show_identical: bool = True


@dataclass
class ExportConfig:
    type_filter: str = "all"  # all | directory | java | xml | json | yaml | props | file
    status_filter: str = "all"  # all | added | removed | modified | identical | moved | moved_modified


@dataclass
class NamespacesConfig:
    disable: List[str] = field(default_factory=list)


@dataclass
class DirDiffConfig:
    version: str = "1.0"
    compare: CompareConfig = field(default_factory=CompareConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    namespaces: NamespacesConfig = field(default_factory=NamespacesConfig)
