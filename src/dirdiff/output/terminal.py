"""Rich terminal reporter — tree view, table view, side-by-side file diff."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from dirdiff.compare.engine import CompareResult
from dirdiff.compare.models import (
    DiffEntry,
    DiffNode,
    DiffStatus,
    DiffTree,
    FileDiff,
    LineStatus,
)
from dirdiff.output.csv_export import to_row

_STATUS_STYLE = {
    DiffStatus.ADDED: "green",
    DiffStatus.REMOVED: "red",
    DiffStatus.MODIFIED: "yellow",
    DiffStatus.IDENTICAL: "dim",
    DiffStatus.MOVED: "cyan",
    DiffStatus.MOVED_MODIFIED: "bold cyan",
}

_STATUS_ICON = {
    DiffStatus.ADDED: "+",
    DiffStatus.REMOVED: "-",
    DiffStatus.MODIFIED: "~",
    DiffStatus.IDENTICAL: "=",
    DiffStatus.MOVED: "→",
    DiffStatus.MOVED_MODIFIED: "⇢",
}

_LINE_STYLE = {
    LineStatus.ADDED: "green",
    LineStatus.REMOVED: "red",
    LineStatus.MODIFIED: "yellow",
    LineStatus.IDENTICAL: "",
}


def _status_pill(status: DiffStatus) -> Text:
    return Text(f"{_STATUS_ICON[status]} {status.name}", style=_STATUS_STYLE[status])


def _node_label(node: DiffNode) -> Text:
    style = _STATUS_STYLE[node.status]
    label = Text(f"{_STATUS_ICON[node.status]} ", style=style)
    label.append(node.name + ("/" if node.is_directory else ""), style=f"bold {style}" if node.is_directory else style)
    if node.source_path:
        label.append(f"  ← {node.source_path}", style="dim")
    if not node.is_directory and node.status not in (DiffStatus.IDENTICAL, DiffStatus.MOVED):
        label.append(
            f"  +{node.added} ~{node.modified} -{node.removed} ({node.percentage:.1f}%)",
            style="dim",
        )
    return label


def _add_children(branch: Tree, tree: DiffTree, node: DiffNode, show_identical: bool) -> None:
    for child in tree.children(node):
        if not show_identical and child.status == DiffStatus.IDENTICAL:
            continue
        sub = branch.add(_node_label(child))
        if child.is_directory:
            _add_children(sub, tree, child, show_identical)


def build_tree(tree: DiffTree, *, show_identical: bool = True) -> Tree:
    """Rich Tree mirroring the diff tree."""
    root = Tree(_node_label(tree.root), guide_style="dim")
    _add_children(root, tree, tree.root, show_identical)
    return root


def build_table(entries: List[DiffEntry], *, show_identical: bool = True) -> Table:
    """Rich Table with one row per flattened entry."""
    table = Table(title="Directory Comparison", title_style="bold", border_style="dim")
    table.add_column("Status", width=16)
    for header in ("Destination Path", "Source Path", "Type"):
        table.add_column(header, style="magenta" if header.startswith("Dest") else None)
    for header in ("Diff %", "Added", "Modified", "Deleted"):
        table.add_column(header, justify="right")

    for entry in entries:
        if not show_identical and entry.status == DiffStatus.IDENTICAL:
            continue
        path, source, kind, _status, *numbers = to_row(entry)
        table.add_row(_status_pill(entry.status), Text(path), Text(source), kind, *numbers)
    return table


def render(
    result: CompareResult,
    *,
    view: str = "tree",
    entries: Optional[List[DiffEntry]] = None,
    show_summary: bool = True,
    show_identical: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print comparison results to the terminal using Rich."""
    console = console or Console(stderr=True)

    console.print()
    if view == "table":
        rows = result.entries if entries is None else entries
        console.print(build_table(rows, show_identical=show_identical))
    else:
        console.print(build_tree(result.tree, show_identical=show_identical))

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.identical:
        console.print("[bold green]✅ Trees are identical.[/bold green]")
    else:
        console.print("[bold yellow]Trees differ.[/bold yellow]")


def render_file_diff(
    diff: FileDiff,
    relative_path: str,
    *,
    source_path: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Print a side-by-side line diff of one file pair."""
    console = console or Console(stderr=True)

    title = f"{source_path} → {relative_path}" if source_path else relative_path
    table = Table(title=escape(title), title_style="bold", border_style="dim", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Left", overflow="fold")
    table.add_column("Right", overflow="fold")

    for no, line in enumerate(diff.lines, 1):
        style = _LINE_STYLE[line.status]
        table.add_row(
            str(no),
            Text(line.left if line.left is not None else "", style=style),
            Text(line.right if line.right is not None else "", style=style),
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        f"[green]+{diff.added}[/green]  [yellow]~{diff.modified}[/yellow]  "
        f"[red]-{diff.removed}[/red]  [dim]({diff.percentage:.1f}% changed)[/dim]"
    )


def _print_summary(console: Console, result: CompareResult) -> None:
    counts = result.summary()
    console.print()
    console.print(f"[dim]Left:[/dim]           {escape(str(result.left))}")
    console.print(f"[dim]Right:[/dim]          {escape(str(result.right))}")
    for status in DiffStatus:
        label = f"{status.name.replace('_', ' ').title()}:"
        console.print(f"[dim]{label:<16}[/dim]{counts[status]}")
    console.print(f"[dim]Duration:[/dim]       {result.duration_ms:.0f}ms")
