import logging
from collections.abc import Hashable
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from digraph._errors import GraphFileError, NoPathError, UnknownNodeError
from digraph._graph import Graph
from digraph._io import load_graph, save_graph

from .config import ConfigError, DigraphConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

GraphFileArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a .json or .toml graph document (defaults to the configured graph)"),
]
SourceOption = Annotated[
    list[str] | None,
    typer.Option("-s", "--source", help="Start node; repeat for several (defaults to every node)"),
]
ExcludeSourcesOption = Annotated[
    bool,
    typer.Option("--exclude-sources", help="Leave the start nodes out of the result"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Inspect directed graph documents."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _get_config() -> DigraphConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _resolve_graph_file(path: Path | None) -> Path:
    """Return the graph file to use, falling back to [tool.digraph].graph."""
    if path is not None:
        return path

    config = _get_config()

    if config.graph is None:
        err_console.print("[red]Error: No graph file given and no \\[tool.digraph].graph configured[/red]")
        raise typer.Exit(code=1)

    logger.debug(f"Using graph file from config: {config.graph}")
    return config.graph


def _load(path: Path | None) -> Graph:
    graph_file = _resolve_graph_file(path)
    if not graph_file.exists():
        err_console.print(f"[red]Error: Graph file not found: {graph_file}[/red]")
        raise typer.Exit(code=1)

    try:
        graph = load_graph(graph_file)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[cyan]Loaded graph:[/cyan] {graph_file} ({len(graph)} nodes)")
    return graph


def _resolve_node(graph: Graph, name: str) -> Hashable:
    """Map a command-line node name onto a node of the graph.

    Documents may use non-string ids (e.g. integers); a name matches a node
    whose string form equals it. Unmatched names are returned unchanged.
    """
    for node in graph.nodes():
        if str(node) == name:
            return node
    return name


def _print_nodes(nodes: list[Hashable]) -> None:
    for node in nodes:
        out_console.print(escape(str(node)), highlight=False)


@app.command()
def info(file: GraphFileArgument = None) -> None:
    """Show the nodes of a graph with their degrees."""
    graph = _load(file)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", style="bold")
    table.add_column("In", justify="right", style="yellow")
    table.add_column("Out", justify="right", style="green")
    table.add_column("Successors")

    link_count = 0
    for node in graph.nodes():
        successors = graph.adjacent(node)
        link_count += len(successors)
        table.add_row(
            escape(str(node)),
            str(graph.indegree(node)),
            str(graph.outdegree(node)),
            escape(", ".join(str(successor) for successor in successors)),
        )

    out_console.print(
        Panel(
            table,
            title="[bold]Graph[/bold]",
            subtitle=f"[dim]{len(graph)} nodes, {link_count} links[/dim]",
            border_style="cyan",
        ),
    )


@app.command()
def dfs(
    file: GraphFileArgument = None,
    *,
    source: SourceOption = None,
    exclude_sources: ExcludeSourcesOption = False,
) -> None:
    """Print nodes in depth-first finish order."""
    graph = _load(file)
    sources = [_resolve_node(graph, name) for name in source] if source else None
    _print_nodes(graph.depth_first_search(sources, include_sources=not exclude_sources))


@app.command()
def topo(
    file: GraphFileArgument = None,
    *,
    source: SourceOption = None,
    exclude_sources: ExcludeSourcesOption = False,
) -> None:
    """Print nodes in topological order (cycles are not reported)."""
    graph = _load(file)
    sources = [_resolve_node(graph, name) for name in source] if source else None
    _print_nodes(graph.topological_sort(sources, include_sources=not exclude_sources))


@app.command()
def path(
    source: Annotated[str, typer.Argument(help="Start node")],
    destination: Annotated[str, typer.Argument(help="End node")],
    *,
    file: Annotated[
        Path | None,
        typer.Option("-f", "--file", help="Path to a .json or .toml graph document"),
    ] = None,
) -> None:
    """Find the shortest path between two nodes."""
    graph = _load(file)

    try:
        result = graph.shortest_path(_resolve_node(graph, source), _resolve_node(graph, destination))
    except (UnknownNodeError, NoPathError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    out_console.print(escape(" -> ".join(str(node) for node in result)), highlight=False)
    err_console.print(f"[green]✓ Weight: {result.weight}[/green]")


@app.command()
def convert(
    file: GraphFileArgument = None,
    output: Annotated[
        Path | None,
        typer.Argument(help="Destination .json or .toml file (defaults to the configured output)"),
    ] = None,
) -> None:
    """Rewrite a graph document as JSON or TOML, chosen by the output suffix."""
    graph = _load(file)

    if output is None:
        output = _get_config().output
    if output is None:
        err_console.print("[red]Error: No output file given and no \\[tool.digraph].output configured[/red]")
        raise typer.Exit(code=1)

    try:
        save_graph(graph, output)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[green]✓ Wrote {output}[/green]")


def main() -> None:
    app()
