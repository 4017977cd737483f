"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, logging setup, and the exploration
loop shared by the ``explore`` and ``demo`` commands.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

import click

from ..core.explorer import Explorer
from ..core.identity import normalize
from ..core.result import Err, Ok
from ..graph.visualize import export_html


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@dataclass
class ExplorationSummary:
    roots: List[str] = field(default_factory=list)
    expanded: int = 0
    failures: List[str] = field(default_factory=list)


async def explore(explorer: Explorer, seeds: Sequence[str], depth: int) -> ExplorationSummary:
    """
    Seed the graph and expand it breadth-first ``depth`` levels deep.

    Each level is expanded concurrently. Failed expansions are recorded and
    skipped; their nodes simply stay unexpanded.
    """
    summary = ExplorationSummary(roots=explorer.seed(seeds))
    frontier = list(summary.roots)

    for _ in range(depth):
        if not frontier:
            break
        results = await explorer.expand_all(frontier)
        frontier = []
        for result in results:
            if isinstance(result, Ok):
                summary.expanded += 1
                frontier.extend(result.value.added_nodes)
            elif isinstance(result, Err):
                summary.failures.append(result.error.message)

    return summary


def print_trace(names: List[str]) -> None:
    """Print a root-first trace as a tree."""
    for i, name in enumerate(names):
        connector = "└─" if i == len(names) - 1 else "├─"
        color = "yellow" if i == len(names) - 1 else ("cyan" if i == 0 else "white")
        click.echo(f"    {connector} {click.style(name, fg=color)}")


def run_session(
    explorer: Explorer,
    seeds: Sequence[str],
    depth: int,
    trace_topic: Optional[str] = None,
    output: Optional[str] = None,
    open_browser: bool = False,
) -> ExplorationSummary:
    """Run an exploration and report it on the console."""
    summary = asyncio.run(explore(explorer, seeds, depth))

    if not summary.roots:
        echo_error("No topics to explore.")
        return summary

    stats = explorer.store.get_stats()
    click.echo()
    click.echo(f"🌐 {click.style('Exploration', bold=True)}")
    click.echo("═" * 60)
    click.echo(f"Roots:    {', '.join(explorer.store.get_node(r).name for r in summary.roots)}")
    click.echo(f"Expanded: {summary.expanded}")
    click.echo(f"Topics:   {stats['total_nodes']}")
    click.echo(f"Links:    {stats['total_edges']}")

    for failure in summary.failures:
        echo_warning(failure)

    trace_names: List[str] = []
    if trace_topic:
        node_id = normalize(trace_topic)
        if not explorer.store.has_node(node_id):
            echo_warning(f"'{trace_topic}' is not on the graph")
        else:
            explorer.trace(node_id)
            explorer.focus(node_id)
            trace_names = explorer.traceback(node_id)
            click.echo()
            click.echo(f"🔗 {click.style('Traceback', bold=True)} ({len(trace_names)} steps)")
            print_trace(trace_names)
            echo_info(explorer.page_url(node_id))

    if output:
        output_path = Path(output)
        if output_path.suffix != ".html":
            echo_error(f"Unsupported format: {output_path.suffix}")
            click.echo("Supported: .html")
        else:
            export_html(explorer.surface, output_path, trace_names, open_browser=open_browser)
            click.echo()
            echo_success(f"Generated: {output_path}")
            echo_info(f"Open: file://{output_path.absolute()}")

    return summary
