"""
Explore Command - Grow a link graph from live Wikipedia pages.
"""

import asyncio
import sys
from typing import Optional, Tuple

import click

from ...config import load_config
from ...core.explorer import Explorer
from ...sources import LinkSourceError, WikipediaLinkSource
from ..utils import echo_error, echo_info, run_session


@click.command()
@click.argument("topics", nargs=-1)
@click.option("-d", "--depth", default=1, show_default=True, type=click.IntRange(0, 5),
              help="How many levels of links to expand")
@click.option("--people-only/--all-links", default=None,
              help="Keep only links to people and characters (whole page instead of intro)")
@click.option("--random", "use_random", is_flag=True, help="Add a random article as a seed")
@click.option("-t", "--trace", "trace_topic", help="Topic to trace back to its root")
@click.option("-o", "--output", help="Write an HTML view of the graph (.html)")
@click.option("--open", "open_browser", is_flag=True, help="Open the HTML view in a browser")
def explore(topics: Tuple[str, ...], depth: int, people_only: Optional[bool], use_random: bool,
            trace_topic: Optional[str], output: Optional[str], open_browser: bool) -> None:
    """
    Explore the links between Wikipedia articles.

    \b
    Examples:
      wikimap explore "Albert Einstein" --depth 2
      wikimap explore Coffee Tea --trace Caffeine -o map.html
    """
    config = load_config()
    if people_only is not None:
        config = config.model_copy(update={"people_only": people_only})

    source = WikipediaLinkSource(config.api_url, people_only=config.people_only, timeout=config.timeout)
    seeds = list(topics)

    if use_random:
        try:
            seeds.append(asyncio.run(source.random_article()))
        except LinkSourceError as e:
            echo_error(f"Could not fetch a random article: {e}")
            sys.exit(1)

    if not seeds:
        echo_error("Give at least one topic, or use --random.")
        sys.exit(1)

    explorer = Explorer(source, config=config)
    summary = run_session(explorer, seeds, depth, trace_topic, output, open_browser)

    if summary.roots and summary.expanded == 0 and depth > 0:
        echo_info("Nothing could be expanded; check your connection or the topic names.")
        sys.exit(1)


@click.command()
@click.argument("text")
@click.option("-n", "--limit", default=10, show_default=True, help="Maximum suggestions")
def suggest(text: str, limit: int) -> None:
    """Suggest article titles starting with TEXT."""
    config = load_config()
    source = WikipediaLinkSource(config.api_url, timeout=config.timeout)
    try:
        titles = asyncio.run(source.suggestions(text, limit=limit))
    except LinkSourceError as e:
        echo_error(str(e))
        sys.exit(1)

    for title in titles:
        click.echo(title)
