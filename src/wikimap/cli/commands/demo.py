"""
Demo Command - Explore the bundled offline pages.
"""

import random
from typing import Optional, Tuple

import click

from ...core.demo import DEMO_PAGES, DEMO_SEEDS, demo_link_source
from ...core.explorer import Explorer
from ..utils import run_session


@click.command()
@click.argument("topics", nargs=-1)
@click.option("-d", "--depth", default=3, show_default=True, type=click.IntRange(0, 5),
              help="How many levels of links to expand")
@click.option("-t", "--trace", "trace_topic", default="Black hole", show_default=True,
              help="Topic to trace back to its root")
@click.option("-o", "--output", help="Write an HTML view of the graph (.html)")
@click.option("--open", "open_browser", is_flag=True, help="Open the HTML view in a browser")
@click.option("--seed", "rng_seed", type=int, help="Random seed for node placement")
def demo(topics: Tuple[str, ...], depth: int, trace_topic: Optional[str], output: Optional[str],
         open_browser: bool, rng_seed: Optional[int]) -> None:
    """
    Explore a small built-in slice of Wikipedia, offline.

    \b
    Available pages include:
      Albert Einstein, Theory of relativity, Gravity, Black hole, Isaac Newton
    """
    seeds = list(topics) or DEMO_SEEDS
    explorer = Explorer(demo_link_source(), rng=random.Random(rng_seed))
    run_session(explorer, seeds, depth, trace_topic, output, open_browser)
    click.echo()
    click.echo(f"   {len(DEMO_PAGES)} demo pages available offline.")
