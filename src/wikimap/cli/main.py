"""
wikimap CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import demo, explore, init
from .utils import configure_logging


@click.group()
@click.version_option(package_name="wikimap")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
def main(verbose: bool):
    """wikimap: Wikipedia Link Explorer.

    Grows a graph of articles from seed topics by following their links,
    and traces any topic back to the seed it was reached from.

    \b
    Quick Start:
      wikimap demo
      wikimap explore "Albert Einstein" --depth 2 -o map.html
      wikimap suggest Einst
    """
    configure_logging(verbose)


# Register commands
main.add_command(explore.explore)
main.add_command(explore.suggest)
main.add_command(demo.demo)
main.add_command(init)

if __name__ == "__main__":
    main()
