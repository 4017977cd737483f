"""
Init Command - Project settings bootstrap.

This module handles the `wikimap init` command, which writes a
``.wikimap/config.yaml`` file with the explorer settings.
"""

from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from ...config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS

console = Console()

# Default configuration template
DEFAULT_CONFIG = {
    "version": "1.0",
    "explorer": {
        "api_url": DEFAULT_API_URL,
        "timeout": DEFAULT_TIMEOUT_SECONDS,
        "people_only": False,
        "touch": False,
    },
}


def create_gitignore(settings_dir: Path):
    """Ensure the settings directory is ignored by git."""
    gitignore = settings_dir.parent / ".gitignore"
    entry = "\n# wikimap\n.wikimap/\n"

    if not gitignore.exists():
        with open(gitignore, "w") as f:
            f.write(entry)
    else:
        content = gitignore.read_text()
        if ".wikimap" not in content:
            with open(gitignore, "a") as f:
                f.write(entry)


def _init_project(root_dir: Path, people_only: bool, touch: bool) -> Path:
    settings_dir = root_dir / ".wikimap"
    config_file = settings_dir / "config.yaml"

    config = {**DEFAULT_CONFIG, "explorer": dict(DEFAULT_CONFIG["explorer"])}
    config["explorer"]["people_only"] = people_only
    config["explorer"]["touch"] = touch

    settings_dir.mkdir(exist_ok=True)
    with open(config_file, "w") as f:
        yaml.dump(config, f, sort_keys=False, default_flow_style=False)

    create_gitignore(settings_dir)

    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{config_file}[/dim]")
    return config_file


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.option("--touch", is_flag=True, help="Use touch-screen bindings (tap to trace, hold to expand)")
def init(force: bool, touch: bool):
    """
    Initialize wikimap settings in the current directory.
    """
    console.print(Panel.fit("🚀 [bold blue]wikimap Initialization[/bold blue]", border_style="blue"))

    root_dir = Path.cwd()
    config_file = root_dir / ".wikimap" / "config.yaml"

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        if not Confirm.ask("Do you want to overwrite it?"):
            console.print("Aborted.")
            return

    console.print("\n[bold]Links[/bold]")
    people_only = Confirm.ask(
        "Only follow links to people and characters?", default=False
    )

    _init_project(root_dir, people_only, touch)
