"""CLI entry point for movable.

Invoked as::

    movable [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m movable.cli.main

Commands
--------
demo        Walk through the ownership-transfer scenarios
version     Show version information
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from movable.demo import DemoStep

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="movable")
def cli() -> None:
    """Runtime-checked ownership transfer for Python values and resources."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from movable import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]movable[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# demo command
# ---------------------------------------------------------------------------


@cli.command(name="demo")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "yaml"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@click.option(
    "--track-leaks",
    is_flag=True,
    default=False,
    help="Count live cells while the demo runs and report any left owned.",
)
def demo_command(fmt: str, output: str | None, track_leaks: bool) -> None:
    """Run the ownership-transfer walkthrough.

    Examples:

    \b
        movable demo
        movable demo --format yaml -o demo.yaml
    """
    from movable import MovableConfig, configure, get_config, tracker
    from movable.demo import run_demo

    previous = None
    if track_leaks:
        previous = configure(MovableConfig(track_leaks=True, warn_on_leak=get_config().warn_on_leak))
        tracker.reset()
    try:
        steps = run_demo()
    finally:
        if previous is not None:
            configure(previous)

    fmt = fmt.lower()
    if fmt == "text":
        _print_steps(steps)
    else:
        records = [step.to_dict() for step in steps]
        if fmt == "json":
            text = json.dumps(records, indent=2)
        else:
            text = yaml.dump(records, default_flow_style=False, allow_unicode=True, sort_keys=False)
        if output:
            Path(output).write_text(text, encoding="utf-8")
            console.print(f"[green]Demo steps written to {output}[/green]")
        else:
            console.print(Syntax(text, fmt, theme="monokai"))

    if track_leaks:
        live = tracker.live_count()
        if live or tracker.leak_count:
            err_console.print(
                f"[yellow]Leak tracking:[/yellow] {live} live cell(s), "
                f"{tracker.leak_count} leak(s): {', '.join(tracker.live_labels())}"
            )
            sys.exit(1)
        console.print("[green]Leak tracking: every cell was moved or released.[/green]")


def _print_steps(steps: list["DemoStep"]) -> None:
    console.print("[bold]=== Move semantics for releasable resources ===[/bold]\n")
    current = None
    for step in steps:
        if step.example != current:
            if current is not None:
                console.print()
            current = step.example
            console.print(f"[bold cyan]{current}[/bold cyan]")
            console.print("---")
        style = "yellow" if step.expected_error else "default"
        console.print(step.message, style=style, markup=False, highlight=False)
    console.print("\n[bold]=== All examples completed successfully ===[/bold]")


if __name__ == "__main__":
    cli()
