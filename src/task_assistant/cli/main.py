"""
Task Assistant CLI
Main entry point for the command-line interface

Usage:
    task-assistant run                      # Process the triggering issue event
    task-assistant classify -l bug -l ui    # Classify labels locally
    task-assistant check-config <path>      # Validate a configuration document
    task-assistant version                  # Show version
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from task_assistant import __version__
from task_assistant.classification.classifier import classify as classify_labels
from task_assistant.config.loader import DEFAULT_CONFIG_PATH, load_config
from task_assistant.config.normalizer import ConfigNormalizer
from task_assistant.engine.action import run_action
from task_assistant.github.actions import set_failed
from task_assistant.milestones.rules import resolve_milestone
from task_assistant.shared.domain.exceptions import EngineError, as_engine_error
from task_assistant.shared.infrastructure.config import load_settings
from task_assistant.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="task-assistant",
    help="Task Assistant - track classification and self-healing for repository issues",
    add_completion=False,
    no_args_is_help=True,
)
console = Console(stderr=True)


def _configure_local_logging() -> None:
    """Logging for commands that never talk to GitHub."""
    try:
        settings = load_settings(run_mode="local")
    except EngineError as e:
        set_failed(e.to_display())
        raise typer.Exit(1)
    configure_logging(settings)


@app.command()
def run(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        envvar="INPUT_CONFIG-PATH",
        help="Configuration document (YAML or JSON)",
    ),
    event_path: Optional[Path] = typer.Option(
        None,
        "--event",
        "-e",
        help="Event payload JSON (default: $GITHUB_EVENT_PATH)",
    ),
    debug: bool = typer.Option(False, "--debug", help="Include causes and stacks in error output"),
):
    """Process one issue event: classify, self-heal, write telemetry"""
    try:
        settings = load_settings(**({"debug": True} if debug else {}))
    except EngineError as e:
        set_failed(e.to_display(debug=debug))
        raise typer.Exit(1)

    configure_logging(settings)

    try:
        outcome = asyncio.run(run_action(settings, config_path=config_path, event_path=event_path))
    except Exception as e:
        error = as_engine_error(e)
        set_failed(error.to_display(debug=settings.debug))
        raise typer.Exit(1)

    if outcome is not None and not outcome.succeeded:
        raise typer.Exit(1)


@app.command()
def classify(
    labels: List[str] = typer.Option([], "--label", "-l", help="Issue label (repeatable)"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Configuration document"),
    milestone: Optional[str] = typer.Option(None, "--milestone", "-m", help="Current milestone title"),
):
    """Classify labels locally without touching GitHub"""
    _configure_local_logging()
    config = load_config(config_path)
    classification = classify_labels(config, labels)
    desired = resolve_milestone(config, classification.track)

    typer.echo(
        json.dumps(
            {
                **classification.to_dict(),
                "milestone": desired,
                "milestoneChange": desired is not None and desired != milestone,
            },
            indent=2,
        )
    )


@app.command("check-config")
def check_config(
    config_path: Path = typer.Argument(DEFAULT_CONFIG_PATH, help="Configuration document"),
    as_json: bool = typer.Option(False, "--json", help="Print the normalized config as JSON"),
):
    """Validate a configuration document and show the normalized result"""
    _configure_local_logging()
    normalizer = ConfigNormalizer()
    config = load_config(config_path, normalizer=normalizer)

    if as_json:
        typer.echo(json.dumps({"config": config.to_dict(), "warnings": normalizer.warnings}, indent=2))
        return

    tracks = Table(title="Tracks")
    tracks.add_column("Track", style="cyan")
    tracks.add_column("Patterns")
    tracks.add_column("Milestone", style="green")
    for name, patterns in config.tracks.items():
        tracks.add_row(name, ", ".join(patterns) or "-", config.milestone_rules.get(name, "-"))
    console.print(tracks)

    healing = config.self_healing
    console.print(
        Panel.fit(
            f"[dim]Self-healing:[/dim] {healing.enabled}\n"
            f"[dim]Fix missing track:[/dim] {healing.fix_missing_track}\n"
            f"[dim]Fix missing milestone:[/dim] {healing.fix_missing_milestone}\n"
            f"[dim]Telemetry:[/dim] {config.telemetry.enabled} ({config.telemetry.path})\n"
            f"[dim]Stale detection:[/dim] {config.stale.enabled} ({config.stale.days} days)",
            title="Settings",
            border_style="cyan",
        )
    )

    if normalizer.warnings:
        for warning in normalizer.warnings:
            console.print(f"[yellow]warning:[/yellow] {warning}")
    else:
        console.print("[green]Configuration is valid.[/green]")


@app.command()
def version():
    """Show Task Assistant version information"""
    console.print(Panel.fit(
        "[bold cyan]Task Assistant[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About Task Assistant",
        border_style="cyan"
    ))


def main():
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[cyan]Interrupted.[/cyan]")
        sys.exit(130)


if __name__ == "__main__":
    main()
