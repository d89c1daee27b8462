"""smartpaste - reformat clipboard text with an AI model.

Reads the clipboard text from --content or stdin and prints the result.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from .. import __version__

EXIT_FAILED = 1
EXIT_DISABLED = 3


def _build_orchestrator(config_path: str | None, key: str | None, telemetry: bool | None):
    from ..core.config import get_effective_config
    from ..core.orchestrator import CompletionOrchestrator
    from ..core.telemetry import get_telemetry_sink

    overrides = {"telemetry": {"enabled": telemetry}} if telemetry is not None else None
    config = get_effective_config(
        Path(config_path) if config_path else None, cli_overrides=overrides
    )
    orchestrator = CompletionOrchestrator.from_config(
        config, telemetry=get_telemetry_sink(config)
    )
    if key:
        orchestrator.set_secret(key)
    return orchestrator


@click.group()
@click.version_option(__version__, prog_name="smartpaste")
def cli() -> None:
    """smartpaste - AI clipboard formatting."""


@cli.command(name="format")
@click.option("--instructions", "-i", required=True, help="How to reformat the text")
@click.option("--content", "-c", type=str, help="Text to reformat (default: stdin)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file")
@click.option("--key", type=str, help="API key to use instead of the stored one")
@click.option("--telemetry/--no-telemetry", default=None, help="Print telemetry events to stderr (default: from config)")
def format_cmd(
    instructions: str,
    content: str | None,
    config_path: str | None,
    key: str | None,
    telemetry: bool | None,
) -> None:
    """Reformat clipboard text according to --instructions."""
    orchestrator = _build_orchestrator(config_path, key, telemetry)
    if not orchestrator.is_enabled():
        click.echo("Error: AI formatting is disabled (no API key stored).", err=True)
        sys.exit(EXIT_DISABLED)

    if content is None:
        content = sys.stdin.read()

    result = asyncio.run(orchestrator.complete(instructions, content))
    if not result.success:
        click.echo("Error: AI formatting failed.", err=True)
        sys.exit(EXIT_FAILED)
    click.echo(result.response, nl=False)


@cli.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file")
def status(config_path: str | None) -> None:
    """Show whether an API key is available."""
    orchestrator = _build_orchestrator(config_path, None, None)
    if orchestrator.is_enabled():
        click.echo("AI formatting: enabled")
    else:
        click.echo("AI formatting: disabled (no API key stored)")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
