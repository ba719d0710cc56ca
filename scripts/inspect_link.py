#!/usr/bin/env python3
"""
Diagnose a shareable link.

Runs a link through the same loading pipeline the viewer uses and reports which
transport mode it selected, whether the document loaded or fell back to the
bundled default, which token format decoded, and why a load failed.

Usage:
    python scripts/inspect_link.py "https://example.com/cv/view?configData=..."
    python scripts/inspect_link.py "?config=aHR0cHM6Ly9..." --json
"""

import asyncio
import json
from datetime import datetime
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvlink.contexts.loading import LoadOutcome, PageView
from cvlink.settings import get_logs_path
from cvlink.utils.logger import setup_logger

load_dotenv()

app = typer.Typer(help="Load a shareable link and report what the viewer would show.")


@app.command()
def main(
    link: Annotated[str, typer.Argument(help="Full link or query string")],
    resources_url: Annotated[
        Optional[str],
        typer.Option("--resources-url", "-r", help="Base URL of the default tech registry"),
    ] = None,
    tech: Annotated[
        Optional[str],
        typer.Option("--tech", help="Comma-separated tech names to resolve colors for"),
    ] = None,
    dump: Annotated[
        bool, typer.Option("--json", help="Print the loaded document as JSON")
    ] = False,
):
    """Load a link and display mode, outcome and failure details."""
    log_dir = get_logs_path() / f"inspect_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_logger(context_name="inspect", log_dir=log_dir, console_level="WARNING")

    view = asyncio.run(PageView.open(link, resources_url=resources_url))
    result = view.result

    if dump:
        typer.echo(json.dumps(result.document.to_dict(), indent=2, ensure_ascii=False))
        return

    typer.echo("=== Document ===")
    typer.echo(f"  mode: {result.mode.value}")
    typer.echo(f"  outcome: {result.outcome.value}")
    if result.encoding is not None:
        typer.echo(f"  format: {result.encoding.value}")
    typer.echo(f"  name: {result.document.name}")
    typer.echo(f"  languages: {', '.join(map(str, result.document.available_languages))}")

    typer.echo("\n=== Tech Registry ===")
    registry = view.tech_registry
    if registry.has_custom_registry:
        typer.echo(f"  custom: {len(registry.entries)} entries from {registry.source.value}")
    elif registry.failure is not None:
        typer.echo(f"  custom: failed ({registry.failure})")
    else:
        typer.echo("  custom: none")
    typer.echo(f"  default loaded: {view.default_registry.is_loaded}")

    if tech:
        for name in (part.strip() for part in tech.split(",")):
            if name:
                typer.echo(f"  {name}: {view.tech_color(name)}")

    if result.outcome is LoadOutcome.DEFAULT_FAILED:
        typer.secho(f"\n✗ Fell back to default: {result.failure}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho("\n✓ Link loads", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
