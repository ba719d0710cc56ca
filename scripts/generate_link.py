#!/usr/bin/env python3
"""
Shareable Link Generator CLI

Builds viewer links for a resume configuration, either pointing at hosted JSON
files (URL mode) or carrying the JSON itself (inline mode).

Commands:
    url      - Link to hosted configuration files
    inline   - Link carrying the configuration, compressed
    example  - Write the example configuration and tech registry to disk

Examples:\n

    generate_link.py url https://example.com/cv-config.json

    generate_link.py url https://example.com/cv-config.json --tech-registry https://example.com/tech.json

    generate_link.py inline cv-config.json --tech-registry-file tech.json

    generate_link.py example --output-dir drafts/
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvlink.contexts.authoring import (
    build_inline_link,
    build_url_mode_link,
    example_document,
    example_tech_registry,
    parse_document_json,
)
from cvlink.exceptions import InvalidLinkInputError
from cvlink.settings import get_logs_path
from cvlink.utils.logger import setup_logger

load_dotenv()
DEFAULT_BASE_URL = os.getenv("VIEWER_BASE_URL", "http://localhost:5173/cv")

app = typer.Typer(
    help="Generate shareable resume links",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _setup_logging(phase: str) -> Path:
    log_dir = get_logs_path() / f"generate_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return setup_logger(context_name="author", log_dir=log_dir, extra_provenance={"Phase": phase})


def _read_json_file(path: Path, label: str):
    if not path.exists():
        typer.secho(f"ERROR: {label} not found: {path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    data, error = parse_document_json(path.read_text(encoding="utf-8"))
    if error:
        typer.secho(f"ERROR: {label} has errors: {error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return data


@app.command("url")
def url_command(
    config_url: Annotated[str, typer.Argument(help="Absolute URL of the resume JSON")],
    tech_registry: Annotated[
        Optional[str],
        typer.Option("--tech-registry", "-t", help="Absolute URL of a tech registry JSON"),
    ] = None,
    base_url: Annotated[
        str, typer.Option("--base-url", "-b", help="Viewer base URL")
    ] = DEFAULT_BASE_URL,
):
    """Generate a link pointing at hosted configuration files."""
    _setup_logging("url")

    try:
        link = build_url_mode_link(base_url, config_url, tech_registry)
    except InvalidLinkInputError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(link)


@app.command("inline")
def inline_command(
    document_file: Annotated[Path, typer.Argument(help="Resume configuration JSON file")],
    tech_registry_file: Annotated[
        Optional[Path],
        typer.Option("--tech-registry-file", "-t", help="Tech registry JSON file"),
    ] = None,
    base_url: Annotated[
        str, typer.Option("--base-url", "-b", help="Viewer base URL")
    ] = DEFAULT_BASE_URL,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Print the link even if it is very long")
    ] = False,
):
    """
    Generate a link that carries the configuration itself.

    Long links may be rejected by some browsers or servers; without --force the
    command stops and suggests URL mode instead.
    """
    _setup_logging("inline")

    document = _read_json_file(document_file, "Configuration JSON")
    registry = _read_json_file(tech_registry_file, "Tech registry JSON") if tech_registry_file else {}

    try:
        inline_link = build_inline_link(base_url, document, registry)
    except InvalidLinkInputError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if inline_link.exceeds_warning and not force:
        typer.secho(
            f"Warning: the link will be approximately {round(inline_link.estimated_length / 1000)}KB.\n"
            "Consider:\n"
            "  1. Using URL mode and hosting your JSON files\n"
            "  2. Reducing the amount of data in your CV\n"
            "Re-run with --force to print it anyway.",
            fg=typer.colors.YELLOW,
            err=True,
        )
        raise typer.Exit(code=2)

    typer.echo(inline_link.url)


@app.command("example")
def example_command(
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-o", help="Directory for the JSON files")
    ] = Path("."),
):
    """Write the example configuration and tech registry as JSON."""
    output_dir.mkdir(parents=True, exist_ok=True)

    config_path = output_dir / "cv-config.json"
    tech_path = output_dir / "tech-registry.json"
    config_path.write_text(json.dumps(example_document(), indent=2, ensure_ascii=False), encoding="utf-8")
    tech_path.write_text(json.dumps(example_tech_registry(), indent=2), encoding="utf-8")

    typer.secho(f"✓ Wrote {config_path}", fg=typer.colors.GREEN)
    typer.secho(f"✓ Wrote {tech_path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
