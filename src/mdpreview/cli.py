"""mdpreview CLI interface.

Usage:
    mdp --file README.md [--skip-preview] [--template custom.html.j2]

Options:
- --file/-f: Markdown file to preview (required)
- --skip-preview/-s: Write the HTML file without opening it
- --template/-t: Alternate template file
- --check-template: Only validate the --template file
- --config/-c: Path to configuration file
- --verbose/-v, --quiet/-q, --json-logs: Logging mode
- --version: Show version and exit

Stdout carries only the output path; messages go to stderr.

Exit codes:
    0: HTML written (and previewed unless skipped)
    1: Any error
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

from mdpreview import __version__
from mdpreview.config import load_config
from mdpreview.errors import PreviewToolError
from mdpreview.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="mdp",
    help="Preview Markdown files as sanitized HTML in the default browser",
    add_completion=False,
)

_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mdpreview {__version__}")
        raise typer.Exit()


def _check_template(template: Path | None) -> None:
    from mdpreview.templates import validate_template

    if template is None:
        _logger.error("--check-template requires --template")
        raise typer.Exit(1)

    try:
        fields = validate_template(template)
    except PreviewToolError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    typer.echo(f"Template is valid: {template} (fields: {', '.join(fields)})")
    raise typer.Exit(0)


@app.command()
def main(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Markdown file to preview",
        ),
    ] = None,
    skip_preview: Annotated[
        bool,
        typer.Option(
            "--skip-preview",
            "-s",
            help="Skip auto-preview and keep the HTML file",
        ),
    ] = False,
    template: Annotated[
        Path | None,
        typer.Option(
            "--template",
            "-t",
            help="Alternate template file",
        ),
    ] = None,
    check_template: Annotated[
        bool,
        typer.Option(
            "--check-template",
            help="Validate the --template file and exit",
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only report errors",
        ),
    ] = False,
    json_logs: Annotated[
        bool,
        typer.Option(
            "--json-logs",
            help="Emit log messages as JSON lines",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Convert a Markdown file to sanitized HTML and preview it.

    The path of the generated file is printed on stdout.
    """
    configure_from_cli(verbose=verbose, quiet=quiet, json_logs=json_logs)

    if check_template:
        _check_template(template)

    if file is None:
        typer.echo(ctx.get_usage(), err=True)
        typer.echo("Error: --file is required", err=True)
        raise typer.Exit(1)

    try:
        loaded = load_config(config_path=config)
        if loaded.config_path:
            _logger.debug(f"Loaded config from: {loaded.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    from mdpreview.pipeline import PipelineOptions, PreviewPipeline

    options = PipelineOptions(skip_preview=skip_preview, template_path=template)
    pipeline = PreviewPipeline(config=loaded)

    try:
        pipeline.run(file, sys.stdout, options)
    except PreviewToolError as e:
        _logger.error(str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
