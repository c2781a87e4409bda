#!/usr/bin/env python
"""Command-line interface for CopyWorx."""

import asyncio
import json
import sys

import click

from .config.settings import settings
from .exceptions import ConfigurationError, CopyWorxError
from .utils.logging import configure_logging


@click.group()
def cli():
    """CopyWorx - AI copy analysis service."""
    configure_logging(settings)


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Bind port (defaults to PORT)")
def serve(host, port):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from .api import create_app

    try:
        settings.require_llm_credentials()
    except ConfigurationError as e:
        click.echo(f"Error: {e.details}", err=True)
        sys.exit(1)

    uvicorn.run(
        create_app(),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.argument("file", type=click.File("r"))
@click.option(
    "--metric",
    "-m",
    "metrics",
    multiple=True,
    required=True,
    type=click.Choice(["tone", "brand", "persona"]),
    help="Metric to analyze; repeat for several",
)
@click.option("--brand-voice", help="Brand voice as a JSON object")
@click.option("--persona", help="Persona as a JSON object")
def analyze(file, metrics, brand_voice, persona):
    """
    Analyze the copy in FILE and print the result as JSON.

    Use - as FILE to read from standard input.
    """
    from .analysis import ANALYZE_DOCUMENT, AnalysisPipeline
    from .config.dependencies import create_dependencies

    body = {"content": file.read(), "metricsToAnalyze": list(metrics)}
    try:
        if brand_voice:
            body["brandVoice"] = json.loads(brand_voice)
        if persona:
            body["persona"] = json.loads(persona)
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}")

    try:
        result = asyncio.run(AnalysisPipeline(ANALYZE_DOCUMENT, create_dependencies()).run(body))
    except CopyWorxError as e:
        click.echo(f"Error ({e.status_code}): {e.error}. {e.details}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2))


@cli.command()
def config():
    """Show current configuration settings, with secrets masked."""
    click.echo("CopyWorx Configuration:")
    for key, value in settings.masked_dump().items():
        click.echo(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
