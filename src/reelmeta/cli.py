"""Command-line interface for reelmeta."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.table import Table

from reelmeta import __version__
from reelmeta.config.config import Config, load_config
from reelmeta.crawler.static_document import StaticDocument
from reelmeta.extractor.models import RECORD_KEYS, ExtractionResult
from reelmeta.extractor.reel_extractor import ReelExtractor
from reelmeta.observability.logging import configure_logging
from reelmeta.pipeline import Pipeline
from reelmeta.security.validation import URLValidationError, validate_reel_url
from reelmeta.storage.dataset import DatasetWriter

console = Console()


def _render(result: ExtractionResult, as_json: bool) -> None:
    record = result.to_record()
    if as_json:
        click.echo(json.dumps(record, indent=2, ensure_ascii=False))
        return

    table = Table(title="Reel metadata", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key in RECORD_KEYS:
        if key in record:
            style = "red" if key == "error" else None
            table.add_row(key, str(record[key]), style=style)
    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """reelmeta - extract metadata from reel pages."""
    ctx.ensure_object(dict)
    cfg = load_config(Path(config) if config else None)
    if log_level:
        cfg.monitoring.log_level = log_level
    configure_logging(cfg.monitoring)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("url")
@click.option("--output", "-o", type=click.Path(file_okay=False), help="Dataset directory for the record")
@click.option("--headful", is_flag=True, help="Show the browser window")
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
@click.pass_context
def scrape(ctx: click.Context, url: str, output: Optional[str], headful: bool, as_json: bool) -> None:
    """Scrape a single reel URL and store the record."""
    config: Config = ctx.obj["config"]
    if output:
        config.storage.dataset_path = Path(output)
    if headful:
        config.browser.headless = False

    result = asyncio.run(Pipeline(config).run(url))
    _render(result, as_json)
    if result.failed:
        sys.exit(1)


@cli.command()
@click.option("--input", "input_path", type=click.Path(dir_okay=False), help='JSON input file: {"url": "..."}')
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
@click.pass_context
def run(ctx: click.Context, input_path: Optional[str], as_json: bool) -> None:
    """Scrape the reel named in the input document."""
    config: Config = ctx.obj["config"]
    if input_path:
        config.storage.input_path = Path(input_path)

    try:
        result = asyncio.run(Pipeline(config).run())
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    _render(result, as_json)
    if result.failed:
        sys.exit(1)


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--url", required=True, help="Reel URL the HTML was captured from")
@click.option("--final-url", default=None, help="URL the browser ended on, if it differs")
@click.option("--store", is_flag=True, help="Also append the record to the dataset")
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
@click.pass_context
def parse(
    ctx: click.Context,
    html_file: str,
    url: str,
    final_url: Optional[str],
    store: bool,
    as_json: bool,
) -> None:
    """Extract metadata from a saved reel page."""
    config: Config = ctx.obj["config"]
    try:
        url = validate_reel_url(url, config.extraction.reel_path_segment)
    except URLValidationError as e:
        raise click.BadParameter(str(e), param_hint="'--url'") from e

    document = StaticDocument.from_file(Path(html_file), final_url or url)

    async def _parse() -> ExtractionResult:
        result = await ReelExtractor(config.extraction).extract(document, url)
        if store:
            await DatasetWriter(config.storage.dataset_path).push(result)
        return result

    result = asyncio.run(_parse())
    _render(result, as_json)


@cli.command()
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective configuration."""
    config: Config = ctx.obj["config"]
    data: Dict[str, Any] = config.model_dump(mode="json")
    click.echo(json.dumps(data, indent=2))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
