"""Command-line entry point: render the feed to a standalone HTML page."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from quake_map.config import MapConfig
from quake_map.exceptions import QuakeMapError
from quake_map.legend import format_boundary
from quake_map.logging_config import configure_logging
from quake_map.map_layers import build_folium_map, build_plotly_figure
from quake_map.pipeline import QuakeMapPipeline, RenderResult
from quake_map.usgs_client import FEEDS, feed_url

console = Console()
logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """Render USGS earthquake feeds on an interactive map."""


@cli.command()
@click.option("--period", type=click.Choice(list(FEEDS)), default=None,
              help="USGS summary feed to render (defaults to the weekly feed).")
@click.option("--url", default=None, help="Explicit GeoJSON feed URL.")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              default=Path("earthquakes.html"), show_default=True)
@click.option("--mode", type=click.Choice(["leaflet", "plotly"]), default="leaflet",
              show_default=True)
@click.option("--log-level", default="INFO", show_default=True)
def render(period: str | None, url: str | None, output: Path, mode: str, log_level: str) -> None:
    """Fetch the feed once and write the map to OUTPUT."""
    configure_logging(log_level.upper())
    config = MapConfig.from_env()
    if url:
        config = replace(config, feed_url=url)
    elif period:
        config = replace(config, feed_url=feed_url(period))

    try:
        result = QuakeMapPipeline(config).run()
    except QuakeMapError as exc:
        click.echo(str(exc), err=True)
        raise SystemExit(1) from exc

    if mode == "plotly":
        build_plotly_figure(result, config).write_html(str(output))
    else:
        build_folium_map(result, config).save(str(output))

    logger.info("Map written to %s", output, extra={"event_count": len(result.markers)})
    _print_summary(result, output)


def _print_summary(result: RenderResult, output: Path) -> None:
    table = Table(title="Depth (km)")
    table.add_column("Color")
    table.add_column("Boundary", justify="right")
    for i, value in enumerate(result.scale.boundaries):
        color = result.scale.palette[i]
        table.add_row(f"[{color}]■[/] {color}", format_boundary(value, i))
    console.print(table)
    console.print(f"[bold]{len(result.markers)}[/] earthquake(s) → {output}")


if __name__ == "__main__":
    cli()
