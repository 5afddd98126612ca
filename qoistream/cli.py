"""CLI entry point for qoistream."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qoistream import __version__
from qoistream.config import ConfigError, DecoderConfig, get_default_config, load_config
from qoistream.decoder import QoiDecoder
from qoistream.errors import QoiError
from qoistream.utils import qoi_to_png

app = typer.Typer(help="Streaming decoder for QOI (Quite OK Image) files")
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"qoistream {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(config_path: Optional[Path]) -> DecoderConfig:
    if config_path is None:
        return get_default_config()
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Streaming decoder for QOI (Quite OK Image) files"""


@app.command()
def info(
    input_path: Annotated[Path, typer.Argument(help="QOI file")],
    config_path: Annotated[Optional[Path], typer.Option("--config", help="YAML config")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True)] = 0,
) -> None:
    """Show the header of a QOI file"""
    _setup_logging(verbose)
    config = _load(config_path)

    try:
        with input_path.open("rb") as f:
            decoder = QoiDecoder(f, config)
    except (OSError, QoiError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    width, height = decoder.dimensions()
    table = Table(title=str(input_path))
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Width", str(width))
    table.add_row("Height", str(height))
    table.add_row("Channels", str(decoder.header.channels))
    table.add_row("Colorspace", str(decoder.header.colorspace))
    table.add_row("Format", decoder.color_format().name)
    table.add_row("Decoded size", f"{decoder.total_bytes()} bytes")
    console.print(table)


@app.command()
def convert(
    input_path: Annotated[Path, typer.Argument(help="QOI file")],
    output: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Output image (default: .png)")
    ] = None,
    config_path: Annotated[Optional[Path], typer.Option("--config", help="YAML config")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True)] = 0,
) -> None:
    """Decode a QOI file and save it in the format named by the output suffix"""
    _setup_logging(verbose)
    config = _load(config_path)

    if output is None:
        output = input_path.with_suffix(".png")

    try:
        width, height = qoi_to_png(input_path, output, config)
    except (OSError, QoiError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Converted {input_path} to {output} ({width}x{height})[/green]")


if __name__ == "__main__":
    app()
