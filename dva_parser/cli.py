"""Command-line interface for the dva model parser."""

import asyncio
from typing import Annotated

import typer

from dva_parser.config import get_settings
from dva_parser.discovery import ModelFileDiscovery
from dva_parser.log import configure_logging
from dva_parser.parser import DvaModelParser, FileModels, ParserError, ScanResult
from dva_parser.services import ExtensionConfigProvider

app = typer.Typer(
    name="dva-models",
    help="Extract dva model declarations from JavaScript and TypeScript files.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main_callback(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Log level (defaults to settings).")
    ] = None,
) -> None:
    """Configure logging before running a command."""
    configure_logging(log_level or get_settings().log_level)


def _build_parser() -> DvaModelParser:
    settings = get_settings()
    return DvaModelParser(ExtensionConfigProvider(settings), settings=settings)


async def _scan(directory: str) -> ScanResult:
    settings = get_settings()
    files = await ModelFileDiscovery(settings).discover_all(directory)
    return await _build_parser().parse_files(files)


@app.command("parse")
def parse(
    path: Annotated[str, typer.Argument(help="Path to a model file.")],
) -> None:
    """Print the models declared in one file as JSON."""
    try:
        models = asyncio.run(_build_parser().parse_file(path))
    except (OSError, UnicodeDecodeError, ParserError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(FileModels(path=path, models=models).model_dump_json(indent=2))


@app.command("scan")
def scan(
    directory: Annotated[str, typer.Argument(help="Project directory to scan.")] = ".",
) -> None:
    """Print the models of every file under a directory as JSON."""
    result = asyncio.run(_scan(directory))
    typer.echo(result.model_dump_json(indent=2))


@app.command("find")
def find(
    action: Annotated[str, typer.Argument(help="Action type, e.g. 'app/setUser'.")],
    directory: Annotated[str, typer.Argument(help="Project directory to scan.")] = ".",
) -> None:
    """Show where the reducer or effect handling an action is declared."""
    result = asyncio.run(_scan(directory))
    match = result.find_action(action)
    if match is None:
        typer.echo(f"No reducer or effect handles {action}", err=True)
        raise typer.Exit(code=1)

    path, method = match
    if method.loc is not None:
        typer.echo(f"{path}:{method.loc.start.line}:{method.loc.start.column + 1}")
    else:
        typer.echo(path)
    typer.echo(method.code)


def main() -> None:
    app()
