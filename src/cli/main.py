"""CLI principal (Typer).

Comandos:
- (sin comando) -> menú interactivo
- `play`   -> partida directa sobre un mapa
- `maps`   -> tabla de mapas disponibles
- `editor` -> editor de mapas
- `doctor` -> diagnóstico y configuración
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.map_loader import MapSummary, read_map_summary
from cli import doctor
from cli.console_io import ConsoleIO
from cli.editor import MapEditor
from cli.menu import MainMenu, play_match
from cli.ui_components import build_maps_table, build_result_panel, build_scoreboard, print_banner
from core.config import AppSettings
from core.errors import InvalidMapError, MazeError
from core.resources_loader import discover_maps, ordered_maps, resolve_map_path, resolve_maps_dir

app = typer.Typer(
    help="Glory Maze: a turn-based text maze game with riddles, levers and bots.",
    invoke_without_command=True,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _setup_logging(verbose: bool) -> None:
    """RichHandler en stderr; el log de sesión se añade al empezar cada partida."""

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[handler], force=True)


def _load_settings(**overrides) -> AppSettings:
    settings = AppSettings()
    values = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=values) if values else settings


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info logs on the console."),
) -> None:
    """Sin subcomando abre el menú principal."""

    _setup_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    print_banner(_console)
    MainMenu(ConsoleIO(_console), AppSettings(), console=_console).run()


@app.command()
def play(
    map_name: Optional[str] = typer.Option(None, "--map", "-m", help="Map file path or name inside the maps directory."),
    humans: Optional[int] = typer.Option(None, "--humans", min=0, help="Number of human players."),
    bots: Optional[int] = typer.Option(None, "--bots", min=0, help="Number of bots."),
    names: Optional[list[str]] = typer.Option(None, "--name", "-n", help="Human player name (repeatable)."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a reproducible game."),
    html: Optional[bool] = typer.Option(None, "--html/--no-html", help="Also export the match summary as HTML."),
    reports_dir: Optional[Path] = typer.Option(None, "--reports-dir", help="Where reports are written."),
) -> None:
    """Start a game directly."""

    settings = _load_settings(seed=seed, reports_dir=reports_dir)
    maps_dir = resolve_maps_dir(settings)

    if map_name is None:
        entries = ordered_maps(maps_dir)
        if not entries:
            _console.print(f"[red]No maps found in {maps_dir}[/red]")
            raise typer.Exit(code=1)
        map_path = entries[0].path
    else:
        map_path = resolve_map_path(map_name, maps_dir)

    if not map_path.is_file():
        _console.print(f"[red]Map not found:[/red] {map_path}")
        raise typer.Exit(code=1)

    io = ConsoleIO(_console)
    try:
        outcome = play_match(io, settings, map_path, humans=humans, bots=bots, names=names, html=html)
    except MazeError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if outcome is None:
        raise typer.Exit(code=1)
    _console.print(build_scoreboard(outcome.result))
    _console.print(build_result_panel(outcome.result, outcome.exported))


@app.command(name="maps")
def list_maps() -> None:
    """List the available maps."""

    maps_dir = resolve_maps_dir(AppSettings())
    summaries: list[MapSummary] = []
    broken: list[tuple[Path, str]] = []
    for path in discover_maps(maps_dir):
        try:
            summaries.append(read_map_summary(path))
        except InvalidMapError as exc:
            broken.append((path, str(exc.__cause__ or exc)))

    if not summaries and not broken:
        _console.print(f"[yellow]No maps found in {maps_dir}[/yellow]")
        return
    _console.print(build_maps_table(summaries, broken))


@app.command()
def editor() -> None:
    """Create a new map interactively."""

    maps_dir = resolve_maps_dir(AppSettings())
    MapEditor(ConsoleIO(_console), maps_dir).run()


def run() -> None:
    app()
