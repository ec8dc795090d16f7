"""Comando `doctor`: diagnóstico y configuración del entorno."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.map_loader import read_map_summary
from adapters.riddle_loader import load_riddles
from core.config import AppSettings, write_user_env_vars
from core.errors import InvalidMapError
from core.resources_loader import discover_maps, resolve_maps_dir, resolve_riddles_path

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_maps(maps_dir: Path) -> tuple[bool, str]:
    maps = discover_maps(maps_dir)
    if not maps:
        return False, f"No maps in {maps_dir}"

    broken = []
    for path in maps:
        try:
            read_map_summary(path)
        except InvalidMapError:
            broken.append(path.name)
    if broken:
        return False, f"{len(maps)} map(s), invalid: {', '.join(broken)}"
    return True, f"{len(maps)} map(s) in {maps_dir}"


def _check_riddles(path: Path) -> tuple[bool, str]:
    try:
        riddles = load_riddles(path)
    except InvalidMapError as exc:
        return False, str(exc)
    if not riddles:
        return False, f"No riddles loaded from {path}"
    return True, f"{len(riddles)} riddle(s) in {path}"


def _check_writable(directory: Path) -> tuple[bool, str]:
    """Attempt to create a temp file to detect permission issues."""

    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix="_doctor_", dir=directory)
        os.close(fd)
        Path(tmp).unlink(missing_ok=True)
        return True, str(directory)
    except OSError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Glory Maze Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_maps, detail_maps = _check_maps(resolve_maps_dir(settings))
    table.add_row("Maps", "OK" if ok_maps else "FAIL", detail_maps)

    ok_riddles, detail_riddles = _check_riddles(resolve_riddles_path(settings))
    table.add_row("Riddles", "OK" if ok_riddles else "WARN", detail_riddles)

    ok_reports, detail_reports = _check_writable(settings.reports_dir)
    table.add_row("Reports dir", "OK" if ok_reports else "FAIL", detail_reports)

    table.add_row("Log file", "OK", str(settings.log_file))
    table.add_row("Starting power", "OK", str(settings.starting_power))
    table.add_row(
        "Bots",
        "OK",
        f"error {settings.bot_error_chance:.0%}, lever {settings.bot_lever_chance:.0%}, "
        f"delay {settings.bot_move_delay_seconds:g}s",
    )
    table.add_row("Seed", "OK" if settings.seed is not None else "OPTIONAL", str(settings.seed))

    _console.print(table)

    if not ok_riddles:
        _console.print("\n[yellow]Note:[/yellow] Without riddles, riddle rooms never block players.")


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    maps_dir = typer.prompt("Maps directory", default=str(resolve_maps_dir(settings)), show_default=True).strip()
    reports_dir = typer.prompt("Reports directory", default=str(settings.reports_dir), show_default=True).strip()
    starting_power = typer.prompt("Starting power", default=settings.starting_power, type=int)
    bot_delay = typer.prompt("Bot move delay (seconds)", default=settings.bot_move_delay_seconds, type=float)
    html_report = typer.confirm("Also export an HTML match report?", default=settings.html_report)

    if starting_power <= 0:
        raise typer.BadParameter("starting power must be greater than 0")
    if bot_delay < 0:
        raise typer.BadParameter("bot delay cannot be negative")

    env_path = write_user_env_vars(
        {
            "GLORY_MAZE_MAPS_DIR": maps_dir,
            "GLORY_MAZE_REPORTS_DIR": reports_dir,
            "GLORY_MAZE_STARTING_POWER": str(starting_power),
            "GLORY_MAZE_BOT_MOVE_DELAY_SECONDS": f"{bot_delay:g}",
            "GLORY_MAZE_HTML_REPORT": "true" if html_report else "false",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
