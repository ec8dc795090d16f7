"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en el menú y en los comandos Typer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.map_loader import MapSummary
from core.services.game_engine import ExportedReports, GameResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("GLORY MAZE", style="bold yellow")
    subtitle = Text("Labirinto da Glória • Riddles • Levers • Treasure", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="yellow", padding=(1, 4)))


def build_maps_table(summaries: Sequence[MapSummary], broken: Sequence[tuple[Path, str]] = ()) -> Table:
    """Tabla de mapas disponibles (los que no se pueden leer se marcan en rojo)."""

    table = Table(title="Available Maps")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Difficulty", style="magenta")
    table.add_column("Rooms", justify="right", style="green")
    table.add_column("Corridors", justify="right", style="green")

    for summary in summaries:
        table.add_row(
            summary.path.name,
            summary.name,
            summary.difficulty or "-",
            str(summary.rooms),
            str(summary.corridors),
        )
    for path, error in broken:
        table.add_row(path.name, Text(f"invalid: {error}", style="red"), "-", "-", "-")
    return table


def build_scoreboard(result: GameResult) -> Table:
    """Tabla final de la partida (ganador primero)."""

    table = Table(title=f"Final Scoreboard ({result.moves} moves)")
    table.add_column("Player", style="cyan", no_wrap=True)
    table.add_column("Type", style="dim")
    table.add_column("Power", justify="right")
    table.add_column("Room", style="white")
    table.add_column("Rooms visited", justify="right")

    winner_name = result.winner.name if result.winner is not None else None
    ordered = sorted(result.players, key=lambda p: (p.name != winner_name, -p.power))
    for player in ordered:
        style = "bold yellow" if player.name == winner_name else None
        table.add_row(
            player.name,
            "Bot" if player.is_bot else "Human",
            str(player.power),
            player.current_room.id if player.current_room is not None else "-",
            str(len(player.history)),
            style=style,
        )
    return table


def build_result_panel(result: GameResult, exported: ExportedReports | None = None) -> Panel:
    if result.winner is not None:
        title = Text("Victory", style="bold green")
        body = Text(f"{result.winner.name} found the treasure!\n", style="green")
    else:
        title = Text("Game Over", style="bold red")
        body = Text("Nobody reached the treasure.\n", style="red")
    if result.reason:
        body.append(f"Reason: {result.reason}\n", style="dim")

    if exported is not None:
        body.append(f"\nReports: {len(exported.mission_reports)} mission report(s)")
        if exported.match_summary is not None:
            body.append(f"\nSummary: {exported.match_summary}")
        if exported.html is not None:
            body.append(f"\nHTML: {exported.html}")

    return Panel(body, title=title, border_style="green" if result.winner else "red")
