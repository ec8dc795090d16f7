"""Menú principal interactivo y arranque de partidas.

`play_match` es compartido por el menú y por el comando `play`: carga los
enigmas y el mapa, crea los jugadores, juega y exporta los reportes.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from rich.console import Console

from adapters.game_logger import close_session_log, start_session_log
from adapters.map_loader import load_maze
from adapters.riddle_loader import load_riddles
from cli.editor import MapEditor
from cli.ui_components import build_result_panel, build_scoreboard
from core.config import AppSettings
from core.errors import MazeError
from core.interfaces.game_io import GameIO
from core.resources_loader import ordered_maps, resolve_map_path, resolve_maps_dir, resolve_riddles_path
from core.services.game_engine import ExportedReports, GameEngine, GameResult

logger = logging.getLogger(__name__)


@dataclass
class MatchOutcome:
    result: GameResult
    exported: ExportedReports | None


def ask_count(io: GameIO, prompt: str) -> int:
    """Lee un entero >= 0; la entrada cerrada cuenta como 0."""

    while True:
        raw = io.ask(prompt)
        if raw is None:
            return 0
        try:
            value = int(raw.strip())
        except ValueError:
            io.show("Please enter a valid number!")
            continue
        if value < 0:
            io.show("Please enter a valid number!")
            continue
        return value


def play_match(
    io: GameIO,
    settings: AppSettings,
    map_path: Path,
    *,
    humans: int | None = None,
    bots: int | None = None,
    names: Sequence[str] | None = None,
    html: bool | None = None,
    rng: random.Random | None = None,
) -> MatchOutcome | None:
    """Juega una partida completa sobre `map_path`.

    Devuelve None si el mapa no se puede jugar (vacío o sin entrada).
    `InvalidMapError` se propaga al llamador.
    """

    rng = rng or random.Random(settings.seed)
    io.show(">>> Loading the maze...")
    riddles = load_riddles(resolve_riddles_path(settings))
    maze = load_maze(map_path, riddles, rng)

    if maze.is_empty():
        io.show("Critical: the map could not be loaded.")
        return None
    if maze.get_entrance() is None:
        io.show("Error: the map has no entrance.")
        return None

    if humans is None:
        humans = ask_count(io, "How many human players? ")
    if bots is None:
        bots = ask_count(io, "How many bots? ")

    start_session_log(settings.log_file)
    try:
        logger.info("Map: %s (%s)", maze.name, map_path)
        engine = GameEngine(maze, io, settings, rng)
        engine.setup_players(humans, bots, names)
        result = engine.run()
    finally:
        close_session_log()

    exported = None
    if result.players:
        exported = engine.export_reports(result, html=html)
    return MatchOutcome(result=result, exported=exported)


class MainMenu:
    def __init__(self, io: GameIO, settings: AppSettings, console: Console | None = None) -> None:
        self.io = io
        self.settings = settings
        self.console = console

    @property
    def maps_dir(self) -> Path:
        return resolve_maps_dir(self.settings)

    def run(self) -> None:
        self.io.show("Glory Maze!\n")
        while True:
            self.io.show("Main Menu:\n\n1. New Game\n2. Map Editor\n3. Exit\n")
            choice = self.io.ask("Choose an option: ")
            if choice is None:
                return

            choice = choice.strip()
            if choice == "1":
                self.start_game()
            elif choice == "2":
                MapEditor(self.io, self.maps_dir).run()
            elif choice == "3":
                self.io.show("Thanks for playing! See you next time.")
                return
            else:
                self.io.show("Invalid option. Try again.")

    def select_map(self) -> Path | None:
        """Menú de selección de mapa; None para volver."""

        entries = ordered_maps(self.maps_dir)
        if not entries:
            self.io.show("No maps were found!")
            return None

        lines = ["\nMap Selection:\n"]
        lines.extend(f"{index}. {entry.label}" for index, entry in enumerate(entries, start=1))
        custom_index = len(entries) + 1
        lines.append(f"{custom_index}. Load custom map")
        lines.append("0. Back")
        self.io.show("\n".join(lines))

        raw = self.io.ask("Choose an option: ")
        try:
            choice = int((raw or "0").strip())
        except ValueError:
            choice = -1

        if choice == 0:
            return None
        if 1 <= choice <= len(entries):
            return entries[choice - 1].path
        if choice == custom_index:
            name = (self.io.ask("Map .json file name: ") or "").strip()
            if not name:
                return None
            return resolve_map_path(name, self.maps_dir)

        self.io.show("Invalid option. Back to the menu...")
        return None

    def start_game(self) -> MatchOutcome | None:
        map_path = self.select_map()
        if map_path is None:
            return None

        try:
            outcome = play_match(self.io, self.settings, map_path)
        except MazeError as exc:
            self.io.show(f"Error: {exc}")
            return None

        if outcome is not None and self.console is not None:
            self.console.print(build_scoreboard(outcome.result))
            self.console.print(build_result_panel(outcome.result, outcome.exported))
        return outcome
