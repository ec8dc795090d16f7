"""Orquestación de la partida: alta de jugadores, bucle de turnos y reportes.

Por qué un motor aparte:
- El motor es dueño de la cola de turnos y conecta `TurnManager`,
  `RoomEventHandler` y `EffectProcessor`.
- Toda la interacción pasa por `GameIO`: el mismo bucle sirve para la consola
  de Rich y para los tests.
"""

from __future__ import annotations

import logging
import random
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from adapters.game_logger import log_victory
from adapters.json_exporter import export_match_summary, export_mission_report
from adapters.report_exporter import export_match_html
from core.config import AppSettings
from core.domain.player import Bot, Player
from core.domain.rooms import Center
from core.errors import GameOverError, NoSuchRoomError
from core.interfaces.game_io import GameIO
from core.maze import Maze
from core.services.effect_processor import EffectProcessor
from core.services.room_events import RoomEventHandler
from core.services.turn_manager import TurnManager

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Outcome of `GameEngine.run`."""

    winner: Player | None
    players: list[Player]
    moves: int
    reason: str = ""


@dataclass
class ExportedReports:
    mission_reports: list[Path] = field(default_factory=list)
    match_summary: Path | None = None
    html: Path | None = None


class GameEngine:
    def __init__(
        self,
        maze: Maze,
        io: GameIO,
        settings: AppSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.maze = maze
        self.io = io
        self.settings = settings or AppSettings()
        self.rng = rng or random.Random(self.settings.seed)
        self.players: list[Player] = []
        self.turn_queue: deque[Player] = deque()
        self.running = False

        self.effects = EffectProcessor(io, maze, self.players, self.turn_queue, self.rng)
        self.events = RoomEventHandler(io, maze, self.rng, self.settings.lever_success_chance)
        self.turns = TurnManager(
            io,
            maze,
            self.events,
            self.effects,
            self.rng,
            bot_lever_chance=self.settings.bot_lever_chance,
        )

    # -- setup -----------------------------------------------------------

    def add_player(self, player: Player) -> None:
        """Place `player` at an entrance (round robin) and queue it."""

        entrances = self.maze.entrances()
        if not entrances:
            raise NoSuchRoomError("The map has no entrance")

        entrance = entrances[len(self.players) % len(entrances)]
        player.move_to(entrance)
        self.players.append(player)
        self.turn_queue.append(player)
        self.io.show(f">> {player.name} joined the game at: {entrance.id}")
        logger.info("%s joined at %s", player.name, entrance.id)

    def create_bot(self, name: str) -> Bot:
        bot = Bot(
            name,
            error_chance=self.settings.bot_error_chance,
            rng=random.Random(self.rng.getrandbits(32)),
            power=self.settings.starting_power,
        )
        self.io.show(f"Bot created: {name} ({bot.strategy_label})")
        return bot

    def setup_players(self, humans: int, bots: int, names: Sequence[str] | None = None) -> None:
        """Create `humans` named players and `bots` bots; missing names are asked for."""

        names = list(names or [])
        for index in range(1, humans + 1):
            if index <= len(names) and names[index - 1].strip():
                name = names[index - 1].strip()
            else:
                answer = self.io.ask(f"Name of player {index}: ")
                name = (answer or "").strip() or f"Player_{index}"
            self.add_player(Player(name, power=self.settings.starting_power))

        for index in range(1, bots + 1):
            self.add_player(self.create_bot(f"Bot_{index}"))

    # -- loop ------------------------------------------------------------

    def run(self) -> GameResult:
        if not self.turn_queue:
            self.io.show("No players, the game cannot start.")
            return GameResult(winner=None, players=list(self.players), moves=0, reason="no players")

        self.io.show("=== THE GAME HAS STARTED! ===")
        self.running = True
        self.effects.running = True
        winner: Player | None = None
        moves = 0
        reason = ""

        while self.running and self.turn_queue:
            current = self.turn_queue.popleft()

            if current.skip_next_turn:
                current.skip_next_turn = False
                self.io.show(f"{current.name} is stunned and skips this turn.")
                self.turn_queue.append(current)
                continue

            self.io.show(f">>> {current.name}'s turn <<<")
            moves += 1
            try:
                if isinstance(current, Bot):
                    self.turns.play_bot_turn(current)
                else:
                    self.turns.play_human_turn(current)
            except GameOverError as exc:
                reason = str(exc)
                self.running = False
                break

            # swaps can drop another player on the treasure; the active player wins ties
            winner = next(
                (p for p in [current, *self.players] if isinstance(p.current_room, Center)),
                None,
            )
            if winner is not None:
                reason = "treasure found"
                self.io.show(f"VICTORY! {winner.name} found the treasure!")
                log_victory(winner.name, moves)
                self.running = False
                break

            # an extra turn already put the player back at the front
            if not (self.turn_queue and self.turn_queue[0] is current):
                self.turn_queue.append(current)
            if isinstance(current, Bot) and self.settings.bot_move_delay_seconds > 0:
                time.sleep(self.settings.bot_move_delay_seconds)

        self.running = False
        self.io.show("Game over.")
        logger.info("Game finished after %d moves: %s", moves, reason or "queue empty")
        return GameResult(winner=winner, players=list(self.players), moves=moves, reason=reason)

    # -- reports ---------------------------------------------------------

    def export_reports(self, result: GameResult, output_dir: Path | None = None, html: bool | None = None) -> ExportedReports:
        output_dir = output_dir or self.settings.reports_dir
        html = self.settings.html_report if html is None else html

        exported = ExportedReports()
        for player in result.players:
            exported.mission_reports.append(
                export_mission_report(
                    player=player,
                    output_dir=output_dir,
                    starting_power=self.settings.starting_power,
                )
            )

        summary_path, summary = export_match_summary(
            players=result.players,
            winner=result.winner,
            output_dir=output_dir,
            map_name=self.maze.name,
            moves=result.moves,
        )
        exported.match_summary = summary_path
        if html:
            exported.html = export_match_html(summary=summary, output_path=output_dir / "report_match.html")

        self.io.show(f"Reports saved to: {output_dir}")
        return exported
