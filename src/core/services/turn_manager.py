"""Turnos de jugadores humanos y bots, y movimiento entre salas.

Notas:
- Una sala de enigma sin resolver no deja salir: al humano se le repite la
  pregunta al inicio de cada turno y el bot vuelve a adivinar.
- Los eventos del corredor se resuelven antes de entrar en la sala destino.
"""

from __future__ import annotations

import logging
import random

from core.domain.player import Bot, Player
from core.domain.rooms import LeverRoom, RiddleRoom, Room
from core.errors import GameOverError, InvalidMoveError
from core.interfaces.game_io import GameIO
from core.maze import Maze
from core.services.effect_processor import EffectProcessor
from core.services.room_events import RoomEventHandler

logger = logging.getLogger(__name__)

_YES = ("y", "yes", "s", "sim")


class TurnManager:
    def __init__(
        self,
        io: GameIO,
        maze: Maze,
        events: RoomEventHandler,
        effects: EffectProcessor,
        rng: random.Random | None = None,
        bot_lever_chance: float = 0.5,
    ) -> None:
        self.io = io
        self.maze = maze
        self.events = events
        self.effects = effects
        self.rng = rng or random.Random()
        self.bot_lever_chance = bot_lever_chance

    # -- humans ----------------------------------------------------------

    def play_human_turn(self, player: Player) -> None:
        """Interactive turn. Raises `GameOverError` on `exit` or closed input."""

        current = player.current_room
        self._print_status(player)

        if isinstance(current, RiddleRoom) and current.blocks_exit:
            self.events.handle_riddle(current, player)

        if isinstance(current, LeverRoom) and not current.solved:
            answer = self.io.ask("Pull the lever (y/n)? ")
            if answer is not None and answer.strip().lower() in _YES:
                self.events.handle_lever(player, current)

        exits = self._list_available_exits(player.current_room)
        if not exits:
            self.io.show("No exits available.")
            return

        self._prompt_and_move(player, exits)

    def _list_available_exits(self, current: Room | None) -> list[Room]:
        exits = self._unique_neighbours(current)
        lines = ["Available rooms:"]
        lines.extend(f"{index}. {room.id} - {room.description}" for index, room in enumerate(exits, start=1))
        self.io.show("\n".join(lines))
        return exits

    def _prompt_and_move(self, player: Player, exits: list[Room]) -> None:
        while True:
            raw = self.io.ask("Choose a room number ('look' to review, 'exit' to quit): ")
            if raw is None:
                self.effects.running = False
                raise GameOverError("Input closed")

            command = raw.strip()
            if not command:
                continue
            if command.lower() == "exit":
                self.io.show("Leaving the game...")
                self.effects.running = False
                raise GameOverError("Player quit the game")
            if command.lower() == "look":
                self._print_status(player)
                continue

            try:
                choice = int(command)
            except ValueError:
                self.io.show("Invalid input. Use a number, 'look' or 'exit'.")
                continue
            if not 1 <= choice <= len(exits):
                self.io.show(f"Number out of range. Choose between 1 and {len(exits)}.")
                continue

            try:
                self.move_player(player, exits[choice - 1].id)
                return
            except InvalidMoveError as exc:
                self.io.show(f"Invalid move: {exc}. Try another room.")

    # -- bots ------------------------------------------------------------

    def play_bot_turn(self, bot: Bot) -> None:
        current = bot.current_room
        if current is None:
            return
        self.io.show(f"{bot.name} is in: {current.id}")

        if isinstance(current, LeverRoom) and not current.solved and self.rng.random() < self.bot_lever_chance:
            self.events.handle_lever(bot, current)

        if isinstance(current, RiddleRoom) and current.blocks_exit:
            self.events.handle_bot_riddle(current, bot)
            return

        target_id = bot.decide_move(self.maze)
        if target_id is None:
            self.io.show(f"{bot.name} {bot.last_reason or 'is confused'} and passes.")
            return

        self.io.show(f"{bot.name} ({bot.strategy_label}, {bot.last_reason}) moves to: {target_id}")
        self.move_player(bot, target_id)

    # -- movement --------------------------------------------------------

    def move_player(self, player: Player, target_id: str) -> None:
        """Move `player` to an adjacent room, resolving corridor events and room entry."""

        current = player.current_room
        if isinstance(current, RiddleRoom) and current.blocks_exit:
            self.io.show("You cannot leave! Solve the riddle first.")
            return

        target = next(
            (room for room in self.maze.get_neighbors(current) if room.id.lower() == target_id.lower()),
            None,
        )
        if target is None:
            origin = current.id if current is not None else "nowhere"
            raise InvalidMoveError(f"No path to {target_id} from {origin}")

        corridor = self.maze.get_corridor_between(current, target)
        event = corridor.event if corridor is not None else None
        if event is not None:
            self.io.show(f"Event alert! {event.description}")
            item = event.trigger(player, self.rng)
            if item is not None:
                self.io.show(f"{player.name} found: {item}")
            self.effects.apply_effect(player, event)
            if event.effect is not None and event.effect.interrupts_move:
                self.io.show(f"{player.name} was moved before completing the move!")
                return

        player.move_to(target)
        logger.info("%s moved %s -> %s", player.name, current.id, target.id)
        self.io.show(target.enter_message())

        if isinstance(target, RiddleRoom):
            if player.is_bot:
                self.events.handle_bot_riddle(target, player)
            else:
                self.events.handle_riddle(target, player)
        elif isinstance(target, LeverRoom):
            self.events.handle_lever(player, target)

    # -- helpers ---------------------------------------------------------

    def _unique_neighbours(self, current: Room | None) -> list[Room]:
        unique: list[Room] = []
        seen: set[str] = set()
        for room in self.maze.get_neighbors(current):
            key = room.id.lower()
            if key not in seen:
                seen.add(key)
                unique.append(room)
        return unique

    def _print_status(self, player: Player) -> None:
        current = player.current_room
        if current is None:
            self.io.show(f"{player.name} is nowhere.")
            return
        self.io.show(
            f"Location: {current.id} ({current.description})\n"
            f"Power: {player.power}\n"
            f"Exits: [{self.maze.get_available_exits(current)}]"
        )
