"""Interacciones de sala: enigmas y palancas."""

from __future__ import annotations

import logging
import random

from core.domain.player import Player
from core.domain.rooms import LeverResult, LeverRoom, RiddleRoom
from core.interfaces.game_io import GameIO
from core.maze import Maze

logger = logging.getLogger(__name__)


class RoomEventHandler:
    def __init__(
        self,
        io: GameIO,
        maze: Maze,
        rng: random.Random | None = None,
        lever_success_chance: float = 0.5,
    ) -> None:
        self.io = io
        self.maze = maze
        self.rng = rng or random.Random()
        self.lever_success_chance = lever_success_chance

    def _solve(self, room: RiddleRoom, player: Player) -> None:
        room.solved = True
        player.record_solved_riddle(room.id)
        logger.info("%s solved the riddle in %s", player.name, room.id)

    def handle_riddle(self, room: RiddleRoom, player: Player) -> None:
        """Ask a human player the room's riddle."""

        if room.solved:
            self.io.show("This riddle has already been solved.")
            return
        riddle = room.riddle
        if riddle is None:
            return

        lines = [riddle.question]
        lines.extend(f"{index}. {option}" for index, option in enumerate(riddle.options, start=1))
        self.io.show("\n".join(lines))

        raw = self.io.ask("Answer (number): ")
        if raw is None:
            return
        try:
            choice = int(raw.strip())
        except ValueError:
            self.io.show("Invalid input. Answer the riddle with a number.")
            return

        if riddle.check_answer(choice - 1):
            self.io.show("Correct! You may continue.")
            self._solve(room, player)
        else:
            self.io.show("Wrong! You are stuck in this room until you answer correctly.")

    def handle_bot_riddle(self, room: RiddleRoom, bot: Player) -> None:
        """Bots answer riddles with a random guess."""

        if room.solved or room.riddle is None:
            return

        riddle = room.riddle
        self.io.show(riddle.question)
        guess = self.rng.randrange(len(riddle.options))
        self.io.show(f"{bot.name} answers: {guess + 1}")

        if riddle.check_answer(guess):
            self.io.show(f"Correct! {bot.name} moves on.")
            self._solve(room, bot)
        else:
            self.io.show(f"Wrong! {bot.name} lost time.")

    def handle_lever(self, player: Player, room: LeverRoom) -> LeverResult:
        if room.solved:
            self.io.show("This lever has already been pulled successfully.")
            return LeverResult.ALREADY_SOLVED

        self.io.show("Trying to pull the lever...")
        player.record_encountered_event(f"Lever: {room.id}")
        result = room.attempt(self.rng, self.lever_success_chance)

        if result is LeverResult.CORRECT_CHOICE:
            self.io.show("The lever moved! Crack! You hear a wall sliding...")
            target_id = self.maze.create_secret_passage(room, self.rng)
            if target_id is not None:
                self.io.show(
                    f"A secret passage opened to {target_id}! "
                    f"It is now available to every player (unlocked by {player.name})."
                )
                player.record_applied_effect("LEVER_UNLOCKED")
            else:
                self.io.show("The mechanism seems jammed.")
        elif result is LeverResult.INCORRECT_CHOICE:
            self.io.show("The lever did not respond. You will have to try again on a later turn.")
            player.record_applied_effect("LEVER_FAILED")

        logger.info("%s pulled lever %s: %s", player.name, room.id, result.value)
        return result
