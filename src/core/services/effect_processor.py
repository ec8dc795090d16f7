"""Aplicación de efectos de corredor sobre los jugadores.

Notas:
- DAMAGE/TRAP restan poder; llegar a 0 lanza `GameOverError`.
- SWAP_POSITION, SWAP_ALL y RECEDE mueven al jugador; quien llama interrumpe
  el movimiento en curso (`Effect.interrupts_move`).
- RECEDE nunca retrocede más allá de la sala obtenida en el último intercambio.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Sequence

from core.domain.effects import Effect
from core.domain.models import RandomEvent
from core.domain.player import Player
from core.errors import GameOverError
from core.interfaces.game_io import GameIO
from core.maze import Maze

logger = logging.getLogger(__name__)


class EffectProcessor:
    def __init__(
        self,
        io: GameIO,
        maze: Maze,
        players: Sequence[Player],
        turn_queue: deque[Player],
        rng: random.Random | None = None,
    ) -> None:
        self.io = io
        self.maze = maze
        self.players = players
        self.turn_queue = turn_queue
        self.rng = rng or random.Random()
        self.running = True

    def apply_effect(self, player: Player, event: RandomEvent | None) -> None:
        """Apply the event's direct effect. Raises `GameOverError` when the player dies."""

        if event is None or event.effect is None:
            return
        self.apply(player, event.effect)

    def apply(self, player: Player, effect: Effect) -> None:
        if effect in (Effect.DAMAGE, Effect.TRAP):
            player.update_power(-abs(effect.amount))
            player.record_encountered_event("TRAP")
            player.record_applied_effect(str(effect))
            self.io.show(f"{player.name} lost {abs(effect.amount)} power (now {player.power}).")
            if not player.is_alive:
                self.io.show(f"{player.name} died! Game over.")
                self.running = False
                logger.info("%s died", player.name)
                raise GameOverError(f"{player.name} died with power <= 0")

        elif effect in (Effect.HEAL, Effect.BONUS_POWER):
            player.update_power(abs(effect.amount))
            player.record_encountered_event("HEAL/BONUS")
            player.record_applied_effect(str(effect))
            self.io.show(f"{player.name} gained {abs(effect.amount)} power (now {player.power}).")

        elif effect is Effect.SKIP_TURN:
            self.io.show(f"{player.name} is stunned and will miss the next turn!")
            player.skip_next_turn = True
            player.record_applied_effect(str(effect))

        elif effect is Effect.SWAP_POSITION:
            self.perform_swap(player)
            player.record_applied_effect(str(effect))

        elif effect is Effect.SWAP_ALL:
            self.io.show("All players swap positions!")
            self.perform_swap_all()
            player.record_applied_effect(str(effect))

        elif effect is Effect.EXTRA_TURN:
            self.io.show(f"{player.name} earned an extra turn!")
            self.turn_queue.appendleft(player)
            player.record_applied_effect(str(effect))

        elif effect is Effect.RECEDE:
            self.io.show(f"{player.name} is forced to step back!")
            self.perform_recede(player, abs(effect.amount))
            player.record_applied_effect(str(effect))

        logger.info("Effect %s applied to %s", effect, player.name)

    def _choose_swap_target(self, active: Player, others: list[Player]) -> Player | None:
        if active.is_bot:
            return others[self.rng.randrange(len(others))]

        lines = ["Choose a player to swap places with:"]
        for index, other in enumerate(others, start=1):
            room = other.current_room.id if other.current_room is not None else "?"
            lines.append(f"{index}. {other.name} (in {room})")
        self.io.show("\n".join(lines))

        raw = self.io.ask(f"Choice (1-{len(others)}): ")
        if raw is None:
            return None
        try:
            choice = int(raw.strip())
        except ValueError:
            self.io.show("Invalid input. Swap cancelled.")
            return None
        if not 1 <= choice <= len(others):
            self.io.show("Invalid choice. Swap cancelled.")
            return None
        return others[choice - 1]

    def perform_swap(self, active: Player) -> None:
        """Swap `active`'s room with another player's room."""

        others = [p for p in self.players if p is not active]
        if not others:
            self.io.show("There is nobody to swap with!")
            return

        target = self._choose_swap_target(active, others)
        if target is None:
            return

        my_room = active.current_room
        their_room = target.current_room
        active.move_to(their_room)
        target.move_to(my_room)
        active.last_swapped_room = their_room
        target.last_swapped_room = my_room

        self.io.show(f"{active.name} swapped places with {target.name}")
        if their_room is not None:
            self.io.show(f"{active.name} is now in: {their_room.id}")

    def perform_swap_all(self) -> None:
        """Rotate every player's room: player i takes the room of player i+1."""

        if len(self.players) <= 1:
            self.io.show("Not enough players to swap.")
            return

        rooms = [p.current_room for p in self.players]
        for index, player in enumerate(self.players):
            new_room = rooms[(index + 1) % len(rooms)]
            if new_room is None:
                continue
            player.move_to(new_room)
            player.last_swapped_room = new_room
            self.io.show(f"  {player.name} -> {new_room.id}")

    def perform_recede(self, player: Player, steps: int) -> None:
        """Walk `player` back through its history, never past the last swapped room."""

        if steps <= 0:
            return

        current_id = player.pop_history()
        if current_id is None:
            self.io.show(f"{player.name} has no history to step back through.")
            return

        limit = player.last_swapped_room
        limit_id = limit.id.lower() if limit is not None else None
        if current_id.lower() == limit_id:
            player.push_history(current_id)
            self.io.show(f"{player.name} could not step back past the room reached by the last swap.")
            return

        walked: list[str] = []
        for _ in range(steps):
            previous = player.peek_history()
            if previous is None or previous.lower() == limit_id:
                break
            walked.append(player.pop_history())

        target = self.maze.get_room_by_id(walked[-1]) if walked else None
        if target is None or target == player.current_room:
            for room_id in reversed(walked):
                player.push_history(room_id)
            player.push_history(current_id)
            self.io.show(f"{player.name} could not step back (limit reached or no history).")
            return

        player.move_to(target)
        self.io.show(f"{player.name} stepped back {len(walked)} room(s) and is now in: {target.id}")
