"""Jugadores: humanos y bots."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from core.domain.models import Item
from core.domain.rooms import Room

if TYPE_CHECKING:
    from core.maze import Maze

logger = logging.getLogger(__name__)

DEFAULT_POWER = 100


class Player:
    """A participant with a position, power and a movement history.

    The history is a stack of visited room ids (most recent last). It feeds
    the final report and the RECEDE effect.
    """

    is_bot = False

    def __init__(self, name: str, power: int = DEFAULT_POWER) -> None:
        self.name = name
        self.power = power
        self.current_room: Room | None = None
        self.skip_next_turn = False
        self.last_swapped_room: Room | None = None
        self._history: list[str] = []
        self._solved_riddles: list[str] = []
        self._applied_effects: list[str] = []
        self._encountered_events: list[str] = []
        self._items: list[Item] = []

    def move_to(self, room: Room | None) -> None:
        self.current_room = room
        if room is not None:
            self._history.append(room.id)

    def update_power(self, delta: int) -> int:
        before = self.power
        self.power = max(0, self.power + delta)
        logger.info("Power %s: %d -> %d", self.name, before, self.power)
        return self.power

    @property
    def is_alive(self) -> bool:
        return self.power > 0

    # -- history stack ---------------------------------------------------

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def pop_history(self) -> str | None:
        return self._history.pop() if self._history else None

    def peek_history(self) -> str | None:
        return self._history[-1] if self._history else None

    def push_history(self, room_id: str) -> None:
        self._history.append(room_id)

    # -- records ---------------------------------------------------------

    def record_solved_riddle(self, room_id: str) -> None:
        self._solved_riddles.append(room_id)

    def record_applied_effect(self, effect_name: str) -> None:
        self._applied_effects.append(effect_name)

    def record_encountered_event(self, description: str) -> None:
        self._encountered_events.append(description)

    def add_item(self, item: Item) -> None:
        self._items.append(item)

    @property
    def solved_riddles(self) -> list[str]:
        return list(self._solved_riddles)

    @property
    def applied_effects(self) -> list[str]:
        return list(self._applied_effects)

    @property
    def encountered_events(self) -> list[str]:
        return list(self._encountered_events)

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    def __str__(self) -> str:
        room = self.current_room.id if self.current_room is not None else "None"
        return f"Player: {self.name} [Room: {room}]"


class Bot(Player):
    """Automated player.

    A smart bot follows the shortest path to the treasure but gets distracted
    with probability `error_chance` and moves at random instead. A random bot
    always picks a random neighbour.
    """

    is_bot = True

    def __init__(
        self,
        name: str,
        *,
        smart: bool | None = None,
        error_chance: float = 0.2,
        rng: random.Random | None = None,
        power: int = DEFAULT_POWER,
    ) -> None:
        super().__init__(name, power)
        self.rng = rng or random.Random()
        self.smart = self.rng.random() < 0.5 if smart is None else smart
        self.error_chance = error_chance
        self.last_reason = ""

    @property
    def strategy_label(self) -> str:
        return "SMART" if self.smart else "RANDOM"

    def decide_move(self, maze: "Maze") -> str | None:
        """Id of the room to move to, or None when stuck."""

        current = self.current_room
        if current is None:
            return None

        if self.smart:
            if self.rng.random() < self.error_chance:
                self.last_reason = "got distracted"
            else:
                treasure = maze.get_treasure_room()
                if treasure is not None:
                    path = maze.get_shortest_path(current, treasure)
                    if len(path) > 1:
                        self.last_reason = "calculated the optimal route"
                        return path[1].id

        neighbours = maze.get_neighbors(current)
        if not neighbours:
            self.last_reason = "is in a dead end"
            return None

        chosen = neighbours[self.rng.randrange(len(neighbours))]
        self.last_reason = "fallback move" if self.smart else "random move"
        return chosen.id
