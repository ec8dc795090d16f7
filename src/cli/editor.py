"""Editor de mapas en modo texto.

Crea un laberinto sala a sala y lo guarda en el formato JSON que lee
`adapters.map_loader`, de modo que el mapa aparece en el menú de selección.
"""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.map_loader import save_maze
from core.domain.effects import Effect
from core.domain.models import RandomEvent
from core.domain.rooms import RoomKind, create_room
from core.interfaces.game_io import GameIO
from core.maze import Maze

logger = logging.getLogger(__name__)

_MENU = "\n".join(
    [
        "",
        "1. Add room",
        "2. Add corridor",
        "3. List rooms",
        "4. Save map",
        "5. Add corridor with event",
        "0. Exit",
    ]
)


class _Cancelled(Exception):
    pass


class MapEditor:
    def __init__(self, io: GameIO, maps_dir: Path) -> None:
        self.io = io
        self.maps_dir = maps_dir
        self.maze = Maze()

    def run(self) -> None:
        self.maze = Maze()
        actions = {
            "1": self.add_room,
            "2": self.add_corridor,
            "3": self.list_rooms,
            "4": self.save,
            "5": lambda: self.add_corridor(with_event=True),
        }
        while True:
            self.io.show(_MENU)
            choice = self.io.ask("Choose an option: ")
            if choice is None or choice.strip() == "0":
                return
            action = actions.get(choice.strip())
            if action is None:
                self.io.show("Invalid option.")
                continue
            try:
                action()
            except _Cancelled:
                self.io.show("Cancelled.")

    # -- prompts ---------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        answer = self.io.ask(prompt)
        if answer is None:
            raise _Cancelled()
        return answer.strip()

    def _ask_float(self, prompt: str) -> float:
        while True:
            raw = self._ask(prompt)
            try:
                return float(raw.replace(",", "."))
            except ValueError:
                self.io.show("Please enter a number.")

    def _prompt_event(self) -> RandomEvent | None:
        answer = self._ask("Add an event to this corridor (y/n)? ").lower()
        if not answer.startswith(("y", "s")):
            return None

        description = self._ask("Event description: ") or "Mysterious event"
        self.io.show(
            "Effect (optional). Pick one or leave empty:\n"
            + "\n".join(f" - {effect.value}" for effect in Effect)
        )
        raw_effect = self._ask("Effect: ")
        effect = Effect.parse(raw_effect)
        if raw_effect and effect is None:
            self.io.show("Unknown effect. The event will be descriptive only.")
        return RandomEvent(description=description, effect=effect)

    # -- actions ---------------------------------------------------------

    def add_room(self) -> None:
        room_id = self._ask("ID: ")
        if not room_id:
            self.io.show("The room id cannot be empty.")
            return
        if any(room.id == room_id for room in self.maze.rooms()):
            self.io.show(f"Room {room_id} already exists.")
            return

        kind = RoomKind.parse(self._ask("Type (ENTRADA, TESOURO, ENIGMA, ALAVANCA, NORMAL): "))
        description = self._ask("Description: ")
        self.maze.add_room(create_room(room_id, kind, description))
        logger.info("Editor: room %s (%s) added", room_id, kind.value)
        self.io.show("Room added!")

    def add_corridor(self, with_event: bool = False) -> None:
        source = self._ask("From (ID): ")
        target = self._ask("To (ID): ")
        cost = self._ask_float("Cost: ")
        event = self._prompt_event() if with_event else None

        if self.maze.add_corridor(source, target, cost, event) is None:
            self.io.show(f"Unknown room: corridor {source} -> {target} not added.")
            return
        self.io.show("Corridor added!")

    def list_rooms(self) -> None:
        self.io.show(str(self.maze))

    def save(self) -> Path | None:
        name = self._ask("File name (without .json): ")
        if not name:
            self.io.show("The file name cannot be empty.")
            return None
        if name.endswith(".json"):
            name = name[: -len(".json")]

        try:
            path = save_maze(self.maze, name, self.maps_dir / f"{name}.json")
        except OSError as exc:
            self.io.show(f"Error saving map: {exc}")
            return None
        self.io.show(f"Map saved as {path.name}")
        return path
