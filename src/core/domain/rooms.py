"""Salas del laberinto.

Notas:
- La igualdad y el hash dependen solo del `id`, así la sala sirve como
  vértice del grafo y como clave de diccionario.
- Las salas no imprimen nada: `enter_message()` devuelve el texto y la capa
  de juego decide cómo mostrarlo.
"""

from __future__ import annotations

import random
from enum import Enum

from core.domain.models import Riddle


class RoomKind(str, Enum):
    """Type codes used in the JSON map files."""

    ENTRANCE = "ENTRADA"
    TREASURE = "TESOURO"
    STANDARD = "NORMAL"
    RIDDLE = "ENIGMA"
    LEVER = "ALAVANCA"

    @classmethod
    def parse(cls, text: str | None) -> "RoomKind":
        """Map a `tipo` value to a kind; unknown or missing values are standard rooms."""

        if not text:
            return cls.STANDARD
        code = text.strip().upper()
        if code == "CENTER":
            return cls.TREASURE
        try:
            return cls(code)
        except ValueError:
            return cls.STANDARD


class Room:
    """Base room: an id and a description."""

    kind: RoomKind = RoomKind.STANDARD

    def __init__(self, room_id: str, description: str | None = None) -> None:
        self.id = room_id
        self.description = description or ""

    def enter_message(self) -> str:
        return f"You entered {self.id}: {self.description}"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Room):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"[{self.id}: {self.description}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, {self.description!r})"


class StandardRoom(Room):
    kind = RoomKind.STANDARD

    def enter_message(self) -> str:
        return f"You entered an ordinary room: {self.description}"


class Entrance(Room):
    """Starting point for players."""

    kind = RoomKind.ENTRANCE

    def enter_message(self) -> str:
        return f"You are at the entrance: {self.description}\nThe adventure starts here!"


class Center(Room):
    """Treasure room; the first player to reach it wins."""

    kind = RoomKind.TREASURE

    def enter_message(self) -> str:
        return f"You found the treasure: {self.description}"


class RiddleRoom(Room):
    """Room guarded by a riddle. Nobody leaves it until the riddle is solved."""

    kind = RoomKind.RIDDLE

    def __init__(self, room_id: str, description: str | None = None, riddle: Riddle | None = None) -> None:
        super().__init__(room_id, description)
        self.riddle = riddle
        self.solved = False

    @property
    def blocks_exit(self) -> bool:
        return self.riddle is not None and not self.solved

    def enter_message(self) -> str:
        status = "The guardian lets you through." if self.solved else "You must answer to pass!"
        return f"Riddle: {self.description}\n{status}"


class LeverResult(str, Enum):
    CORRECT_CHOICE = "CORRECT_CHOICE"
    INCORRECT_CHOICE = "INCORRECT_CHOICE"
    ALREADY_SOLVED = "ALREADY_SOLVED"


class LeverRoom(Room):
    """Room with a lever; a correct pull opens a secret passage, a wrong one can be retried later."""

    kind = RoomKind.LEVER

    def __init__(self, room_id: str, description: str | None = None) -> None:
        super().__init__(room_id, description)
        self.solved = False
        self.attempts = 0

    def attempt(self, rng: random.Random, success_chance: float = 0.5) -> LeverResult:
        if self.solved:
            return LeverResult.ALREADY_SOLVED

        self.attempts += 1
        if rng.random() < success_chance:
            self.solved = True
            return LeverResult.CORRECT_CHOICE
        return LeverResult.INCORRECT_CHOICE

    def enter_message(self) -> str:
        if self.solved:
            return f"{self.description}\nThe lever has been pulled. The way is open."
        return f"{self.description}\nA mysterious lever sits on the wall. Can you pull it?"


_ROOM_CLASSES: dict[RoomKind, type[Room]] = {
    RoomKind.ENTRANCE: Entrance,
    RoomKind.TREASURE: Center,
    RoomKind.STANDARD: StandardRoom,
    RoomKind.RIDDLE: RiddleRoom,
    RoomKind.LEVER: LeverRoom,
}


def create_room(room_id: str, kind: RoomKind, description: str | None = None, riddle: Riddle | None = None) -> Room:
    """Build the room subclass matching `kind`."""

    if kind is RoomKind.RIDDLE:
        return RiddleRoom(room_id, description, riddle)
    return _ROOM_CLASSES[kind](room_id, description)
