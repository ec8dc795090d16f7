"""Corredor: el payload guardado en cada arista del laberinto."""

from __future__ import annotations

from dataclasses import dataclass

from core.domain.models import RandomEvent
from core.domain.rooms import Room


@dataclass(frozen=True)
class Corridor:
    source: Room
    target: Room
    weight: float = 1.0
    event: RandomEvent | None = None

    def other_end(self, room: Room) -> Room:
        if room == self.source:
            return self.target
        if room == self.target:
            return self.source
        raise ValueError(f"{room.id} is not an end of {self}")

    def __str__(self) -> str:
        suffix = " [EVENT]" if self.event is not None else ""
        return f"{self.source.id} --({self.weight:g})--> {self.target.id}{suffix}"
