"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de enigmas, ítems y eventos que llegan desde JSON.
- Los reportes finales se serializan con `model_dump(mode="json")` sin
  código de conversión manual.

Nota:
- Las salas, los jugadores y el laberinto son objetos mutables con
  identidad propia; viven en `rooms.py`, `player.py` y `core.maze`.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, model_validator

from core.domain.effects import Effect

if TYPE_CHECKING:
    from core.domain.player import Player


class Riddle(BaseModel):
    """Enigma con opciones y el índice (base 0) de la respuesta correcta."""

    question: str = Field(
        ...,
        min_length=1,
        description="Texto de la pregunta.",
    )
    options: list[str] = Field(
        ...,
        min_length=1,
        description="Opciones mostradas al jugador, en orden.",
    )
    correct_index: int = Field(
        ...,
        ge=0,
        description="Índice (0..N-1) de la opción correcta.",
    )

    @model_validator(mode="after")
    def _index_in_range(self) -> "Riddle":
        if self.correct_index >= len(self.options):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for {len(self.options)} options"
            )
        return self

    def check_answer(self, index: int) -> bool:
        return index == self.correct_index


class Item(BaseModel):
    """Objeto que un evento aleatorio puede entregar al jugador."""

    name: str = Field(..., min_length=1, description="Nombre del objeto.")
    effect: Effect | None = Field(default=None, description="Efecto asociado (opcional).")

    def __str__(self) -> str:
        return f"{self.name} ({self.effect})" if self.effect else self.name


class RandomEvent(BaseModel):
    """Evento que ocurre al atravesar un corredor."""

    description: str = Field(
        default="Mysterious event",
        description="Texto mostrado al jugador.",
    )
    effect: Effect | None = Field(
        default=None,
        description="Efecto directo aplicado por el EffectProcessor.",
    )
    item: Item | None = Field(
        default=None,
        description="Objeto que puede encontrarse (50% de probabilidad).",
    )

    def trigger(self, player: "Player", rng: random.Random) -> Item | None:
        """Record the event on `player`; may hand over the attached item."""

        player.record_encountered_event(self.description)
        if self.item is not None and rng.random() < 0.5:
            player.add_item(self.item)
            return self.item
        return None


class ReportStatistics(BaseModel):
    total_riddles_encountered: int = Field(default=0, ge=0)
    total_effects_applied: int = Field(default=0, ge=0)
    total_events_encountered: int = Field(default=0, ge=0)
    final_power_percentage: int = Field(default=0, ge=0)
    game_status: Literal["COMPLETED_SUCCESSFULLY", "ABANDONED_OR_DEFEATED"] = "ABANDONED_OR_DEFEATED"


class MissionReport(BaseModel):
    """Reporte individual de un jugador al final de la partida."""

    player: str = Field(..., min_length=1, description="Nombre del jugador.")
    date: datetime = Field(default_factory=datetime.now, description="Momento de generación.")
    result: Literal["VICTORY", "DEFEAT"] = Field(..., description="Resultado final.")
    path_taken: list[str] = Field(
        default_factory=list,
        description="IDs de las salas visitadas, de la primera a la última.",
    )
    final_power: int = Field(default=0, ge=0)
    riddles_solved: list[str] = Field(default_factory=list)
    effects_applied: list[str] = Field(default_factory=list)
    events_encountered: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)
    statistics: ReportStatistics = Field(default_factory=ReportStatistics)


class PlayerSummary(BaseModel):
    name: str = Field(..., min_length=1)
    is_bot: bool = False
    power: int = Field(default=0, ge=0)
    current_room: str = Field(default="UNKNOWN")
    path_taken: list[str] = Field(default_factory=list)
    riddles_solved: list[str] = Field(default_factory=list)
    effects_applied: list[str] = Field(default_factory=list)
    events_encountered: list[str] = Field(default_factory=list)


class MatchSummary(BaseModel):
    """Resumen global de la partida (todos los jugadores)."""

    date: datetime = Field(default_factory=datetime.now)
    map_name: str | None = Field(default=None, description="Nombre del mapa jugado.")
    winner: str = Field(default="NONE", description="Ganador o 'NONE' si la partida se abandonó.")
    moves: int = Field(default=0, ge=0, description="Turnos jugados hasta el final.")
    players: list[PlayerSummary] = Field(default_factory=list)
