"""Esquema de los ficheros JSON de mapas y enigmas.

Formato (claves en portugués, como los mapas existentes):
- Mapa:    {"nome", "dificuldade"?, "salas": [...], "ligacoes": [...]}
- Enigmas: {"enigmas": [{"pergunta", "opcoes", "correta"}]}

Importante:
- El nivel superior se valida entero; cada sala/corredor/enigma se valida por
  separado para poder descartar entradas inválidas sin perder el resto.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Spec(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ItemSpec(_Spec):
    name: str = Field(..., min_length=1, alias="nome")
    effect: str | None = Field(default=None, alias="efeito")


class EventSpec(_Spec):
    description: str | None = Field(default=None, alias="descricao")
    effect: str | None = Field(default=None, alias="efeito")
    item: ItemSpec | None = Field(default=None, alias="item")


class RoomSpec(_Spec):
    id: str = Field(..., min_length=1)
    kind: str | None = Field(default=None, alias="tipo")
    description: str | None = Field(default=None, alias="descricao")


class CorridorSpec(_Spec):
    source: str = Field(..., min_length=1, alias="origem")
    target: str = Field(..., min_length=1, alias="destino")
    cost: Any = Field(default=None, alias="custo")
    event: EventSpec | None = Field(default=None, alias="evento")


class MapFile(_Spec):
    name: str | None = Field(default=None, alias="nome")
    difficulty: str | None = Field(default=None, alias="dificuldade")
    rooms: list[Any] | None = Field(default=None, alias="salas")
    corridors: list[Any] | None = Field(default=None, alias="ligacoes")


class RiddleSpec(_Spec):
    question: str = Field(..., min_length=1, alias="pergunta")
    options: list[Any] = Field(..., min_length=1, alias="opcoes")
    correct: int = Field(..., alias="correta")


class RiddlesFile(_Spec):
    riddles: list[Any] = Field(default_factory=list, alias="enigmas")
