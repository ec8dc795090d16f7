"""Carga y guardado de mapas JSON.

El loader es tolerante por entrada (salas/corredores inválidos se ignoran con
un warning) y estricto por fichero (JSON roto -> `InvalidMapError`).
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from adapters.map_schema import CorridorSpec, EventSpec, ItemSpec, MapFile, RoomSpec
from core.domain.effects import Effect
from core.domain.models import Item, RandomEvent, Riddle
from core.domain.rooms import RoomKind, create_room
from core.errors import InvalidMapError
from core.maze import Maze

logger = logging.getLogger(__name__)

UNKNOWN_MAP_NAME = "Unknown Map"


class RiddlePool:
    """Hands out riddles in order and starts over once every riddle was used."""

    def __init__(self, riddles: Sequence[Riddle]) -> None:
        self._available = list(riddles)
        self._used: list[Riddle] = []

    def __len__(self) -> int:
        return len(self._available) + len(self._used)

    def take(self) -> Riddle | None:
        if not self._available and self._used:
            logger.info("All riddles used, recycling the pool")
            self._available, self._used = self._used, []
        if not self._available:
            return None
        riddle = self._available.pop(0)
        self._used.append(riddle)
        return riddle


@dataclass(frozen=True)
class MapSummary:
    path: Path
    name: str
    difficulty: str | None
    rooms: int
    corridors: int


def _read_map_file(path: Path) -> MapFile:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return MapFile.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise InvalidMapError(f"Invalid map file {path}: {exc}") from exc


def _parse_cost(raw: object, source: str, target: str) -> float:
    if raw is None:
        return 1.0
    try:
        return float(str(raw))
    except ValueError:
        logger.warning("Non-numeric cost for corridor %s->%s, using 1.0", source, target)
        return 1.0


def _parse_effect(text: str | None) -> Effect | None:
    effect = Effect.parse(text)
    if text and effect is None:
        logger.warning("Unknown effect in map: %s", text)
    return effect


def _build_item(spec: ItemSpec | None) -> Item | None:
    if spec is None:
        return None
    return Item(name=spec.name, effect=_parse_effect(spec.effect))


def _build_event(spec: EventSpec | None) -> RandomEvent | None:
    if spec is None:
        return None
    return RandomEvent(
        description=spec.description or "Mysterious event",
        effect=_parse_effect(spec.effect),
        item=_build_item(spec.item),
    )


def load_maze(
    path: Path,
    riddles: Sequence[Riddle] | None = None,
    rng: random.Random | None = None,
) -> Maze:
    """Build a `Maze` from a JSON map.

    Riddle rooms draw from `riddles` in order (shuffled first when `rng` is
    given), recycling the pool when it runs out. A missing file gives an
    empty maze.
    """

    if not path.is_file():
        logger.warning("Map file not found: %s", path)
        return Maze()

    parsed = _read_map_file(path)
    name = parsed.name
    if not name:
        logger.warning("Field 'nome' missing in %s", path)
        name = UNKNOWN_MAP_NAME
    maze = Maze(name)

    if not parsed.rooms:
        logger.warning("No rooms ('salas') found in %s", path)
        return maze

    pool_items = list(riddles or [])
    if rng is not None:
        rng.shuffle(pool_items)
    pool = RiddlePool(pool_items)

    for raw in parsed.rooms:
        try:
            spec = RoomSpec.model_validate(raw)
        except ValidationError:
            logger.warning("Room without id skipped: %r", raw)
            continue
        kind = RoomKind.parse(spec.kind)
        riddle = pool.take() if kind is RoomKind.RIDDLE else None
        maze.add_room(create_room(spec.id, kind, spec.description, riddle))

    if parsed.corridors is None:
        logger.warning("No corridors ('ligacoes') found in %s", path)
    else:
        for raw in parsed.corridors:
            try:
                spec = CorridorSpec.model_validate(raw)
            except ValidationError:
                logger.warning("Corridor with invalid ids skipped: %r", raw)
                continue
            maze.add_corridor(
                spec.source,
                spec.target,
                _parse_cost(spec.cost, spec.source, spec.target),
                _build_event(spec.event),
            )

    logger.info(
        "Loaded map '%s': %d rooms, %d corridors",
        maze.name,
        len(maze),
        len(maze.corridors()),
    )
    return maze


def read_map_summary(path: Path) -> MapSummary:
    parsed = _read_map_file(path)
    return MapSummary(
        path=path,
        name=parsed.name or path.stem,
        difficulty=parsed.difficulty,
        rooms=len(parsed.rooms or []),
        corridors=len(parsed.corridors or []),
    )


def maze_to_map_file(maze: Maze, name: str, difficulty: str | None = None) -> MapFile:
    rooms = [
        RoomSpec(id=room.id, kind=room.kind.value, description=room.description).model_dump(by_alias=True)
        for room in maze.rooms()
    ]

    corridors = []
    for corridor in maze.corridors():
        event = None
        if corridor.event is not None:
            item = corridor.event.item
            event = EventSpec(
                description=corridor.event.description,
                effect=corridor.event.effect.value if corridor.event.effect else None,
                item=ItemSpec(name=item.name, effect=item.effect.value if item.effect else None) if item else None,
            )
        spec = CorridorSpec(
            source=corridor.source.id,
            target=corridor.target.id,
            cost=corridor.weight,
            event=event,
        )
        corridors.append(spec.model_dump(by_alias=True, exclude_none=True))

    return MapFile(name=name, difficulty=difficulty, rooms=rooms, corridors=corridors)


def save_maze(maze: Maze, name: str, output_path: Path, difficulty: str | None = None) -> Path:
    """Write `maze` in the map format read by `load_maze`."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = maze_to_map_file(maze, name, difficulty).model_dump(by_alias=True, exclude_none=True)
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    logger.info("Map '%s' saved to %s", name, output_path)
    return output_path
