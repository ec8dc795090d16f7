"""El laberinto: salas como vértices y corredores como aristas con peso.

Nota:
- Las búsquedas por id ignoran mayúsculas/minúsculas.
"""

from __future__ import annotations

import logging
import random

from core.domain.corridor import Corridor
from core.domain.models import RandomEvent
from core.domain.rooms import Center, Entrance, Room
from core.errors import NoSuchRoomError
from core.network import Network

logger = logging.getLogger(__name__)

SECRET_PASSAGE_COST = 1.0


class Maze:
    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._network: Network[Room] = Network()

    def add_room(self, room: Room | None) -> None:
        if room is not None:
            self._network.add_vertex(room)

    def add_corridor(
        self,
        from_id: str,
        to_id: str,
        cost: float = 1.0,
        event: RandomEvent | None = None,
    ) -> Corridor | None:
        source = self.get_room_by_id(from_id)
        target = self.get_room_by_id(to_id)
        if source is None or target is None:
            logger.error("Cannot create corridor %s -> %s (room not found)", from_id, to_id)
            return None

        corridor = Corridor(source, target, float(cost), event)
        self._network.add_edge(source, target, corridor.weight, corridor)
        return corridor

    def get_room_by_id(self, room_id: str | None) -> Room | None:
        if not room_id:
            return None
        lowered = room_id.lower()
        fallback = None
        for room in self._network:
            if room.id == room_id:
                return room
            if fallback is None and room.id.lower() == lowered:
                fallback = room
        return fallback

    def require_room(self, room_id: str) -> Room:
        room = self.get_room_by_id(room_id)
        if room is None:
            raise NoSuchRoomError(f"Room '{room_id}' does not exist")
        return room

    def rooms(self) -> list[Room]:
        return list(self._network)

    def corridors(self) -> list[Corridor]:
        return [payload for _, _, _, payload in self._network.edges()]

    def get_corridor_between(self, source: Room, target: Room) -> Corridor | None:
        return self._network.edge_payload(source, target)

    def get_neighbors(self, room: Room | None) -> list[Room]:
        if room is None:
            return []
        return self._network.neighbors(room)

    def get_shortest_path(self, start: Room, end: Room) -> list[Room]:
        return self._network.shortest_path(start, end)

    def get_shortest_path_cost(self, start: Room, end: Room) -> float:
        return self._network.shortest_path_weight(start, end)

    def entrances(self) -> list[Room]:
        return [room for room in self._network if isinstance(room, Entrance)]

    def get_entrance(self) -> Room | None:
        entrances = self.entrances()
        return entrances[0] if entrances else None

    def get_treasure_room(self) -> Room | None:
        return next((room for room in self._network if isinstance(room, Center)), None)

    def create_secret_passage(self, room: Room, rng: random.Random | None = None) -> str | None:
        """Open a corridor from `room` to a random room it is not linked to yet.

        Returns the id of the newly reachable room, or None when every other
        room is already a neighbour.
        """

        if room not in self._network:
            return None
        neighbours = set(self._network.neighbors(room))
        candidates = [other for other in self._network if other != room and other not in neighbours]
        if not candidates:
            return None

        target = (rng or random.Random()).choice(candidates)
        self._network.add_edge(room, target, SECRET_PASSAGE_COST, Corridor(room, target, SECRET_PASSAGE_COST))
        logger.info("Secret passage opened: %s <-> %s", room.id, target.id)
        return target.id

    def get_available_exits(self, room: Room | None) -> str:
        if room is None:
            return "None"
        neighbours = self.get_neighbors(room)
        if not neighbours:
            return "No exits (dead end)"
        ids: dict[str, str] = {}
        for neighbour in neighbours:
            ids.setdefault(neighbour.id.lower(), neighbour.id)
        return "".join(f"{room_id} | " for room_id in ids.values())

    def is_connected(self) -> bool:
        return self._network.is_connected()

    def is_empty(self) -> bool:
        return self._network.is_empty()

    def __len__(self) -> int:
        return len(self._network)

    def __str__(self) -> str:
        return "Maze Structure:\n" + str(self._network)
