"""Grafo no dirigido con pesos, base del laberinto.

Notas:
- Los vértices son cualquier valor hashable; cada arista guarda un peso y un
  payload opcional (el laberinto guarda ahí su `Corridor`).
- Los vecinos mantienen el orden de inserción, así los recorridos son
  deterministas entre ejecuciones.
"""

from __future__ import annotations

import heapq
import itertools
import math
from collections import deque
from dataclasses import dataclass
from typing import Any, Generic, Hashable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass
class _Edge:
    weight: float
    payload: Any = None


class Network(Generic[T]):
    """Adjacency-map network with Dijkstra and Prim on top."""

    def __init__(self) -> None:
        self._adjacency: dict[T, dict[T, _Edge]] = {}

    # -- structure -------------------------------------------------------

    def add_vertex(self, vertex: T) -> None:
        self._adjacency.setdefault(vertex, {})

    def remove_vertex(self, vertex: T) -> None:
        neighbours = self._adjacency.pop(vertex, None)
        if neighbours is None:
            raise KeyError(vertex)
        for other in neighbours:
            self._adjacency[other].pop(vertex, None)

    def add_edge(self, a: T, b: T, weight: float = 1.0, payload: Any = None) -> None:
        if a not in self._adjacency:
            raise KeyError(a)
        if b not in self._adjacency:
            raise KeyError(b)
        edge = _Edge(weight=float(weight), payload=payload)
        self._adjacency[a][b] = edge
        self._adjacency[b][a] = edge

    def remove_edge(self, a: T, b: T) -> None:
        if not self.has_edge(a, b):
            raise KeyError((a, b))
        del self._adjacency[a][b]
        self._adjacency[b].pop(a, None)

    def has_vertex(self, vertex: T) -> bool:
        return vertex in self._adjacency

    def has_edge(self, a: T, b: T) -> bool:
        return b in self._adjacency.get(a, {})

    # -- queries ---------------------------------------------------------

    def neighbors(self, vertex: T) -> list[T]:
        return list(self._adjacency.get(vertex, {}))

    def edge_payload(self, a: T, b: T) -> Any:
        edge = self._adjacency.get(a, {}).get(b)
        return edge.payload if edge is not None else None

    def edge_weight(self, a: T, b: T) -> float | None:
        edge = self._adjacency.get(a, {}).get(b)
        return edge.weight if edge is not None else None

    def edges(self) -> list[tuple[T, T, float, Any]]:
        """Every undirected edge exactly once, in insertion order of its first endpoint."""

        seen: set[int] = set()
        result: list[tuple[T, T, float, Any]] = []
        for a, neighbours in self._adjacency.items():
            for b, edge in neighbours.items():
                if id(edge) in seen:
                    continue
                seen.add(id(edge))
                result.append((a, b, edge.weight, edge.payload))
        return result

    def iter_bfs(self, start: T) -> Iterator[T]:
        if start not in self._adjacency:
            return
        visited = {start}
        queue: deque[T] = deque([start])
        while queue:
            current = queue.popleft()
            yield current
            for neighbour in self._adjacency[current]:
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)

    def iter_dfs(self, start: T) -> Iterator[T]:
        if start not in self._adjacency:
            return
        visited: set[T] = set()
        stack: list[T] = [start]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            yield current
            # reversed so the first neighbour is explored first
            for neighbour in reversed(list(self._adjacency[current])):
                if neighbour not in visited:
                    stack.append(neighbour)

    def _dijkstra(self, start: T, target: T) -> tuple[dict[T, float], dict[T, T]]:
        distances: dict[T, float] = {start: 0.0}
        previous: dict[T, T] = {}
        counter = itertools.count()
        heap: list[tuple[float, int, T]] = [(0.0, next(counter), start)]
        done: set[T] = set()

        while heap:
            distance, _, current = heapq.heappop(heap)
            if current in done:
                continue
            done.add(current)
            if current == target:
                break
            for neighbour, edge in self._adjacency[current].items():
                if neighbour in done:
                    continue
                candidate = distance + edge.weight
                if candidate < distances.get(neighbour, math.inf):
                    distances[neighbour] = candidate
                    previous[neighbour] = current
                    heapq.heappush(heap, (candidate, next(counter), neighbour))
        return distances, previous

    def shortest_path(self, start: T, target: T) -> list[T]:
        """Vertices from `start` to `target` inclusive; empty when unreachable."""

        if start not in self._adjacency or target not in self._adjacency:
            return []
        distances, previous = self._dijkstra(start, target)
        if target not in distances:
            return []

        path = [target]
        while path[-1] != start:
            path.append(previous[path[-1]])
        path.reverse()
        return path

    def shortest_path_weight(self, start: T, target: T) -> float:
        if start not in self._adjacency or target not in self._adjacency:
            return math.inf
        distances, _ = self._dijkstra(start, target)
        return distances.get(target, math.inf)

    def is_connected(self) -> bool:
        if not self._adjacency:
            return False
        first = next(iter(self._adjacency))
        return sum(1 for _ in self.iter_bfs(first)) == len(self._adjacency)

    def minimum_spanning_tree(self) -> "Network[T]":
        """Prim's algorithm from the first vertex; disconnected parts are left out."""

        tree: Network[T] = Network()
        if not self._adjacency:
            return tree

        first = next(iter(self._adjacency))
        tree.add_vertex(first)
        counter = itertools.count()
        heap: list[tuple[float, int, T, T]] = [
            (edge.weight, next(counter), first, other) for other, edge in self._adjacency[first].items()
        ]
        heapq.heapify(heap)

        while heap:
            weight, _, source, target = heapq.heappop(heap)
            if tree.has_vertex(target):
                continue
            tree.add_vertex(target)
            tree.add_edge(source, target, weight, self.edge_payload(source, target))
            for other, edge in self._adjacency[target].items():
                if not tree.has_vertex(other):
                    heapq.heappush(heap, (edge.weight, next(counter), target, other))
        return tree

    # -- container protocol ----------------------------------------------

    def is_empty(self) -> bool:
        return not self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._adjacency))

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adjacency

    def __str__(self) -> str:
        lines = []
        for vertex, neighbours in self._adjacency.items():
            links = ", ".join(f"{other} ({edge.weight:g})" for other, edge in neighbours.items())
            lines.append(f"{vertex} -> [{links}]")
        return "\n".join(lines)
