"""Localización de recursos del juego (mapas y enigmas).

Este módulo vive en `core/` porque:
- centraliza el *dónde* están los datos sin acoplarse a la CLI
- evita duplicar lógica de paths en el menú, el editor y `doctor`.

Los mapas incluidos viven en `<project_root>/data/maps`; los enigmas en
`<project_root>/data/enigmas.json`.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from core.config import AppSettings, get_user_config_dir


RIDDLES_FILENAME = "enigmas.json"


@dataclass(frozen=True)
class KnownMap:
    filename: str
    title: str
    difficulty: str


# Orden de presentación en el menú (de más fácil a más difícil).
KNOWN_MAPS: tuple[KnownMap, ...] = (
    KnownMap("mapa_facil.json", "Arena de Treino do Iniciado", "Easy"),
    KnownMap("mapa_medio.json", "O Castelo Abandonado de Aldoria", "Medium"),
    KnownMap("mapa_dificil.json", "O Grande Labirinto da Glória e do Desespero", "Hard"),
    KnownMap("mapa_epico.json", "A Dungeon Épica dos Desafios e da Glória", "Epic"),
)


@dataclass(frozen=True)
class MapEntry:
    path: Path
    label: str


def _project_root() -> Path:
    # core/resources_loader.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def _data_dir() -> Path:
    """Directorio de datos en runtime.

    Reglas:
    - Si GLORY_MAZE_DATA_DIR está definido, se usa tal cual.
    - Si estamos en modo "frozen" (PyInstaller), usar un path del usuario.
    - En desarrollo, usar <project_root>/data.
    """

    override = (os.environ.get("GLORY_MAZE_DATA_DIR") or "").strip()
    if override:
        return Path(override)

    if getattr(sys, "frozen", False):
        return get_user_config_dir() / "data"

    return _project_root() / "data"


def get_default_maps_dir() -> Path:
    return _data_dir() / "maps"


def get_default_riddles_path() -> Path:
    return _data_dir() / RIDDLES_FILENAME


def resolve_maps_dir(settings: AppSettings) -> Path:
    return settings.maps_dir or get_default_maps_dir()


def resolve_riddles_path(settings: AppSettings) -> Path:
    return settings.riddles_path or get_default_riddles_path()


def discover_maps(maps_dir: Path) -> list[Path]:
    """Ficheros `.json` del directorio de mapas (sin el de enigmas), ordenados por nombre."""

    if not maps_dir.is_dir():
        return []
    return sorted(
        p for p in maps_dir.iterdir()
        if p.is_file() and p.suffix == ".json" and p.name != RIDDLES_FILENAME
    )


def ordered_maps(maps_dir: Path) -> list[MapEntry]:
    """Mapas conocidos primero (por dificultad), luego el resto de mapas descubiertos."""

    available = {p.name: p for p in discover_maps(maps_dir)}
    entries: list[MapEntry] = []
    for known in KNOWN_MAPS:
        path = available.pop(known.filename, None)
        if path is not None:
            entries.append(MapEntry(path, f"{known.title} ({known.difficulty})"))
    for name, path in available.items():
        entries.append(MapEntry(path, path.stem))
    return entries


def resolve_map_path(name: str, maps_dir: Path) -> Path:
    """Resuelve un mapa dado como ruta o como nombre dentro de `maps_dir`.

    Orden:
    1) la ruta tal cual, si existe
    2) <maps_dir>/<name> (añadiendo `.json` si falta)
    """

    candidate = Path(name)
    if candidate.is_file():
        return candidate
    filename = name if name.endswith(".json") else f"{name}.json"
    return maps_dir / filename
