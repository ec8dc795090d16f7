"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El motor, los loaders y los exportadores leen la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "glory-maze"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "glory-maze"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "glory-maze"
    return Path.home() / ".config" / "glory-maze"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# Glory Maze user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="GLORY_MAZE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    maps_dir: Path | None = Field(
        default=None,
        description="Directorio con los mapas JSON (por defecto <proyecto>/data/maps).",
    )
    riddles_path: Path | None = Field(
        default=None,
        description="Fichero JSON de enigmas (por defecto <proyecto>/data/enigmas.json).",
    )
    reports_dir: Path = Field(
        default=Path("reports"),
        description="Directorio de salida de los reportes JSON/HTML.",
    )
    log_file: Path = Field(
        default=Path("game_log.txt"),
        description="Log de la sesión (se sobrescribe en cada partida).",
    )

    starting_power: int = Field(
        default=100,
        gt=0,
        description="Poder inicial de cada jugador.",
    )
    bot_error_chance: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Probabilidad de que un bot inteligente se distraiga.",
    )
    bot_lever_chance: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Probabilidad de que un bot tire de una palanca al inicio del turno.",
    )
    lever_success_chance: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Probabilidad de acertar al tirar de una palanca.",
    )
    bot_move_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Pausa tras cada turno de bot (segundos).",
    )

    html_report: bool = Field(
        default=False,
        description="Generar también el resumen de la partida en HTML.",
    )
    seed: int | None = Field(
        default=None,
        description="Semilla del generador aleatorio (partidas reproducibles).",
    )
