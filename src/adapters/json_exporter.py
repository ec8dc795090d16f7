"""Exportación JSON de los reportes de partida.

Por qué JSON:
- Permite revisar la partida (camino, efectos, enigmas) fuera del juego.
- El resumen de la partida alimenta también el render HTML.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

from core.domain.models import MatchSummary, MissionReport, PlayerSummary, ReportStatistics
from core.domain.player import Player
from core.domain.rooms import Center

logger = logging.getLogger(__name__)


def _write_json(model: BaseModel, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = model.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def report_filename(player_name: str) -> str:
    safe_name = re.sub(r"\s+", "_", player_name)
    return f"report_{safe_name}.json"


def build_mission_report(player: Player, starting_power: int = 100) -> MissionReport:
    victory = isinstance(player.current_room, Center)
    percentage = int(player.power * 100 / starting_power) if starting_power > 0 else 0
    return MissionReport(
        player=player.name,
        result="VICTORY" if victory else "DEFEAT",
        path_taken=player.history,
        final_power=player.power,
        riddles_solved=player.solved_riddles,
        effects_applied=player.applied_effects,
        events_encountered=player.encountered_events,
        items=[str(item) for item in player.items],
        statistics=ReportStatistics(
            total_riddles_encountered=len(player.solved_riddles),
            total_effects_applied=len(player.applied_effects),
            total_events_encountered=len(player.encountered_events),
            final_power_percentage=percentage,
            game_status="COMPLETED_SUCCESSFULLY" if victory else "ABANDONED_OR_DEFEATED",
        ),
    )


def export_mission_report(*, player: Player, output_dir: Path, starting_power: int = 100) -> Path:
    """Escribe `report_<nombre>.json` con el recorrido del jugador."""

    report = build_mission_report(player, starting_power)
    path = _write_json(report, output_dir / report_filename(player.name))
    logger.info("Mission report for %s written to %s", player.name, path)
    return path


def build_match_summary(
    players: Sequence[Player],
    winner: Player | None,
    map_name: str | None = None,
    moves: int = 0,
) -> MatchSummary:
    return MatchSummary(
        map_name=map_name,
        winner=winner.name if winner is not None else "NONE",
        moves=moves,
        players=[
            PlayerSummary(
                name=p.name,
                is_bot=p.is_bot,
                power=p.power,
                current_room=p.current_room.id if p.current_room is not None else "UNKNOWN",
                path_taken=p.history,
                riddles_solved=p.solved_riddles,
                effects_applied=p.applied_effects,
                events_encountered=p.encountered_events,
            )
            for p in players
        ],
    )


def export_match_summary(
    *,
    players: Sequence[Player],
    winner: Player | None,
    output_dir: Path,
    map_name: str | None = None,
    moves: int = 0,
) -> tuple[Path, MatchSummary]:
    """Escribe `report_match.json` y devuelve también el modelo (para el HTML)."""

    summary = build_match_summary(players, winner, map_name, moves)
    path = _write_json(summary, output_dir / "report_match.json")
    logger.info("Match summary written to %s", path)
    return path, summary
