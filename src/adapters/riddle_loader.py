"""Carga de enigmas desde JSON.

Reglas:
- Fichero inexistente -> lista vacía (el mapa se juega sin enigmas).
- JSON inválido -> `InvalidMapError`.
- Enigmas individuales inválidos se descartan con un warning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from adapters.map_schema import RiddlesFile, RiddleSpec
from core.domain.models import Riddle
from core.errors import InvalidMapError

logger = logging.getLogger(__name__)


def _to_riddle(raw: object) -> Riddle | None:
    try:
        spec = RiddleSpec.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Riddle skipped: %s", exc.errors()[0].get("msg", exc))
        return None

    options = [str(option) for option in spec.options if option is not None]
    if not options:
        logger.warning("Riddle skipped (no options): %s", spec.question)
        return None
    if not 0 <= spec.correct < len(options):
        logger.warning("Riddle skipped (answer index %d out of range): %s", spec.correct, spec.question)
        return None
    return Riddle(question=spec.question, options=options, correct_index=spec.correct)


def load_riddles(path: Path) -> list[Riddle]:
    if not path.is_file():
        logger.warning("Riddle file not found: %s", path)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        parsed = RiddlesFile.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise InvalidMapError(f"Could not load riddles from {path}: {exc}") from exc

    if not parsed.riddles:
        logger.warning("No 'enigmas' found in %s", path)
        return []

    riddles = [riddle for riddle in (_to_riddle(raw) for raw in parsed.riddles) if riddle is not None]
    logger.info("Loaded %d riddles from %s", len(riddles), path)
    return riddles
