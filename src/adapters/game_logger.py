"""Log de sesión en fichero (`game_log.txt`).

Notas:
- Se engancha un `FileHandler` al logger raíz: todo lo que los módulos
  registran con `logging.getLogger(__name__)` acaba en el fichero.
- El fichero se sobrescribe al iniciar cada sesión.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SEPARATOR = "=" * 50

_handler: logging.FileHandler | None = None


def start_session_log(path: Path) -> Path:
    """Abre el log de la sesión y escribe la cabecera."""

    global _handler
    close_session_log()

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)
    _handler = handler

    logger.info("GLORY MAZE - GAME LOG")
    logger.info("Started: %s", datetime.now().strftime(DATE_FORMAT))
    logger.info(SEPARATOR)
    return path


def log_victory(winner: str, moves: int) -> None:
    logger.info(SEPARATOR)
    logger.info("VICTORY: %s found the treasure!", winner)
    logger.info("Total moves: %d", moves)
    logger.info(SEPARATOR)


def close_session_log() -> None:
    global _handler
    if _handler is None:
        return
    logging.getLogger().removeHandler(_handler)
    _handler.close()
    _handler = None
