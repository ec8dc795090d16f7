"""Errores del dominio del juego.

Todas las excepciones heredan de `MazeError` para que la CLI pueda
convertirlas en un mensaje y un código de salida sin capturar `Exception`.
"""

from __future__ import annotations


class MazeError(Exception):
    """Base de todos los errores del juego."""


class InvalidMapError(MazeError, ValueError):
    """El fichero de mapa o de enigmas no se puede leer o no es JSON válido."""


class NoSuchRoomError(MazeError, LookupError):
    """Se pidió una sala que no existe en el laberinto."""


class InvalidMoveError(MazeError):
    """El destino no es una sala vecina de la sala actual."""


class GameOverError(MazeError):
    """Condición terminal: un jugador murió, salió o la entrada se cerró."""
