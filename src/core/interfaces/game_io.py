"""Contrato de entrada/salida del juego.

Por qué Protocol:
- El motor, el editor y el menú solo necesitan mostrar texto y leer una línea.
- Los tests inyectan un guion de respuestas sin tocar stdin.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GameIO(Protocol):
    """Canal de interacción con el jugador.

    Reglas:
    - `ask` devuelve None cuando la entrada se cerró (EOF); el llamador
      decide si eso termina la partida.
    """

    def show(self, message: str) -> None:
        """Muestra un mensaje al jugador."""

        ...

    def ask(self, prompt: str) -> str | None:
        """Pide una línea de texto; None si no hay más entrada."""

        ...
