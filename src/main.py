"""Script de ejecución.

Por qué existe:
- Permite lanzar el juego con `python src/main.py` durante desarrollo.
- Mantiene un entrypoint simple además del script `glory-maze`.
"""

from __future__ import annotations

import sys

# Room descriptions and map names carry accents; Windows consoles default to cp1252.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
