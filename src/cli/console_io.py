"""`GameIO` sobre la consola de Rich."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text


class ConsoleIO:
    """Muestra texto plano (sin markup) y lee líneas de stdin."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show(self, message: str) -> None:
        # Room descriptions use "[id: ...]", which Rich would read as markup.
        self.console.print(message, markup=False, highlight=False)

    def ask(self, prompt: str) -> str | None:
        try:
            return self.console.input(Text(prompt, style="bold cyan"))
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None
