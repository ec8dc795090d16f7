"""Exportación HTML del resumen de partida.

Por qué está en adapters:
- El render (Jinja2 + template) es un detalle de infraestructura.
- El Core solo conoce el modelo `MatchSummary`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import MatchSummary


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_match_html(*, summary: MatchSummary) -> str:
    """Renderiza un HTML autocontenido con el resumen de la partida."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    ranking = sorted(
        summary.players,
        key=lambda p: (p.name != summary.winner, -p.power, p.name),
    )

    template = _get_env().get_template("match_report.html")
    return template.render(
        summary=summary,
        ranking=ranking,
        generated_at=generated_at,
        humans_count=sum(1 for p in summary.players if not p.is_bot),
        bots_count=sum(1 for p in summary.players if p.is_bot),
    )


def export_match_html(*, summary: MatchSummary, output_path: Path) -> Path:
    """Exporta el resumen como HTML junto a los reportes JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_match_html(summary=summary)
    output_path.write_text(html, encoding="utf-8")
    return output_path
