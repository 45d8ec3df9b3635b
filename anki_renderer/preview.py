"""Preview page generator.

Writes one standalone HTML file listing every rendered card with its
question and answer side by side. CSS is embedded; the only script is the
hint links emitted by the `hint` filter itself.
"""
from __future__ import annotations

import html
from pathlib import Path
from typing import Any, Iterable

from .styles import build_css

PAGE_CSS = """
body { margin: 0; padding: 24px; background: #eceff1; font-family: sans-serif; }
h1 { font-size: 20px; margin: 0 0 16px; }
.preview-card { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; margin-bottom: 24px; }
.preview-meta { grid-column: 1 / span 2; font-size: 12px; color: #607d8b; }
.preview-side { border-radius: 6px; box-shadow: 0 1px 3px rgba(0,0,0,.2); overflow: auto; }
.preview-side > .label { font-size: 11px; text-transform: uppercase; color: #90a4ae; padding: 4px 8px; }
.preview-side > .card { padding: 16px; min-height: 60px; }
"""


def _card_block(card: dict[str, Any], night_mode: bool) -> str:
    card_class = "card nightMode" if night_mode else "card"
    meta = " · ".join(
        part
        for part in (
            f"note {card.get('note_index')}",
            str(card.get("template") or ""),
            f"c{card['ordinal']}" if card.get("ordinal") else "",
            " ".join(card.get("tags") or []),
        )
        if part
    )
    return (
        '<section class="preview-card">\n'
        f'<div class="preview-meta">{html.escape(meta)}</div>\n'
        f'<div class="preview-side"><div class="label">Question</div>'
        f'<div class="{card_class}">{card.get("question", "")}</div></div>\n'
        f'<div class="preview-side"><div class="label">Answer</div>'
        f'<div class="{card_class}">{card.get("answer", "")}</div></div>\n'
        "</section>"
    )


def render_preview_page(
    cards: Iterable[dict[str, Any]],
    *,
    title: str = "Card Preview",
    note_css: str = "",
    include_default_styles: bool = True,
    night_mode: bool = False,
    css: str = "",
) -> str:
    card_css = build_css(
        include_default_styles=include_default_styles,
        night_mode=night_mode,
        css="\n".join(c for c in (note_css, css) if c),
    )
    blocks = "\n".join(_card_block(c, night_mode) for c in cards)
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{html.escape(title)}</title>
<style>
{PAGE_CSS}
{card_css}
</style>
</head>
<body>
<h1>{html.escape(title)}</h1>
{blocks}
</body>
</html>
"""


def generate_preview_html(
    cards: Iterable[dict[str, Any]],
    output_path: str | Path,
    *,
    title: str = "Card Preview",
    note_css: str = "",
    include_default_styles: bool = True,
    night_mode: bool = False,
    css: str = "",
) -> Path:
    """Write the preview page for `cards` (dicts as produced by Card.to_dict)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    page = render_preview_page(
        cards,
        title=title,
        note_css=note_css,
        include_default_styles=include_default_styles,
        night_mode=night_mode,
        css=css,
    )
    output_path.write_text(page, encoding="utf-8")
    return output_path
