"""Anki card template renderer.

Renders question/answer HTML from Anki-style templates:
- field substitution and filters ({{Field}}, {{text:Field}}, {{cloze:Text}})
- conditional sections ({{#Field}}...{{/Field}}, {{^Field}}...{{/Field}})
- cloze deletions ({{c1::answer::hint}}) for a given card ordinal

Deck files, batch jobs, previews and .apkg export are built on top of it.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "CardRenderer",
    "RenderResult",
    "RenderError",
    "ParseError",
    "InputError",
    "render_card",
    "render_template",
    "render_cloze_card",
    "count_cloze_cards",
    "version",
]

__version__ = "0.1.0"

from .errors import InputError, ParseError, RenderError  # noqa: E402
from .renderer import CardRenderer, render_card  # noqa: E402
from .types import RenderResult  # noqa: E402
from .api import count_cloze_cards, render_cloze_card, render_template, version  # noqa: E402
