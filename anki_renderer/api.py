"""JSON-in / HTML-out operations for binding layers.

Every operation either returns its complete result or raises a RenderError
subclass with a readable message; no partial output is produced.
"""
from __future__ import annotations

import json
from typing import Any

from . import __version__
from .cloze import count_ordinals
from .errors import InputError
from .renderer import default_renderer
from .types import RenderResult, Side


def parse_fields_json(fields_json: str) -> dict[str, str]:
    try:
        data: Any = json.loads(fields_json)
    except (TypeError, ValueError) as e:
        raise InputError(f"Invalid JSON: {e}") from e
    return validate_fields(data)


def validate_fields(data: Any) -> dict[str, str]:
    if not isinstance(data, dict):
        raise InputError(f"fields must be a JSON object, got {type(data).__name__}")
    out: dict[str, str] = {}
    for name, value in data.items():
        if not isinstance(value, str):
            raise InputError(f"field {name!r} must be a string, got {type(value).__name__}")
        out[str(name)] = value
    return out


def render_template(template: str, fields_json: str) -> str:
    fields = parse_fields_json(fields_json)
    return default_renderer().render_side(template, fields)


def render_cloze_card(template: str, fields_json: str, card_ord: int, is_question: bool) -> str:
    fields = parse_fields_json(fields_json)
    if int(card_ord) < 0:
        raise InputError(f"card_ord must be >= 0, got {card_ord}")
    side = Side.QUESTION if is_question else Side.ANSWER
    return default_renderer().render_side(template, fields, int(card_ord), side)


def count_cloze_cards(field_content: str) -> int:
    return count_ordinals(field_content)


def version() -> str:
    return __version__


def render_card(front: str, back: str, fields_json: str, card_ordinal: int = 0) -> RenderResult:
    fields = parse_fields_json(fields_json)
    if int(card_ordinal) < 0:
        raise InputError(f"card_ordinal must be >= 0, got {card_ordinal}")
    return default_renderer().render(front, back, fields, int(card_ordinal))
