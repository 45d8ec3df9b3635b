from __future__ import annotations

from .cards import SPECIAL_FIELDS, cloze_field_names, note_cloze_ordinals
from .deck import Deck
from .errors import ParseError
from .parser import iter_field_refs, iter_section_names, parse
from .types import Node


def _parse_templates(deck: Deck, errors: list[str], *, strict_filters: bool) -> dict[tuple[str, str], tuple[Node, ...]]:
    parsed: dict[tuple[str, str], tuple[Node, ...]] = {}
    for t in deck.note_type.templates:
        for side, text in (("front", t.front), ("back", t.back)):
            try:
                parsed[(t.name, side)] = parse(text, strict_filters=strict_filters)
            except ParseError as e:
                errors.append(f"template {t.name!r} {side}: {e.message}")
    return parsed


def validate_deck(deck: Deck, *, strict_filters: bool = False) -> list[str]:
    """Check a deck file for problems that would make its cards render badly.

    Returns a list of messages; empty means valid.
    """
    errors: list[str] = []
    note_type = deck.note_type
    declared = set(note_type.fields)
    known = declared | set(SPECIAL_FIELDS)

    parsed = _parse_templates(deck, errors, strict_filters=strict_filters)

    for (template_name, side), nodes in parsed.items():
        referenced = [r.name for r in iter_field_refs(nodes)] + list(iter_section_names(nodes))
        for name in dict.fromkeys(referenced):
            if name and name not in known:
                errors.append(f"template {template_name!r} {side}: unknown field {name!r}")

    cloze_fields: list[str] = []
    if note_type.is_cloze:
        front = parsed.get((note_type.templates[0].name, "front"))
        if front is not None:
            cloze_fields = cloze_field_names(front)
            if not cloze_fields:
                errors.append(f"cloze note type {note_type.name!r}: front template has no cloze filter")

    for idx, note in enumerate(deck.notes):
        extra = sorted(set(note.fields) - declared)
        if extra:
            errors.append(f"notes[{idx}]: undeclared fields {extra}")
        if cloze_fields and not note_cloze_ordinals(note, cloze_fields):
            errors.append(f"notes[{idx}]: no cloze deletions in {cloze_fields}")

    return errors
