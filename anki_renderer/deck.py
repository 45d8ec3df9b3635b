"""Deck files: a note type plus the notes to render with it.

Format:
{
  "deck": "Geography",
  "note_type": {
    "name": "Basic",
    "kind": "standard" | "cloze",
    "fields": ["Front", "Back"],
    "templates": [{"name": "Card 1", "front": "{{Front}}", "back": "{{FrontSide}}<hr id=answer>{{Back}}"}],
    "css": ""
  },
  "notes": [{"fields": {"Front": "...", "Back": "..."}, "tags": ["geo"]}]
}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .api import validate_fields
from .errors import InputError
from .utils import load_json

NOTE_KINDS = ("standard", "cloze")


@dataclass(frozen=True)
class CardTemplate:
    name: str
    front: str
    back: str


@dataclass(frozen=True)
class NoteType:
    name: str
    kind: str
    fields: tuple[str, ...]
    templates: tuple[CardTemplate, ...]
    css: str = ""

    @property
    def is_cloze(self) -> bool:
        return self.kind == "cloze"


@dataclass(frozen=True)
class Note:
    fields: dict[str, str]
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Deck:
    name: str
    note_type: NoteType
    notes: tuple[Note, ...]


def _require_str(obj: dict[str, Any], key: str, where: str, default: str | None = None) -> str:
    value = obj.get(key, default)
    if not isinstance(value, str):
        raise InputError(f"{where}.{key} must be a string")
    return value


def _parse_template(obj: Any, idx: int) -> CardTemplate:
    where = f"note_type.templates[{idx}]"
    if not isinstance(obj, dict):
        raise InputError(f"{where} must be an object")
    return CardTemplate(
        name=_require_str(obj, "name", where, default=f"Card {idx + 1}"),
        front=_require_str(obj, "front", where),
        back=_require_str(obj, "back", where),
    )


def _parse_note_type(obj: Any) -> NoteType:
    if not isinstance(obj, dict):
        raise InputError("note_type must be an object")
    kind = obj.get("kind", "standard")
    if kind not in NOTE_KINDS:
        raise InputError(f"note_type.kind must be one of {NOTE_KINDS}, got {kind!r}")
    fields = obj.get("fields", [])
    if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
        raise InputError("note_type.fields must be a list of strings")
    if len(set(fields)) != len(fields):
        raise InputError("note_type.fields must be unique")
    templates = obj.get("templates", [])
    if not isinstance(templates, list) or not templates:
        raise InputError("note_type.templates must be a non-empty list")
    return NoteType(
        name=_require_str(obj, "name", "note_type", default="Basic"),
        kind=kind,
        fields=tuple(fields),
        templates=tuple(_parse_template(t, i) for i, t in enumerate(templates)),
        css=_require_str(obj, "css", "note_type", default=""),
    )


def _parse_note(obj: Any, idx: int) -> Note:
    if not isinstance(obj, dict):
        raise InputError(f"notes[{idx}] must be an object")
    try:
        fields = validate_fields(obj.get("fields", {}))
    except InputError as e:
        raise InputError(f"notes[{idx}]: {e}") from e
    tags = obj.get("tags", [])
    if isinstance(tags, str):
        tags = tags.split()
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise InputError(f"notes[{idx}].tags must be a list of strings")
    # Anki tags cannot contain spaces.
    return Note(fields=fields, tags=tuple(t.strip().replace(" ", "_") for t in tags if t.strip()))


def parse_deck(obj: Any, *, default_name: str = "Default") -> Deck:
    if not isinstance(obj, dict):
        raise InputError("deck file must be a JSON object")
    name = obj.get("deck", default_name)
    if not isinstance(name, str) or not name.strip():
        raise InputError("deck must be a non-empty string")
    notes = obj.get("notes", [])
    if not isinstance(notes, list):
        raise InputError("notes must be a list")
    return Deck(
        name=name.strip(),
        note_type=_parse_note_type(obj.get("note_type")),
        notes=tuple(_parse_note(n, i) for i, n in enumerate(notes)),
    )


def load_deck(path: str | Path) -> Deck:
    path = Path(path)
    try:
        obj = load_json(path)
    except ValueError as e:
        raise InputError(f"Invalid JSON in {path}: {e}") from e
    return parse_deck(obj, default_name=path.stem)
