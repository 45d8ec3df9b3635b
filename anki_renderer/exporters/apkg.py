from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..cards import note_cloze_ordinals, cloze_field_names
from ..deck import Deck
from ..errors import ParseError
from ..parser import parse
from ..utils import stable_int_id


@dataclass
class ApkgExportStats:
    notes_seen: int = 0
    notes_exported: int = 0
    notes_skipped_no_cloze: int = 0
    deck_name: str | None = None


def _parse_tags(tags: list[str] | str | None) -> list[str]:
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    out: list[str] = []
    for t in tags:
        t = t.strip()
        if not t:
            continue
        # Anki tags should not contain spaces; normalize a bit.
        out.append(t.replace(" ", "_"))
    return out


def export_apkg(
    deck: Deck,
    out_path: str | Path,
    *,
    deck_name: str | None = None,
    tags: list[str] | str | None = None,
    strict_filters: bool = False,
) -> ApkgExportStats:
    """Export a deck file's notes as an Anki .apkg.

    Rules:
    - Every template must parse (unknown filters fail when `strict_filters`);
      the first failure aborts the export
    - Cloze notes without any deletion in their cloze fields are skipped
    - Notes keep their own tags plus `tags`
    - If 0 notes are exported => RuntimeError
    """
    try:
        import genanki  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "genanki is required for apkg export. Install with: pip install genanki"
        ) from e

    note_type = deck.note_type
    for t in note_type.templates:
        for side, text in (("front", t.front), ("back", t.back)):
            try:
                parse(text, strict_filters=strict_filters)
            except ParseError as e:
                e.side = side
                raise

    out_path = Path(out_path)
    deck_name = deck_name or deck.name
    stats = ApkgExportStats(deck_name=deck_name)
    extra_tags = _parse_tags(tags)

    templates = note_type.templates[:1] if note_type.is_cloze else note_type.templates
    model = genanki.Model(
        stable_int_id(f"anki_renderer:model:{note_type.name}:{note_type.kind}"),
        note_type.name,
        fields=[{"name": f} for f in note_type.fields],
        templates=[{"name": t.name, "qfmt": t.front, "afmt": t.back} for t in templates],
        css=note_type.css,
        model_type=genanki.Model.CLOZE if note_type.is_cloze else genanki.Model.FRONT_BACK,
    )
    anki_deck = genanki.Deck(stable_int_id(f"anki_renderer:deck:{deck_name}"), deck_name)

    cloze_fields = cloze_field_names(parse(templates[0].front, strict_filters=strict_filters)) if note_type.is_cloze else []

    for note in deck.notes:
        stats.notes_seen += 1
        if note_type.is_cloze and not note_cloze_ordinals(note, cloze_fields):
            stats.notes_skipped_no_cloze += 1
            continue
        anki_note = genanki.Note(
            model=model,
            fields=[note.fields.get(f, "") for f in note_type.fields],
            tags=list(dict.fromkeys([*note.tags, *extra_tags])),
        )
        anki_deck.add_note(anki_note)
        stats.notes_exported += 1

    if stats.notes_exported <= 0:
        raise RuntimeError("No notes exported. Does the deck file contain notes?")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    genanki.Package(anki_deck).write_to_file(str(out_path))
    return stats
