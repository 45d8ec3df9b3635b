from __future__ import annotations

from dataclasses import dataclass, field

from .cloze import ordinals
from .deck import CardTemplate, Deck, Note
from .parser import iter_field_refs
from .renderer import CardRenderer
from .types import Card, FilterKind, Node
from .utils import stable_card_id

# Fields the renderer provides on top of the note's own fields.
SPECIAL_FIELDS = ("FrontSide", "Tags", "Deck", "Card", "Type")


@dataclass
class NoteCards:
    cards: list[Card] = field(default_factory=list)
    skipped_empty_front: int = 0
    skipped_no_cloze: int = 0


def note_fields(deck: Deck, note: Note, card_name: str) -> dict[str, str]:
    fields = dict(note.fields)
    fields["Tags"] = " ".join(note.tags)
    fields["Deck"] = deck.name
    fields["Card"] = card_name
    fields["Type"] = deck.note_type.name
    return fields


def cloze_field_names(nodes: tuple[Node, ...]) -> list[str]:
    names: list[str] = []
    for ref in iter_field_refs(nodes):
        if FilterKind.CLOZE in ref.filters and ref.name not in names:
            names.append(ref.name)
    return names


def note_cloze_ordinals(note: Note, field_names: list[str]) -> list[int]:
    found: set[int] = set()
    for name in field_names:
        found.update(ordinals(note.fields.get(name, "")))
    return sorted(found)


def _make_card(deck: Deck, note_index: int, note: Note, template: CardTemplate, ordinal: int,
               question: str, answer: str) -> Card:
    return Card(
        card_id=stable_card_id(deck.name, note_index, template.name, ordinal),
        note_index=note_index,
        template=template.name,
        ordinal=ordinal,
        question=question,
        answer=answer,
        tags=note.tags,
    )


def render_note(deck: Deck, note_index: int, renderer: CardRenderer) -> NoteCards:
    """Render every card one note produces.

    Standard notes: one card per template, skipped when the question is the
    same as it would be with every note field empty.
    Cloze notes: one card per distinct ordinal in the fields the first
    template's front passes through `cloze`.

    Raises RenderError when a template cannot be parsed.
    """
    note = deck.notes[note_index]
    out = NoteCards()
    note_type = deck.note_type

    if note_type.is_cloze:
        template = note_type.templates[0]
        front_nodes = renderer.parse(template.front)
        ords = note_cloze_ordinals(note, cloze_field_names(front_nodes))
        if not ords:
            out.skipped_no_cloze += 1
            return out
        for ordinal in ords:
            fields = note_fields(deck, note, f"Cloze {ordinal}")
            result = renderer.render(template.front, template.back, fields, ordinal)
            out.cards.append(_make_card(deck, note_index, note, template, ordinal, result.question, result.answer))
        return out

    for template in note_type.templates:
        fields = note_fields(deck, note, template.name)
        result = renderer.render(template.front, template.back, fields)
        blank = {k: v for k, v in fields.items() if k not in note.fields}
        if result.question == renderer.render_side(template.front, blank):
            out.skipped_empty_front += 1
            continue
        out.cards.append(_make_card(deck, note_index, note, template, 0, result.question, result.answer))
    return out


def generate_cards(deck: Deck, renderer: CardRenderer) -> list[Card]:
    cards: list[Card] = []
    for idx in range(len(deck.notes)):
        cards.extend(render_note(deck, idx, renderer).cards)
    return cards
