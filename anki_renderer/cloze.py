"""Cloze deletions inside field values.

Syntax:
- {{c1::text}}        deletion belonging to card 1
- {{c1::text::hint}}  same, shown as [hint] on the question side

Several deletions may share an ordinal; they are masked and revealed together.
"""
from __future__ import annotations

import re

from .types import ClozeSpan, Side

CLOZE_RE = re.compile(r"\{\{c([1-9][0-9]*)::([^}]*?)(?:::([^}]*?))?\}\}")

CLOZE_CLASS = "cloze"


def extract_spans(raw_value: str) -> list[ClozeSpan]:
    return [
        ClozeSpan(
            ordinal=int(m.group(1)),
            answer=m.group(2),
            hint=m.group(3),
            start=m.start(),
            end=m.end(),
        )
        for m in CLOZE_RE.finditer(raw_value)
    ]


def ordinals(raw_value: str) -> list[int]:
    """Sorted distinct ordinals present in `raw_value`."""
    return sorted({s.ordinal for s in extract_spans(raw_value)})


def count_ordinals(raw_value: str) -> int:
    """Number of cards the value generates (distinct ordinals, not occurrences)."""
    return len(ordinals(raw_value))


def render_cloze_field(raw_value: str, target_ordinal: int, side: Side) -> str:
    """Mask or reveal the deletions of `target_ordinal`; others show their answer.

    An ordinal with no matching deletion (including 0) reveals everything
    unmarked.
    """

    def replace(m: re.Match[str]) -> str:
        answer = m.group(2)
        if int(m.group(1)) != target_ordinal:
            return answer
        if side is Side.QUESTION:
            hint = m.group(3)
            shown = f"[{hint}]" if hint is not None else "[...]"
            return f'<span class="{CLOZE_CLASS}">{shown}</span>'
        return f'<span class="{CLOZE_CLASS}">{answer}</span>'

    return CLOZE_RE.sub(replace, raw_value)
