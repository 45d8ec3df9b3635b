from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class Side(Enum):
    QUESTION = "question"
    ANSWER = "answer"


class FilterKind(Enum):
    """Closed set of field filters; values are the template keywords."""

    NONE = ""
    TEXT = "text"
    HINT = "hint"
    CLOZE = "cloze"
    FURIGANA = "furigana"
    TYPE = "type"
    KANJI = "kanji"
    KANA = "kana"

    @classmethod
    def from_keyword(cls, keyword: str) -> FilterKind | None:
        if not keyword:
            return None
        try:
            return cls(keyword)
        except ValueError:
            return None


@dataclass(frozen=True)
class Text:
    literal: str


@dataclass(frozen=True)
class FieldRef:
    name: str
    filters: tuple[FilterKind, ...] = ()  # outermost first, as written

    @property
    def filter(self) -> FilterKind:
        return self.filters[0] if self.filters else FilterKind.NONE


@dataclass(frozen=True)
class Section:
    name: str
    negate: bool
    body: tuple[Node, ...] = ()


Node = Union[Text, FieldRef, Section]


@dataclass(frozen=True)
class ClozeSpan:
    ordinal: int  # 1-based
    answer: str
    hint: str | None
    start: int
    end: int


@dataclass(frozen=True)
class RenderContext:
    fields: Mapping[str, str]
    card_ordinal: int = 0  # 0 = not a cloze card
    side: Side = Side.QUESTION

    @classmethod
    def create(cls, fields: Mapping[str, str], card_ordinal: int = 0, side: Side = Side.QUESTION) -> RenderContext:
        return cls(fields=MappingProxyType(dict(fields)), card_ordinal=int(card_ordinal), side=side)


@dataclass(frozen=True)
class RenderResult:
    question: str
    answer: str

    def to_dict(self) -> dict[str, str]:
        return {"question": self.question, "answer": self.answer}


@dataclass(frozen=True)
class Card:
    card_id: str
    note_index: int
    template: str
    ordinal: int
    question: str
    answer: str
    tags: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "card_id": self.card_id,
            "note_index": self.note_index,
            "template": self.template,
            "ordinal": self.ordinal,
            "question": self.question,
            "answer": self.answer,
            "tags": list(self.tags),
        }
