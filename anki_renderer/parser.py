"""Template scanner and parser.

Templates use the Anki subset of Mustache:

    {{Field}}                 field substitution
    {{text:Field}}            field passed through one or more filters
    {{#Field}}...{{/Field}}   rendered when Field is non-empty
    {{^Field}}...{{/Field}}   rendered when Field is missing or empty

Tags never nest; the first `}}` after a `{{` closes the tag. Sections are
tracked on an explicit stack so nesting depth is not limited by the
interpreter's recursion limit.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .errors import MismatchedClose, UnknownFilter, UnterminatedSection, UnterminatedTag
from .types import FieldRef, FilterKind, Node, Section, Text

OPEN = "{{"
CLOSE = "}}"


@dataclass(frozen=True)
class Token:
    kind: str  # "text" | "tag"
    value: str  # literal text, or the tag body without delimiters
    position: int


def tokenize(template: str) -> Iterator[Token]:
    pos = 0
    n = len(template)
    while pos < n:
        start = template.find(OPEN, pos)
        if start == -1:
            yield Token("text", template[pos:], pos)
            return
        if start > pos:
            yield Token("text", template[pos:start], pos)
        end = template.find(CLOSE, start + len(OPEN))
        if end == -1:
            raise UnterminatedTag(start)
        yield Token("tag", template[start + len(OPEN):end], start)
        pos = end + len(CLOSE)


@dataclass
class _Frame:
    name: str
    negate: bool
    body: list[Node] = field(default_factory=list)


def _parse_field_tag(body: str, *, strict_filters: bool) -> FieldRef:
    parts = body.split(":")
    name = parts[-1].strip()
    filters: list[FilterKind] = []
    for keyword in parts[:-1]:
        keyword = keyword.strip()
        kind = FilterKind.from_keyword(keyword)
        if kind is None:
            if strict_filters:
                raise UnknownFilter(keyword)
            # passthrough: the field renders as if the keyword were absent
            continue
        filters.append(kind)
    return FieldRef(name=name, filters=tuple(filters))


def parse(template: str, *, strict_filters: bool = False) -> tuple[Node, ...]:
    """Parse `template` into an immutable node tree.

    Raises a ParseError subclass on unterminated tags, unterminated sections
    and mismatched close tags (and on unknown filters when `strict_filters`).
    """
    root = _Frame(name="", negate=False)
    stack: list[_Frame] = []

    def current() -> _Frame:
        return stack[-1] if stack else root

    for tok in tokenize(template):
        if tok.kind == "text":
            current().body.append(Text(tok.value))
            continue

        body = tok.value.strip()
        sigil = body[:1]
        if sigil in ("#", "^"):
            stack.append(_Frame(name=body[1:].strip(), negate=sigil == "^"))
        elif sigil == "/":
            name = body[1:].strip()
            if not stack:
                raise MismatchedClose(None, name)
            frame = stack.pop()
            if frame.name != name:
                raise MismatchedClose(frame.name, name)
            current().body.append(Section(frame.name, frame.negate, tuple(frame.body)))
        else:
            current().body.append(_parse_field_tag(body, strict_filters=strict_filters))

    if stack:
        raise UnterminatedSection(stack[-1].name)
    return tuple(root.body)


def iter_field_refs(nodes: Iterable[Node]) -> Iterator[FieldRef]:
    """Yield every FieldRef in document order, including those inside sections."""
    pending: list[Iterator[Node]] = [iter(nodes)]
    while pending:
        node = next(pending[-1], None)
        if node is None:
            pending.pop()
            continue
        if isinstance(node, FieldRef):
            yield node
        elif isinstance(node, Section):
            pending.append(iter(node.body))


def iter_section_names(nodes: Iterable[Node]) -> Iterator[str]:
    pending: list[Iterator[Node]] = [iter(nodes)]
    while pending:
        node = next(pending[-1], None)
        if node is None:
            pending.pop()
            continue
        if isinstance(node, Section):
            yield node.name
            pending.append(iter(node.body))
