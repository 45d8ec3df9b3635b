from __future__ import annotations

from typing import Iterator, Mapping, Sequence

from .filters import apply_filter
from .types import FieldRef, Node, RenderContext, Section, Text


def field_is_set(fields: Mapping[str, str], name: str) -> bool:
    return bool(fields.get(name, ""))


def render_field(ref: FieldRef, context: RenderContext) -> str:
    value = context.fields.get(ref.name, "")
    # {{a:b:Field}} applies b first, then a
    for kind in reversed(ref.filters):
        value = apply_filter(kind, value, ref.name, context)
    return value


def evaluate(nodes: Sequence[Node], context: RenderContext) -> str:
    """Render a parsed template against `context`.

    Walks the tree with an explicit stack; sections whose condition fails
    are skipped without visiting their body.
    """
    out: list[str] = []
    pending: list[Iterator[Node]] = [iter(nodes)]
    while pending:
        node = next(pending[-1], None)
        if node is None:
            pending.pop()
            continue
        if isinstance(node, Text):
            out.append(node.literal)
        elif isinstance(node, FieldRef):
            out.append(render_field(node, context))
        elif isinstance(node, Section):
            if field_is_set(context.fields, node.name) != node.negate:
                pending.append(iter(node.body))
        else:  # pragma: no cover
            raise TypeError(f"unexpected node: {node!r}")
    return "".join(out)
