from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .cache import TemplateCache
from .errors import ParseError
from .evaluator import evaluate
from .parser import parse
from .types import Node, RenderContext, RenderResult, Side

FRONT_SIDE_FIELD = "FrontSide"


@dataclass
class CardRenderer:
    """Renders question/answer pairs.

    The back template sees the rendered front as the `FrontSide` field, so
    the two sides are evaluated in order rather than independently.
    """

    cache: TemplateCache | None = None
    strict_filters: bool = False

    def parse(self, template: str) -> tuple[Node, ...]:
        if self.cache is not None:
            return self.cache.get(template, strict_filters=self.strict_filters)
        return parse(template, strict_filters=self.strict_filters)

    def _parse_side(self, template: str, side_name: str) -> tuple[Node, ...]:
        try:
            return self.parse(template)
        except ParseError as e:
            e.side = side_name
            raise

    def render_side(
        self,
        template: str,
        fields: Mapping[str, str],
        card_ordinal: int = 0,
        side: Side = Side.QUESTION,
    ) -> str:
        nodes = self.parse(template)
        return evaluate(nodes, RenderContext.create(fields, card_ordinal, side))

    def render(
        self,
        front: str,
        back: str,
        fields: Mapping[str, str],
        card_ordinal: int = 0,
    ) -> RenderResult:
        if card_ordinal < 0:
            raise ValueError(f"card_ordinal must be >= 0, got {card_ordinal}")

        # Both templates are parsed before anything is rendered.
        front_nodes = self._parse_side(front, "front")
        back_nodes = self._parse_side(back, "back")

        question = evaluate(front_nodes, RenderContext.create(fields, card_ordinal, Side.QUESTION))

        back_fields = dict(fields)
        back_fields[FRONT_SIDE_FIELD] = question
        answer = evaluate(back_nodes, RenderContext.create(back_fields, card_ordinal, Side.ANSWER))

        return RenderResult(question=question, answer=answer)


_default_renderer = CardRenderer(cache=TemplateCache())


def default_renderer() -> CardRenderer:
    return _default_renderer


def render_card(
    front: str,
    back: str,
    fields: Mapping[str, str],
    card_ordinal: int = 0,
) -> RenderResult:
    return _default_renderer.render(front, back, fields, card_ordinal)
