from __future__ import annotations

import hashlib
import html
import re
from typing import Callable

from .cloze import render_cloze_field
from .types import FilterKind, RenderContext

HTML_TAG_RE = re.compile(r"<[^>]+>")
BR_RE = re.compile(r"<br\s*/?>|</br>", re.IGNORECASE)

# 漢字[かんじ]: base is a run without brackets, whitespace or tag delimiters
BRACKET_RUBY_RE = re.compile(r"([^\[\]\s<>]+)\[([^\[\]]+)\]")

# kanji/kana keep surrounding kana and punctuation, so their base is Han only:
# iteration/ideographic marks, CJK ext. A, unified, compatibility, ext. B-F
HAN_CHARS = "々〇〻㐀-䶿一-鿿豈-﫿\U00020000-\U0002ebef"
HAN_RUBY_RE = re.compile(rf"([{HAN_CHARS}]+)\[([^\[\]]+)\]")
RUBY_HTML_RE = re.compile(r"<ruby>([^<]*)<rt>([^<]*)</rt></ruby>")

HINT_LABEL = "Show Hint"
HINT_HIDDEN_CLASS = "hint-hidden"
HINT_SHOWN_CLASS = "hint-shown"


def hint_id(content: str) -> str:
    return hashlib.sha1(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:12]


def filter_text(value: str) -> str:
    """Strip markup, keeping visible text. Line breaks become newlines."""
    return HTML_TAG_RE.sub("", BR_RE.sub("\n", value))


def filter_hint(value: str) -> str:
    if not value:
        return ""
    hid = f"hint{hint_id(value)}"
    onclick = (
        "this.style.display='none';"
        f"var h=document.getElementById('{hid}');"
        "h.style.display='block';"
        f"h.className='hint {HINT_SHOWN_CLASS}';"
        "return false;"
    )
    return (
        f'<a class="hint" href="#" onclick="{onclick}">{HINT_LABEL}</a>'
        f'<div id="{hid}" class="hint {HINT_HIDDEN_CLASS}" style="display:none">{value}</div>'
    )


def filter_type(value: str) -> str:
    expected = html.escape(value, quote=True)
    return f'<input type="text" id="typeans" class="type-answer" data-expected="{expected}"/>'


def filter_furigana(value: str) -> str:
    return BRACKET_RUBY_RE.sub(r"<ruby>\1<rt>\2</rt></ruby>", value)


def filter_kanji(value: str) -> str:
    return HAN_RUBY_RE.sub(r"\1", RUBY_HTML_RE.sub(r"\1", value))


def filter_kana(value: str) -> str:
    return HAN_RUBY_RE.sub(r"\2", RUBY_HTML_RE.sub(r"\2", value))


FilterFn = Callable[[str, str, RenderContext], str]

_REGISTRY: dict[FilterKind, FilterFn] = {
    FilterKind.NONE: lambda value, name, ctx: value,
    FilterKind.TEXT: lambda value, name, ctx: filter_text(value),
    FilterKind.HINT: lambda value, name, ctx: filter_hint(value),
    FilterKind.CLOZE: lambda value, name, ctx: render_cloze_field(value, ctx.card_ordinal, ctx.side),
    FilterKind.FURIGANA: lambda value, name, ctx: filter_furigana(value),
    FilterKind.TYPE: lambda value, name, ctx: filter_type(value),
    FilterKind.KANJI: lambda value, name, ctx: filter_kanji(value),
    FilterKind.KANA: lambda value, name, ctx: filter_kana(value),
}

_missing = set(FilterKind) - set(_REGISTRY)
if _missing:  # pragma: no cover
    raise RuntimeError(f"filters without an implementation: {sorted(k.name for k in _missing)}")


def apply_filter(kind: FilterKind, raw_value: str, field_name: str, context: RenderContext) -> str:
    return _REGISTRY[kind](raw_value, field_name, context)
