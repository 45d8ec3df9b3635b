"""Field filter tests."""
from __future__ import annotations

from anki_renderer.filters import (
    apply_filter,
    filter_furigana,
    filter_hint,
    filter_kana,
    filter_kanji,
    filter_text,
    filter_type,
)
from anki_renderer.types import FilterKind, RenderContext, Side


def _ctx(ordinal: int = 0, side: Side = Side.QUESTION) -> RenderContext:
    return RenderContext.create({}, ordinal, side)


# ═══════════════════════════════════════════════════════════════════════════════
# TEXT
# ═══════════════════════════════════════════════════════════════════════════════

class TestTextFilter:
    def test_strips_html(self):
        assert filter_text("<b>Bold</b> text") == "Bold text"

    def test_line_breaks(self):
        assert filter_text("Line1<br>Line2") == "Line1\nLine2"
        assert filter_text("Line1<br/>Line2") == "Line1\nLine2"
        assert filter_text("Line1<br />Line2") == "Line1\nLine2"
        assert filter_text("Line1</br>Line2") == "Line1\nLine2"

    def test_nested_markup(self):
        assert filter_text('<div class="foo"><span>Hello</span> <em>World</em></div>') == "Hello World"

    def test_entities_are_kept(self):
        assert filter_text("a &amp; b") == "a &amp; b"

    def test_plain_text_unchanged(self):
        assert filter_text("Just plain text") == "Just plain text"


# ═══════════════════════════════════════════════════════════════════════════════
# HINT
# ═══════════════════════════════════════════════════════════════════════════════

class TestHintFilter:
    def test_label_and_content(self):
        out = filter_hint("The answer")
        assert "Show Hint" in out
        assert "The answer" in out
        assert "onclick" in out
        assert 'style="display:none"' in out

    def test_state_classes(self):
        out = filter_hint("x")
        assert "hint-hidden" in out
        assert "hint-shown" in out

    def test_empty(self):
        assert filter_hint("") == ""

    def test_deterministic(self):
        assert filter_hint("same") == filter_hint("same")
        assert filter_hint("one") != filter_hint("two")


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE
# ═══════════════════════════════════════════════════════════════════════════════

class TestTypeFilter:
    def test_input(self):
        out = filter_type("answer")
        assert "<input" in out
        assert 'type="text"' in out
        assert 'data-expected="answer"' in out

    def test_escapes_html(self):
        out = filter_type("<script>alert(1)</script>")
        assert "&lt;script&gt;" in out
        assert "<script>" not in out

    def test_escapes_attribute_characters(self):
        out = filter_type("a & b < c > d \"quoted\" 'apostrophe'")
        assert "&amp;" in out
        assert "&lt;" in out
        assert "&gt;" in out
        assert "&quot;" in out
        assert "&#x27;" in out
        assert 'data-expected="a & b' not in out


# ═══════════════════════════════════════════════════════════════════════════════
# FURIGANA / KANJI / KANA
# ═══════════════════════════════════════════════════════════════════════════════

class TestRubyFilters:
    def test_bracket_to_ruby(self):
        assert filter_furigana("日本語[にほんご]") == "<ruby>日本語<rt>にほんご</rt></ruby>"

    def test_text_outside_groups_unchanged(self):
        out = filter_furigana("私は 日本語[にほんご]を 勉強[べんきょう]しています")
        assert out == "私は <ruby>日本語<rt>にほんご</rt></ruby>を <ruby>勉強<rt>べんきょう</rt></ruby>しています"

    def test_existing_ruby_preserved(self):
        ruby = "<ruby>漢字<rt>かんじ</rt></ruby>"
        assert filter_furigana(ruby) == ruby

    def test_no_groups(self):
        assert filter_furigana("plain") == "plain"

    def test_kanji(self):
        assert filter_kanji("漢字[かんじ]") == "漢字"
        assert filter_kanji("<ruby>漢字<rt>かんじ</rt></ruby>") == "漢字"

    def test_kana(self):
        assert filter_kana("漢字[かんじ]") == "かんじ"
        assert filter_kana("<ruby>漢字<rt>かんじ</rt></ruby>") == "かんじ"

    def test_kana_keeps_text_before_group(self):
        assert filter_kana("私は日本語[にほんご]") == "私はにほんご"
        assert filter_kana("私は日本語[にほんご]を勉強[べんきょう]しています") == "私はにほんごをべんきょうしています"

    def test_kanji_keeps_text_before_group(self):
        assert filter_kanji("私は日本語[にほんご]") == "私は日本語"
        assert filter_kanji("私は日本語[にほんご]を勉強[べんきょう]しています") == "私は日本語を勉強しています"

    def test_kanji_kana_ignore_non_han_base(self):
        assert filter_kana("ひらがな[x]") == "ひらがな[x]"
        assert filter_kanji("人々[ひとびと]") == "人々"


# ═══════════════════════════════════════════════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════════════════════════════════════════════

class TestApplyFilter:
    def test_none_passes_raw_html(self):
        assert apply_filter(FilterKind.NONE, "<b>x</b>", "F", _ctx()) == "<b>x</b>"

    def test_text(self):
        assert apply_filter(FilterKind.TEXT, "<b>Bold</b>", "F", _ctx()) == "Bold"

    def test_cloze_uses_context(self):
        value = "{{c1::Paris}} and {{c2::France}}"
        q = apply_filter(FilterKind.CLOZE, value, "Text", _ctx(2, Side.QUESTION))
        assert q == 'Paris and <span class="cloze">[...]</span>'

    def test_every_kind_is_dispatched(self):
        for kind in FilterKind:
            assert isinstance(apply_filter(kind, "v", "F", _ctx()), str)
