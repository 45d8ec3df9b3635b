"""JSON-in / HTML-out operation tests."""
from __future__ import annotations

import json

import pytest

import anki_renderer
from anki_renderer.api import (
    count_cloze_cards,
    parse_fields_json,
    render_card,
    render_cloze_card,
    render_template,
    validate_fields,
    version,
)
from anki_renderer.errors import InputError, ParseError, RenderError, UnterminatedSection


class TestFieldsPayload:
    def test_object_of_strings(self):
        assert parse_fields_json('{"Front": "Q", "Back": "A"}') == {"Front": "Q", "Back": "A"}

    def test_invalid_json(self):
        with pytest.raises(InputError) as exc:
            parse_fields_json("not json")
        assert str(exc.value).startswith("Invalid JSON")

    def test_not_an_object(self):
        with pytest.raises(InputError):
            parse_fields_json('["a", "b"]')

    def test_non_string_value(self):
        with pytest.raises(InputError):
            parse_fields_json('{"Front": 1}')
        with pytest.raises(InputError):
            validate_fields({"Front": None})

    def test_input_error_is_render_error(self):
        with pytest.raises(RenderError):
            parse_fields_json("{")


class TestRenderTemplate:
    def test_field(self):
        assert render_template("Hello {{Name}}!", json.dumps({"Name": "World"})) == "Hello World!"

    def test_missing_field(self):
        assert render_template("Hello {{Name}}!", "{}") == "Hello !"

    def test_conditionals(self):
        template = "{{#Extra}}Has extra: {{Extra}}{{/Extra}}{{^Extra}}No extra{{/Extra}}"
        assert render_template(template, '{"Extra": "Some extra info"}') == "Has extra: Some extra info"
        assert render_template(template, "{}") == "No extra"

    def test_parse_error(self):
        with pytest.raises(UnterminatedSection):
            render_template("{{#Extra}}Has extra", "{}")

    def test_invalid_json(self):
        with pytest.raises(InputError):
            render_template("{{Name}}", "not json")

    def test_unicode(self):
        assert render_template("{{F}}", json.dumps({"F": "日本語 ✓"})) == "日本語 ✓"


class TestRenderClozeCard:
    FIELDS = json.dumps({"Text": "{{c1::Paris}} is the capital of {{c2::France}}"})

    def test_question(self):
        out = render_cloze_card("{{cloze:Text}}", self.FIELDS, 1, True)
        assert "[...]" in out
        assert "France" in out
        assert "Paris" not in out

    def test_answer(self):
        out = render_cloze_card("{{cloze:Text}}", self.FIELDS, 1, False)
        assert '<span class="cloze">Paris</span>' in out
        assert "[...]" not in out

    def test_second_card(self):
        out = render_cloze_card("{{cloze:Text}}", self.FIELDS, 2, True)
        assert out == 'Paris is the capital of <span class="cloze">[...]</span>'

    def test_hint(self):
        fields = json.dumps({"Text": "{{c1::Paris::capital city}} is in France"})
        assert "[capital city]" in render_cloze_card("{{cloze:Text}}", fields, 1, True)

    def test_negative_ordinal(self):
        with pytest.raises(InputError):
            render_cloze_card("{{cloze:Text}}", self.FIELDS, -1, True)


class TestMisc:
    def test_count_cloze_cards(self):
        assert count_cloze_cards("{{c1::a}} {{c2::b}} {{c1::c}}") == 2
        assert count_cloze_cards("no clozes") == 0

    def test_version(self):
        assert version() == "0.1.0"
        assert anki_renderer.__version__ == version()

    def test_render_card(self):
        result = render_card("{{Front}}", "{{FrontSide}}<hr>{{Back}}", '{"Front": "Q", "Back": "A"}')
        assert result.to_dict() == {"question": "Q", "answer": "Q<hr>A"}

    def test_render_card_back_error_side(self):
        with pytest.raises(ParseError) as exc:
            render_card("{{Front}}", "{{Back", "{}")
        assert exc.value.side == "back"

    def test_package_exports(self):
        assert anki_renderer.render_template is render_template
        assert anki_renderer.count_cloze_cards is count_cloze_cards
