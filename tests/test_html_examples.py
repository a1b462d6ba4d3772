"""End-to-end conversions: source text to HTML fragments."""

from __future__ import annotations

import pytest

import caretsup
from caretsup.markdown import Markdown

CASES = [
    ("x^2^", "<p>x<sup>2</sup></p>\n"),
    ("a^2^ + b^2^ = c^2^", "<p>a<sup>2</sup> + b<sup>2</sup> = c<sup>2</sup></p>\n"),
    ("x = y^6^ + z^n+1^", "<p>x = y<sup>6</sup> + z<sup>n+1</sup></p>\n"),
    ("a^2!^, b^2,1^, c^n+1^", "<p>a<sup>2!</sup>, b<sup>2,1</sup>, c<sup>n+1</sup></p>\n"),
    ("a^2 + b^2 = c^2", "<p>a^2 + b^2 = c^2</p>\n"),
    ("a^2 ^ + b^ 2^ = c^ 2 ^", "<p>a^2 ^ + b^ 2^ = c^ 2 ^</p>\n"),
    ("a^2 a^ + b^b2^ = c^2 foo^", "<p>a^2 a^ + b<sup>b2</sup> = c^2 foo^</p>\n"),
    (
        "a^2^2^^ + b^2^ = c^2^",
        "<p>a<sup>2</sup>2^^ + b<sup>2</sup> = c<sup>2</sup></p>\n",
    ),
    (
        "a^2^^2^ + b^2^ = c^2^",
        "<p>a<sup>2</sup><sup>2</sup> + b<sup>2</sup> = c<sup>2</sup></p>\n",
    ),
    ("a^2^2^^", "<p>a<sup>2</sup>2^^</p>\n"),
    ("a^2^^2^", "<p>a<sup>2</sup><sup>2</sup></p>\n"),
    ("^2^", "<p>^2^</p>\n"),
    ("x ^2^", "<p>x ^2^</p>\n"),
    ("x^^2^", "<p>x^<sup>2</sup></p>\n"),
    ("x^2", "<p>x^2</p>\n"),
    ("Hi, Albert![^1^]", "<p>Hi, Albert![<sup>1</sup>]</p>\n"),
    ("a~2^2^~", "<p>a~2<sup>2</sup>~</p>\n"),
    ("a^2~2~^", "<p>a<sup>2~2~</sup></p>\n"),
]


class TestConversions:
    @pytest.mark.parametrize(("source", "expected"), CASES, ids=[c[0] for c in CASES])
    def test_case(self, convert, source: str, expected: str) -> None:
        assert convert(source) == expected


class TestFootnoteSyntax:
    def test_reference_and_definition_left_alone(self, convert) -> None:
        source = "Hi, Bob![^1]\n[^1]: Close the airlock before removing your helmet!"
        assert convert(source) == (
            "<p>Hi, Bob![^1]\n[^1]: Close the airlock before removing your helmet!</p>\n"
        )

    def test_superscript_in_definition_text(self, convert) -> None:
        source = "Hi, Albert![^1]\n[^1]: E=mc^2^ is a famous equation."
        assert convert(source) == (
            "<p>Hi, Albert![^1]\n[^1]: E=mc<sup>2</sup> is a famous equation.</p>\n"
        )


class TestEscaping:
    def test_markup_in_content_is_escaped(self, convert) -> None:
        assert convert("a<b^x&y^") == "<p>a&lt;b<sup>x&amp;y</sup></p>\n"

    def test_angle_brackets_in_content(self, convert) -> None:
        assert convert("x^<i>^") == "<p>x<sup>&lt;i&gt;</sup></p>\n"

    def test_non_ascii_content(self, convert) -> None:
        assert convert("x^é^") == "<p>x<sup>&#xE9;</sup></p>\n"

    def test_entities_inside_superscript(self, convert) -> None:
        assert convert("a^2&times;n^, b^2&#x1f604;^, c^&#x215f;n^") == (
            "<p>a<sup>2&#xD7;n</sup>, b<sup>2&#x1F604;</sup>, c<sup>&#x215F;n</sup></p>\n"
        )

    def test_decimal_reference(self, convert) -> None:
        assert convert("x^&#178;^") == "<p>x<sup>&#xB2;</sup></p>\n"

    def test_escaped_markup_stays_escaped(self, convert) -> None:
        assert convert("x^&lt;i&gt;^") == "<p>x<sup>&lt;i&gt;</sup></p>\n"

    def test_unknown_entity_kept_literal(self, convert) -> None:
        assert convert("x^&bogus;^ and &notit;") == (
            "<p>x<sup>&amp;bogus;</sup> and &amp;notit;</p>\n"
        )

    def test_bare_ampersand(self, convert) -> None:
        assert convert("AT&T^1^") == "<p>AT&amp;T<sup>1</sup></p>\n"


class TestDocuments:
    def test_paragraphs(self, convert) -> None:
        assert convert("a^1^\n\nb^2^\n") == "<p>a<sup>1</sup></p>\n<p>b<sup>2</sup></p>\n"

    def test_multiline_paragraph(self, convert) -> None:
        assert convert("E=mc^2^\nis famous") == "<p>E=mc<sup>2</sup>\nis famous</p>\n"

    def test_caret_at_start_of_second_line(self, convert) -> None:
        assert convert("a\n^2^ b") == "<p>a\n^2^ b</p>\n"

    def test_empty(self, convert) -> None:
        assert convert("") == ""


class TestWithoutExtension:
    def test_carets_stay_literal(self) -> None:
        assert Markdown().convert("x^2^") == "<p>x^2^</p>\n"

    def test_package_convert(self) -> None:
        assert caretsup.convert("x^2^") == "<p>x<sup>2</sup></p>\n"
        assert caretsup.convert("x^2^", superscript=False) == "<p>x^2^</p>\n"
