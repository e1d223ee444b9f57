"""Tests for the name strategy cascade."""

from resume_import.core.contact_extractor import (
    extract_name,
    name_from_contact_section,
    name_from_header,
    name_from_label,
    name_strategies,
)
from resume_import.core.section_segmenter import segment
from resume_import.core.text_normalization import normalize_pages


def _doc(text):
    return segment(normalize_pages([text]))


def test_strategy_order():
    assert [name for name, _ in name_strategies()] == [
        "explicit_label", "header_line", "contact_section", "line_start",
    ]


def test_explicit_label_wins_over_header():
    result = extract_name(_doc("Jane Q Public\nName:   John Smith  \njohn@example.com"))
    assert result.value == "John Smith"
    assert result.strategy == "explicit_label"


def test_full_name_label():
    assert name_from_label(_doc("Full Name: Mary Ann Lee\nPhone: 555 0100")) == "Mary Ann Lee"


def test_label_must_start_the_line():
    assert name_from_label(_doc("Company Name: Acme Corp\nJane Doe")) is None
    result = extract_name(_doc("Company Name: Acme Corp\nJane Doe\njane@example.com"))
    assert result.value == "Jane Doe"


def test_empty_label_falls_through():
    result = extract_name(_doc("Name:\nJane Doe"))
    assert result.value == "Jane Doe"
    assert result.strategy == "header_line"


def test_header_line():
    result = extract_name(_doc("Jane Doe\njane@example.com"))
    assert result.value == "Jane Doe"
    assert result.strategy == "header_line"


def test_header_line_within_first_five_lines():
    text = "RESUME 2024\ncurriculum vitae\nlorem\n+1 555 0100\nMary Ann Smith\njane@example.com"
    assert extract_name(_doc(text)).value == "Mary Ann Smith"


def test_header_skips_section_headings():
    result = extract_name(_doc("Contact Information\nJane Doe\njane@example.com"))
    assert result.value == "Jane Doe"
    assert result.strategy == "header_line"


def test_header_ignores_sixth_line():
    doc = _doc("one\ntwo\nthree\nfour\nfive\nJane Doe")
    assert name_from_header(doc) is None
    assert name_from_header(doc, scan_lines=6) == "Jane Doe"


def test_header_length_bounds():
    long_line = "Aaaaaaaaaaaaaaaaaaaa Bbbbbbbbbbbbbbbbbbbbb Cccccccccccccc"
    assert len(long_line) > 50
    result = extract_name(_doc(long_line))
    assert result.strategy == "line_start"
    assert result.value == "Aaaaaaaaaaaaaaaaaaaa Bbbbbbbbbbbbbbbbbbbbb"


def test_contact_section_strategy():
    text = (
        "résumé\nphone 555\nportfolio online\nupdated daily\nopen to work\n"
        "Contact\nemail me, Jane Doe here"
    )
    result = extract_name(_doc(text))
    assert result.value == "Jane Doe"
    assert result.strategy == "contact_section"


def test_contact_section_absent():
    assert name_from_contact_section(_doc("jane doe")) is None


def test_line_start_fallback():
    text = "one\ntwo\nthree\nfour\nfive\nsix\nAlex Morgan leads teams"
    result = extract_name(_doc(text))
    assert result.value == "Alex Morgan"
    assert result.strategy == "line_start"


def test_missing_name():
    result = extract_name(_doc("lorem ipsum\ndolor sit amet"))
    assert not result.found
    assert result.value is None
    assert result.strategy is None
