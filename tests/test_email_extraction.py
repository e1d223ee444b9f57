"""Tests for the email strategy cascade."""

from resume_import.core.contact_extractor import (
    EMAIL_STRATEGIES,
    email_from_contact_section,
    extract_email,
)
from resume_import.core.section_segmenter import segment


def test_first_global_match():
    result = extract_email(segment("Jane Doe\na.b@example.com\nalt: other@example.org"))
    assert result.value == "a.b@example.com"
    assert result.strategy == "global_scan"


def test_global_scan_beats_contact_section():
    doc = segment("Jane Doe\nfirst@example.com\n\nContact\nsecond@example.com")
    result = extract_email(doc)
    assert result.value == "first@example.com"
    assert result.strategy == "global_scan"


def test_contact_section_strategy():
    doc = segment("Jane Doe\n\nContact Details\nReach me at jane_doe+cv@mail.example.co.uk")
    assert email_from_contact_section(doc) == "jane_doe+cv@mail.example.co.uk"


def test_contact_section_strategy_without_section():
    assert email_from_contact_section(segment("jane@example.com")) is None


def test_strategy_order():
    assert [name for name, _ in EMAIL_STRATEGIES] == ["global_scan", "contact_section"]


def test_missing_email():
    result = extract_email(segment("Jane Doe\nPhone: 555 0100\nhandle @janedoe"))
    assert not result.found
