"""Unit tests for display-text coercion, inline markup and export naming."""

import pytest

from folio.utils.markdown import MarkupSpan, parse_inline_markup, strip_inline_markup
from folio.utils.naming import document_title, export_filename
from folio.utils.text_processing import humanize_key, non_empty_strings, to_display_text, to_flag


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("Austin, TX", "Austin, TX"),
        (3.8, "3.8"),
        (2020, "2020"),
        (True, "true"),
        (["Python", "", "  ", "Go"], "Python, Go"),
        ({"city": "Austin"}, ""),
        (object(), ""),
    ],
)
def test_to_display_text(value, expected):
    assert to_display_text(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, default, expected",
    [
        (True, False, True),
        ("false", True, False),
        (" OFF ", True, False),
        ("Yes", False, True),
        (0, True, False),
        (2.5, False, True),
        (None, True, True),
        ("", False, False),
        ("sometimes", True, True),
        ([], False, False),
    ],
)
def test_to_flag(value, default, expected):
    assert to_flag(value, default) is expected


@pytest.mark.unit
def test_non_empty_strings_drops_blank_and_object_values():
    assert non_empty_strings(["Python", "", None, {"a": 1}, 3, "  "]) == ["Python", "3"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "key, expected",
    [
        ("languages", "Languages"),
        ("cloudPlatforms", "Cloud Platforms"),
        ("security_compliance", "Security Compliance"),
        ("AWS", "AWS"),
    ],
)
def test_humanize_key(key, expected):
    assert humanize_key(key) == expected


@pytest.mark.unit
def test_parse_plain_text():
    assert parse_inline_markup("Mentored four engineers") == [MarkupSpan("Mentored four engineers")]


@pytest.mark.unit
def test_parse_bold_spans():
    spans = parse_inline_markup("Cut latency by **40%** overall")

    assert [s.text for s in spans] == ["Cut latency by ", "40%", " overall"]
    assert [s.bold for s in spans] == [False, True, False]


@pytest.mark.unit
def test_parse_real_and_escaped_line_breaks():
    real = parse_inline_markup("one\ntwo")
    escaped = parse_inline_markup("one\\ntwo")

    assert real == escaped
    assert [s.line_break for s in real] == [False, True, False]
    assert real[1].text == ""


@pytest.mark.unit
def test_parse_empty_input():
    assert parse_inline_markup("") == []


@pytest.mark.unit
def test_unclosed_bold_is_literal():
    spans = parse_inline_markup("**unclosed")
    assert spans == [MarkupSpan("**unclosed")]


@pytest.mark.unit
def test_strip_inline_markup():
    assert strip_inline_markup("**Languages**: Python") == "Languages: Python"
    assert strip_inline_markup(None) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, extension, expected",
    [
        ("Jane Doe", "pdf", "Jane_Doe_Resume.pdf"),
        ("Jane  Q.  Doe", "docx", "Jane_Q._Doe_Resume.docx"),
        ('Jane: "JD" Doe/Smith', "pdf", "Jane_JD_DoeSmith_Resume.pdf"),
        ("", "pdf", "Resume.pdf"),
        (None, ".html", "Resume.html"),
        ("***", "pdf", "Resume.pdf"),
    ],
)
def test_export_filename(name, extension, expected):
    assert export_filename(name, extension) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [("Jane Doe", "Jane Doe Resume"), ("Jane  Q.  Doe", "Jane Q. Doe Resume"), ("", "Resume"), (None, "Resume")],
)
def test_document_title(name, expected):
    assert document_title(name) == expected
