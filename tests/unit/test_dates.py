"""Unit tests for résumé date parsing and formatting."""

import pytest

from folio.utils.dates import format_date, format_date_range, parse_month_year


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2021-08", (2021, 8)),
        ("2021-08-15", (2021, 8)),
        ("2021-08-15T00:00:00Z", (2021, 8)),
        ("08/2021", (2021, 8)),
        ("Aug 2021", (2021, 8)),
        ("august 2021", (2021, 8)),
        ("Sept. 2021", None),
        ("2019", (2019, None)),
        ("2021-13", None),
        ("Summer 2020", None),
    ],
)
def test_parse_month_year(raw, expected):
    assert parse_month_year(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "date_format, expected",
    [
        ("MMM YYYY", "Aug 2021"),
        ("MM/YYYY", "08/2021"),
        ("MMMM YYYY", "August 2021"),
        ("YYYY", "2021"),
        ("not-a-format", "Aug 2021"),
    ],
)
def test_format_date_variants(date_format, expected):
    assert format_date("2021-08", date_format) == expected


@pytest.mark.unit
def test_format_date_passes_unrecognized_text_through():
    assert format_date("  Summer 2020 ") == "Summer 2020"


@pytest.mark.unit
def test_format_date_present_and_blank():
    assert format_date("present") == "Present"
    assert format_date("") == ""
    assert format_date(None) == ""
    assert format_date("   ") == ""


@pytest.mark.unit
def test_year_only_ignores_month_format():
    assert format_date("2019", "MMMM YYYY") == "2019"


@pytest.mark.unit
def test_format_date_uses_given_month_tables():
    names = ["Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
             "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre"]
    abbreviations = [name[:3] for name in names]

    assert format_date("2021-08", "MMMM YYYY", month_names=names, month_abbreviations=abbreviations) == "Agosto 2021"
    assert format_date("Ago 2021", "MM/YYYY", month_names=names, month_abbreviations=abbreviations) == "08/2021"


@pytest.mark.unit
def test_date_range_current_without_end():
    assert format_date_range("2020-01", "", current=True) == "Jan 2020 - Present"


@pytest.mark.unit
def test_date_range_end_date_wins_over_current():
    assert format_date_range("2020-01", "2022-03", current=True) == "Jan 2020 - Mar 2022"


@pytest.mark.unit
def test_date_range_one_sided_and_empty():
    assert format_date_range("", "2022-03") == "Mar 2022"
    assert format_date_range("2020-01", "") == "Jan 2020"
    assert format_date_range("", "") == ""
    assert format_date_range(None, None, current=True) == "Present"


@pytest.mark.unit
def test_date_range_custom_joiner():
    assert format_date_range("2020", "2021", joiner=" – ") == "2020 – 2021"
