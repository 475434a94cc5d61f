"""
Date Formatting Utilities

Formats the loosely-typed date strings found in resume data ("2021-08", "Aug 2021",
"2019", "Present") into one of the template date-format variants.

Month tables are passed in explicitly so callers can supply them from render config;
the English tables below are the defaults.
"""

import re
from typing import Optional, Sequence, Tuple

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

DATE_FORMATS = ("MMM YYYY", "MM/YYYY", "MMMM YYYY", "YYYY")
DEFAULT_DATE_FORMAT = "MMM YYYY"
PRESENT_LABEL = "Present"

_ISO_MONTH = re.compile(r"^(\d{4})-(\d{1,2})(?:-\d{1,2})?(?:[T ].*)?$")
_SLASH_MONTH = re.compile(r"^(\d{1,2})/(\d{4})$")
_YEAR_ONLY = re.compile(r"^(\d{4})$")
_NAMED_MONTH = re.compile(r"^([A-Za-z]+)\.?,?\s+(\d{4})$")


def parse_month_year(
    date_str: str,
    month_names: Sequence[str] = MONTH_NAMES,
    month_abbreviations: Sequence[str] = MONTH_ABBREVIATIONS,
) -> Optional[Tuple[int, Optional[int]]]:
    """
    Parse a resume date string into (year, month).

    Accepts YYYY-MM, YYYY-MM-DD (optionally with a time part), MM/YYYY, YYYY,
    and "Mon YYYY" / "Month YYYY" in the given month tables (case-insensitive).

    Args:
        date_str: Raw date string
        month_names: Full month names, January first
        month_abbreviations: Abbreviated month names, January first

    Returns:
        (year, month) with month 1-12, (year, None) for year-only input,
        or None if the string is not a recognizable date

    Examples:
        >>> parse_month_year("2021-08")
        (2021, 8)
        >>> parse_month_year("Aug 2021")
        (2021, 8)
        >>> parse_month_year("2019")
        (2019, None)
    """
    text = date_str.strip()

    match = _ISO_MONTH.match(text)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        return (year, month) if 1 <= month <= 12 else None

    match = _SLASH_MONTH.match(text)
    if match:
        month, year = int(match.group(1)), int(match.group(2))
        return (year, month) if 1 <= month <= 12 else None

    match = _YEAR_ONLY.match(text)
    if match:
        return int(match.group(1)), None

    match = _NAMED_MONTH.match(text)
    if match:
        word = match.group(1).lower()
        for table in (month_names, month_abbreviations):
            lowered = [name.lower() for name in table]
            if word in lowered:
                return int(match.group(2)), lowered.index(word) + 1

    return None


def format_date(
    date_str: Optional[str],
    date_format: str = DEFAULT_DATE_FORMAT,
    month_names: Sequence[str] = MONTH_NAMES,
    month_abbreviations: Sequence[str] = MONTH_ABBREVIATIONS,
    present_label: str = PRESENT_LABEL,
) -> str:
    """
    Format a single resume date according to a template date format.

    Unrecognized strings are returned stripped but otherwise unchanged, and an
    unknown date_format falls back to "MMM YYYY".

    Examples:
        >>> format_date("2021-08", "MM/YYYY")
        '08/2021'
        >>> format_date("present")
        'Present'
        >>> format_date("Summer 2020")
        'Summer 2020'
    """
    if not date_str or not date_str.strip():
        return ""
    if date_str.strip().lower() == "present":
        return present_label

    parsed = parse_month_year(date_str, month_names, month_abbreviations)
    if parsed is None:
        return date_str.strip()

    year, month = parsed
    if month is None or date_format == "YYYY":
        return str(year)
    if date_format == "MM/YYYY":
        return f"{month:02d}/{year}"
    if date_format == "MMMM YYYY":
        return f"{month_names[month - 1]} {year}"
    return f"{month_abbreviations[month - 1]} {year}"


def format_date_range(
    start: Optional[str],
    end: Optional[str],
    current: bool = False,
    date_format: str = DEFAULT_DATE_FORMAT,
    month_names: Sequence[str] = MONTH_NAMES,
    month_abbreviations: Sequence[str] = MONTH_ABBREVIATIONS,
    present_label: str = PRESENT_LABEL,
    joiner: str = " - ",
) -> str:
    """
    Compose a start/end date pair into one display string.

    "Present" stands in for the end date when `current` is set and no end date
    is given. One-sided ranges render the side that exists; an empty result means
    there is nothing to show.

    Examples:
        >>> format_date_range("2020-01", "", current=True)
        'Jan 2020 - Present'
        >>> format_date_range("2020-01", "2022-03")
        'Jan 2020 - Mar 2022'
        >>> format_date_range("", "2022-03")
        'Mar 2022'
    """
    tables = dict(
        date_format=date_format,
        month_names=month_names,
        month_abbreviations=month_abbreviations,
        present_label=present_label,
    )
    start_text = format_date(start, **tables)
    end_text = format_date(end, **tables)
    if not end_text and current:
        end_text = present_label

    return joiner.join(part for part in (start_text, end_text) if part)
