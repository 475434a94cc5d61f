"""
Markdown Utilities

Parses the small inline-markup subset that resume text may carry:
**bold** spans and line breaks (real newlines or a literal backslash-n).
"""

import re
from typing import List, NamedTuple

BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
LINE_BREAK_PATTERN = re.compile(r"\n|\\n")


class MarkupSpan(NamedTuple):
    """A run of text from parsed markup. Line breaks are spans with empty text."""

    text: str
    bold: bool = False
    line_break: bool = False


def parse_inline_markup(text: str) -> List[MarkupSpan]:
    """
    Split text into plain, bold, and line-break spans.

    Empty lines between breaks produce no text spans, but the breaks themselves
    are kept so paragraph structure survives.

    Args:
        text: Text possibly containing **bold** markers and newlines

    Returns:
        Ordered list of spans; empty for empty input

    Example:
        >>> parse_inline_markup("Led **5** engineers")
        [MarkupSpan(text='Led ', bold=False, line_break=False),
         MarkupSpan(text='5', bold=True, line_break=False),
         MarkupSpan(text=' engineers', bold=False, line_break=False)]
    """
    if not text:
        return []

    spans: List[MarkupSpan] = []
    for line_number, line in enumerate(LINE_BREAK_PATTERN.split(text)):
        if line_number > 0:
            spans.append(MarkupSpan("", line_break=True))

        last_index = 0
        for match in BOLD_PATTERN.finditer(line):
            if match.start() > last_index:
                spans.append(MarkupSpan(line[last_index:match.start()]))
            spans.append(MarkupSpan(match.group(1), bold=True))
            last_index = match.end()
        if last_index < len(line):
            spans.append(MarkupSpan(line[last_index:]))

    return spans


def strip_inline_markup(text: str) -> str:
    """Remove **bold** markers, keeping the enclosed text."""
    return BOLD_PATTERN.sub(r"\1", text or "")
