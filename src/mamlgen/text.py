"""Text shaping shared by every textual help field."""

import re

_LINE_BREAK = re.compile(r"\r\n|\n")


def to_paragraphs(text: str | None) -> list[str]:
    """Split text into paragraphs.

    Splits on "\\r\\n" or "\\n" and strips each line. Empty lines are kept as
    empty paragraphs, so None and "" both give [""].

    Example:
        >>> to_paragraphs("  First line\\r\\n\\n Second line ")
        ['First line', '', 'Second line']
    """
    if text is None:
        text = ""
    return [line.strip() for line in _LINE_BREAK.split(text)]
