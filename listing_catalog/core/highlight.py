import re
from typing import List, NamedTuple


class Segment(NamedTuple):
    text: str
    matched: bool


def mark(text, query) -> List[Segment]:
    """
    Splits text into matched and unmatched runs for the given query.

    The query is matched literally and case-insensitively, every
    non-overlapping occurrence is marked, and joining the segments
    always gives back the original text.
    """
    if not isinstance(text, str) or not text:
        return []
    if not isinstance(query, str) or not query.strip():
        return [Segment(text, False)]

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    segments = []
    cursor = 0
    for match in pattern.finditer(text):
        start, end = match.span()
        if start > cursor:
            segments.append(Segment(text[cursor:start], False))
        segments.append(Segment(text[start:end], True))
        cursor = end
    if cursor < len(text):
        segments.append(Segment(text[cursor:], False))
    return segments


def render(text, query, open_marker: str = "[", close_marker: str = "]") -> str:
    return "".join(
        f"{open_marker}{s.text}{close_marker}" if s.matched else s.text
        for s in mark(text, query)
    )
