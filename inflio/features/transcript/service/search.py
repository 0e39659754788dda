# File: inflio/features/transcript/service/search.py
import re
from typing import Iterator, List, Sequence

from ..domain.models import SearchMatch, Segment


def _query_pattern(query: str) -> "re.Pattern[str]":
    # One folding rule for filtering and highlighting
    return re.compile(re.escape(query), re.IGNORECASE)


def iter_matches(segments: Sequence[Segment], query: str) -> Iterator[Segment]:
    """Lazily yields segments whose text contains `query`, ignoring case."""
    if not query:
        yield from segments
        return

    pattern = _query_pattern(query)
    for segment in segments:
        if pattern.search(segment.text):
            yield segment


def search_segments(segments: Sequence[Segment], query: str) -> List[Segment]:
    """
    Filters segments for the transcript search box.
    An empty query returns every segment, in original order.
    """
    return list(iter_matches(segments, query))


def search_with_matches(segments: Sequence[Segment], query: str) -> List[SearchMatch]:
    return [SearchMatch(segment=s, matched_text=s.text) for s in iter_matches(segments, query)]


def highlight_matches(text: str, query: str, template: str = "<mark>{}</mark>") -> str:
    """Wraps every case-insensitive occurrence of `query` in `template`."""
    if not query:
        return text
    return _query_pattern(query).sub(lambda m: template.format(m.group(0)), text)
