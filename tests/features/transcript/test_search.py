import types
import pytest
from inflio.features.transcript.domain.models import Segment
from inflio.features.transcript.service.search import (
    highlight_matches,
    iter_matches,
    search_segments,
    search_with_matches,
)

@pytest.fixture
def segments():
    return [
        Segment(id="1", start=0.0, end=2.0, text="Hello world"),
        Segment(id="2", start=2.0, end=4.0, text="Goodbye"),
        Segment(id="3", start=4.0, end=6.0, text="HELLO again"),
    ]

def test_search_is_case_insensitive_and_ordered(segments):
    lower = search_segments(segments, "hello")
    upper = search_segments(segments, "HELLO")

    assert [s.id for s in lower] == ["1", "3"]
    assert lower == upper

def test_empty_query_returns_full_sequence(segments):
    result = search_segments(segments, "")
    assert result == segments
    assert [s.id for s in result] == ["1", "2", "3"]

def test_substring_not_token_match(segments):
    assert [s.id for s in search_segments(segments, "bye")] == ["2"]
    assert [s.id for s in search_segments(segments, "o a")] == ["3"]

def test_no_match_returns_empty_list(segments):
    assert search_segments(segments, "transcript") == []

def test_iter_matches_is_lazy(segments):
    gen = iter_matches(segments, "hello")
    assert isinstance(gen, types.GeneratorType)
    assert next(gen).id == "1"

def test_search_with_matches_carries_text(segments):
    matches = search_with_matches(segments, "again")
    assert len(matches) == 1
    assert matches[0].segment is segments[2]
    assert matches[0].matched_text == "HELLO again"

def test_highlight_wraps_every_occurrence():
    text = "Hello there, hello again"
    assert highlight_matches(text, "hello") == "<mark>Hello</mark> there, <mark>hello</mark> again"

def test_highlight_escapes_regex_characters():
    text = "Costs (approx.) $5"
    assert highlight_matches(text, "(approx.)", "[{}]") == "Costs [(approx.)] $5"
    assert highlight_matches(text, "") == text

def test_filter_and_highlight_agree_on_case_folding():
    segments = [
        Segment(id="1", start=0.0, end=1.0, text="Die Straße ist lang"),
        Segment(id="2", start=1.0, end=2.0, text="STRASSE gesperrt"),
    ]
    for query in ("STRASSE", "straße"):
        hits = search_segments(segments, query)
        assert hits
        assert all("<mark>" in highlight_matches(s.text, query) for s in hits)
