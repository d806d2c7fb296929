from docsearch.domains.documents.highlight import HighlightSegment, highlight


def _pairs(segments):
    return [(s.text, s.matched) for s in segments]


def test_empty_query_returns_whole_text_unmatched():
    assert highlight("The Quick Fox", "") == [HighlightSegment("The Quick Fox", False)]


def test_case_insensitive_match_keeps_original_casing():
    assert _pairs(highlight("The Quick Fox", "quick")) == [
        ("The ", False),
        ("Quick", True),
        (" Fox", False),
    ]


def test_pattern_characters_are_matched_literally():
    segments = highlight("cost: $5 (tax incl.)", "(tax")
    assert _pairs(segments) == [
        ("cost: $5 ", False),
        ("(tax", True),
        (" incl.)", False),
    ]


def test_regex_metacharacters_do_not_match_as_patterns():
    assert _pairs(highlight("a.b axb", ".")) == [("a", False), (".", True), ("b axb", False)]
    assert _pairs(highlight("price [1]", "[")) == [("price ", False), ("[", True), ("1]", False)]


def test_multiple_occurrences_and_edges():
    assert _pairs(highlight("abcABCabc", "abc")) == [
        ("abc", True),
        ("ABC", True),
        ("abc", True),
    ]


def test_no_match_returns_single_unmatched_segment():
    assert _pairs(highlight("Nothing here", "zzz")) == [("Nothing here", False)]


def test_empty_text():
    assert highlight("", "query") == []
    assert highlight("", "") == [HighlightSegment("", False)]


def test_segments_rebuild_the_original_text():
    text = "Meeting notes: meeting moved, MEETING room 4"
    assert "".join(s.text for s in highlight(text, "meeting")) == text
