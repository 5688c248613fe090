"""
Tests for text_compare.highlight - inline correction markers.

Test Areas:
1. Eligibility filtering and index preservation
2. Literal, case-insensitive matching
3. Placement rules (first occurrence, once per correction, no overlap)
4. Marker attributes and CSS classes
5. Empty and no-op inputs
"""

import pytest
from bs4 import BeautifulSoup

from text_compare import (
    CorrectionRecord,
    CorrectionType,
    Document,
    IndexedCorrection,
    correction_badge_classes,
    correction_type_classes,
    eligible_corrections,
    find_literal,
    find_matches,
    highlight_corrections,
    highlight_corrections_in_html,
)
from text_compare.highlight import (
    ATTR_EXPLANATION,
    ATTR_INDEX,
    ATTR_ORIGINAL,
    ATTR_TYPE,
    BASE_HIGHLIGHT_CLASSES,
    NEUTRAL_BADGE_CLASSES,
)


def _correction(correction, kind="grammar", original="", explanation=""):
    return {
        "original": original,
        "correction": correction,
        "explanation": explanation,
        "type": kind,
        "examples": [],
    }


def _markers(html):
    return BeautifulSoup(html, "html.parser").find_all("span", attrs={ATTR_INDEX: True})


# ============================================================================
# Eligibility
# ============================================================================

class TestEligibleCorrections:

    def test_filters_and_keeps_original_indices(self):
        corrections = [
            _correction("   "),
            _correction("cats", kind="style"),
            _correction("many", kind="tone"),
            "not a mapping",
            _correction("There"),
        ]
        indexed = eligible_corrections(corrections)
        assert [c.index for c in indexed] == [2, 4]
        assert indexed[0].record.replacement_fragment == "many"

    def test_none_and_empty(self):
        assert eligible_corrections(None) == []
        assert eligible_corrections([]) == []

    def test_accepts_records(self):
        record = CorrectionRecord("Their", "There", "why", "grammar")
        assert eligible_corrections([record]) == [IndexedCorrection(0, record)]

    def test_non_string_fields_are_ineligible(self):
        assert eligible_corrections([{"correction": 42, "type": "grammar"}]) == []

    @pytest.mark.parametrize("kind", [t.value for t in CorrectionType])
    def test_every_known_category_is_eligible(self, kind):
        assert len(eligible_corrections([_correction("x", kind=kind)])) == 1


# ============================================================================
# Matching
# ============================================================================

class TestFindLiteral:

    def test_case_insensitive(self):
        assert find_literal("Hello THERE", "there") == 6

    def test_special_characters_are_literal(self):
        assert find_literal("axb a.b", "a.b") == 4
        assert find_literal("costs $5.00 (approx)", "$5.00 (approx)") == 6
        assert find_literal("a+b", "a+") == 0

    def test_start_offset(self):
        assert find_literal("cat cat", "cat", 1) == 4

    def test_missing_and_empty(self):
        assert find_literal("abc", "z") == -1
        assert find_literal("abc", "") == -1

    def test_length_changing_case_fold(self):
        # "İ".lower() is two code points long
        assert find_literal("İ ok", "ok") == 2


class TestFindMatches:

    def test_sorted_by_start(self):
        indexed = eligible_corrections([_correction("cats"), _correction("many")])
        matches = find_matches("many cats", indexed)
        assert [(m.start, m.end, m.correction.index) for m in matches] == [(0, 4, 1), (5, 9, 0)]

    def test_overlap_moves_to_next_occurrence(self):
        indexed = eligible_corrections([_correction("many cats"), _correction("cats")])
        matches = find_matches("many cats and cats", indexed)
        assert [(m.start, m.end, m.correction.index) for m in matches] == [(0, 9, 0), (14, 18, 1)]

    def test_overlap_without_later_occurrence_is_not_placed(self):
        indexed = eligible_corrections([_correction("many cats"), _correction("cats")])
        matches = find_matches("many cats", indexed)
        assert [m.correction.index for m in matches] == [0]

    def test_duplicate_replacement_text_takes_distinct_occurrences(self):
        indexed = eligible_corrections([_correction("the"), _correction("the")])
        matches = find_matches("the cat and the dog", indexed)
        assert [(m.start, m.correction.index) for m in matches] == [(0, 0), (12, 1)]


# ============================================================================
# highlight_corrections
# ============================================================================

class TestHighlightCorrections:

    def test_cats_sentence(self, cats_rewritten_html, cats_corrections):
        html = highlight_corrections_in_html(cats_rewritten_html, cats_corrections)
        markers = _markers(html)

        assert [m.get_text() for m in markers] == ["There", "too"]
        assert [m[ATTR_INDEX] for m in markers] == ["0", "1"]
        assert all(m[ATTR_TYPE] == "grammar" for m in markers)
        assert markers[0][ATTR_ORIGINAL] == "Their"
        assert markers[1][ATTR_ORIGINAL] == "to"
        assert BeautifulSoup(html, "html.parser").get_text() == "There are too many cats."

    def test_text_is_preserved(self):
        html = "<p>Hello <b>big</b> world, said the <i>big</i> cat.</p>"
        result = highlight_corrections(html, [_correction("big"), _correction("cat")])
        assert result.text == Document(html).text

    def test_first_occurrence_across_nested_markup(self):
        html = "<p>Hello <b>world</b> again, world</p>"
        markers = _markers(highlight_corrections_in_html(html, [_correction("world")]))
        assert len(markers) == 1
        assert markers[0].parent.name == "b"

    def test_each_correction_is_placed_once(self):
        html = "<p>cat</p><p>cat</p>"
        result = BeautifulSoup(highlight_corrections_in_html(html, [_correction("cat")]), "html.parser")
        paragraphs = result.find_all("p")
        assert paragraphs[0].span is not None
        assert paragraphs[1].span is None

    def test_same_replacement_in_different_leaves(self):
        html = "<p>the cat</p><p>the dog</p>"
        markers = _markers(highlight_corrections_in_html(html, [_correction("the"), _correction("the")]))
        assert [m[ATTR_INDEX] for m in markers] == ["0", "1"]
        assert [m.parent.get_text() for m in markers] == ["the cat", "the dog"]

    def test_markers_never_overlap(self):
        html = "<p>many cats and cats</p>"
        markers = _markers(
            highlight_corrections_in_html(html, [_correction("many cats"), _correction("cats")])
        )
        assert [m.get_text() for m in markers] == ["many cats", "cats"]
        assert all(m.find("span") is None for m in markers)

    def test_ineligible_entries_keep_list_positions(self):
        html = "<p>There are too many cats.</p>"
        corrections = [
            _correction(""),
            _correction("cats", kind="unknown"),
            _correction("many", kind="tone"),
        ]
        markers = _markers(highlight_corrections_in_html(html, corrections))
        assert [(m.get_text(), m[ATTR_INDEX], m[ATTR_TYPE]) for m in markers] == [("many", "2", "tone")]

    def test_case_insensitive_match_keeps_document_casing(self):
        markers = _markers(highlight_corrections_in_html("<p>THERE it is</p>", [_correction("there")]))
        assert markers[0].get_text() == "THERE"

    def test_special_characters(self):
        html = "<p>It costs $5.00 (approx) today.</p>"
        markers = _markers(highlight_corrections_in_html(html, [_correction("$5.00 (approx)")]))
        assert [m.get_text() for m in markers] == ["$5.00 (approx)"]

    def test_entities_match_decoded_text(self):
        html = "<p>Tom &amp; Jerry</p>"
        result = highlight_corrections_in_html(html, [_correction("Tom & Jerry")])
        assert [m.get_text() for m in _markers(result)] == ["Tom & Jerry"]
        assert "&amp;" in result

    def test_attributes_are_escaped(self):
        explanation = 'Use "there" <not> their & co.'
        html = highlight_corrections_in_html(
            "<p>There</p>",
            [_correction("There", original="Their", explanation=explanation)],
        )
        marker = _markers(html)[0]
        assert marker[ATTR_EXPLANATION] == explanation

    def test_script_content_is_never_decorated(self):
        html = "<script>var cats = 1;</script><p>cats</p>"
        result = BeautifulSoup(highlight_corrections_in_html(html, [_correction("cats")]), "html.parser")
        assert result.script.string == "var cats = 1;"
        assert result.p.span.get_text() == "cats"

    def test_nothing_placed_returns_same_document(self):
        doc = Document.from_html("<p>There are too many cats.</p>")
        assert highlight_corrections(doc, [_correction("dogs")]) is doc
        assert highlight_corrections(doc, []) is doc
        assert highlight_corrections(doc, None) is doc

    def test_input_document_is_not_modified(self, cats_rewritten_html, cats_corrections):
        doc = Document.from_html(cats_rewritten_html)
        result = highlight_corrections(doc, cats_corrections)
        assert result is not doc
        assert doc.html == cats_rewritten_html

    def test_accepts_records(self):
        record = CorrectionRecord("colour", "color", "American spelling", "spelling")
        markers = _markers(highlight_corrections_in_html("<p>A nice color.</p>", [record]))
        assert markers[0][ATTR_TYPE] == "spelling"

    def test_empty_html(self, cats_corrections):
        assert highlight_corrections_in_html("", cats_corrections) == ""
        assert highlight_corrections(Document(), cats_corrections).is_empty


# ============================================================================
# CSS classes
# ============================================================================

class TestClasses:

    def test_marker_class_includes_base_and_category(self):
        classes = correction_type_classes("spelling")
        assert classes.startswith(BASE_HIGHLIGHT_CLASSES)
        assert "decoration-wavy" in classes

    def test_unknown_category_gets_base_only(self):
        assert correction_type_classes("unknown") == BASE_HIGHLIGHT_CLASSES

    def test_badge_classes(self):
        assert correction_badge_classes("tone") == "bg-amber-100 text-amber-700"
        assert correction_badge_classes("unknown") == NEUTRAL_BADGE_CLASSES

    def test_marker_carries_category_class(self, cats_rewritten_html, cats_corrections):
        marker = _markers(highlight_corrections_in_html(cats_rewritten_html, cats_corrections))[0]
        assert "correction-highlight" in marker["class"]
        assert "border-royal-500" in marker["class"]
