"""
Tests for text_compare.diff - word-level LCS diff.

Test Areas:
1. Tokenization
2. LCS table and backtracking
3. Segment merging
4. compute_diff on documents (case folding, empty sides, tie-breaks)
"""

import pytest

from text_compare import (
    DiffKind,
    DiffResult,
    DiffSegment,
    Document,
    backtrack_lcs,
    compute_diff,
    compute_lcs_table,
    merge_segments,
    tokenize,
)


def _pairs(segments):
    return [(segment.text, segment.kind) for segment in segments]


# ============================================================================
# Tokenization
# ============================================================================

class TestTokenize:

    def test_keeps_whitespace_tokens(self):
        assert tokenize("Hello  big\nworld") == ["Hello", "  ", "big", "\n", "world"]

    def test_join_reproduces_input(self):
        text = " leading and trailing \t"
        assert "".join(tokenize(text)) == text

    def test_empty_string_has_no_tokens(self):
        assert tokenize("") == []

    def test_punctuation_stays_attached(self):
        assert tokenize("cats. dogs,") == ["cats.", " ", "dogs,"]


# ============================================================================
# LCS table / backtracking
# ============================================================================

class TestLcsTable:

    def test_table_dimensions(self):
        table = compute_lcs_table(["a", " ", "b"], ["a"])
        assert len(table) == 4
        assert all(len(row) == 2 for row in table)

    def test_case_insensitive_length(self):
        table = compute_lcs_table(["Hello", " ", "World"], ["hello", " ", "WORLD"])
        assert table[3][3] == 3

    def test_disjoint_sequences(self):
        table = compute_lcs_table(["x"], ["y"])
        assert table[1][1] == 0


class TestBacktrack:

    def test_identical_sequences_are_unchanged(self):
        tokens = ["a", " ", "b"]
        table = compute_lcs_table(tokens, tokens)
        left, right = backtrack_lcs(table, tokens, tokens)
        assert [s.kind for s in left] == [DiffKind.UNCHANGED] * 3
        assert [s.kind for s in right] == [DiffKind.UNCHANGED] * 3

    def test_unchanged_tokens_keep_each_sides_casing(self):
        a, b = ["Hello"], ["HELLO"]
        left, right = backtrack_lcs(compute_lcs_table(a, b), a, b)
        assert _pairs(left) == [("Hello", DiffKind.UNCHANGED)]
        assert _pairs(right) == [("HELLO", DiffKind.UNCHANGED)]


# ============================================================================
# Merging
# ============================================================================

class TestMergeSegments:

    def test_adjacent_same_kind_are_merged(self):
        segments = [
            DiffSegment("a", DiffKind.UNCHANGED),
            DiffSegment(" ", DiffKind.UNCHANGED),
            DiffSegment("b", DiffKind.REMOVED),
            DiffSegment(" ", DiffKind.REMOVED),
            DiffSegment("c", DiffKind.UNCHANGED),
        ]
        assert _pairs(merge_segments(segments)) == [
            ("a ", DiffKind.UNCHANGED),
            ("b ", DiffKind.REMOVED),
            ("c", DiffKind.UNCHANGED),
        ]

    def test_empty_input(self):
        assert merge_segments([]) == []


# ============================================================================
# compute_diff
# ============================================================================

class TestComputeDiff:

    def test_cats_sentence(self, cats_original_html, cats_rewritten_html):
        result = compute_diff(cats_original_html, cats_rewritten_html)

        assert _pairs(result.original_segments) == [
            ("Their", DiffKind.REMOVED),
            (" are ", DiffKind.UNCHANGED),
            ("to", DiffKind.REMOVED),
            (" many cats.", DiffKind.UNCHANGED),
        ]
        assert _pairs(result.corrected_segments) == [
            ("There", DiffKind.ADDED),
            (" are ", DiffKind.UNCHANGED),
            ("too", DiffKind.ADDED),
            (" many cats.", DiffKind.UNCHANGED),
        ]
        assert result.removed_count == 2
        assert result.added_count == 2
        assert result.has_changes

    def test_capitalization_only_change_is_unchanged(self):
        result = compute_diff("<p>hello world</p>", "<p>Hello World</p>")
        assert _pairs(result.original_segments) == [("hello world", DiffKind.UNCHANGED)]
        assert _pairs(result.corrected_segments) == [("Hello World", DiffKind.UNCHANGED)]
        assert not result.has_changes

    def test_both_empty(self):
        result = compute_diff("", "")
        assert result == DiffResult()
        assert result.to_dict() == {"originalSegments": [], "correctedSegments": []}

    def test_markup_without_text_counts_as_empty(self):
        result = compute_diff("<p></p>", "<div><br></div>")
        assert result.original_segments == ()

    def test_empty_original(self):
        result = compute_diff("", "<p>Brand new text</p>")
        assert result.original_segments == ()
        assert _pairs(result.corrected_segments) == [("Brand new text", DiffKind.ADDED)]

    def test_empty_corrected(self):
        result = compute_diff("<p>Gone now</p>", "")
        assert _pairs(result.original_segments) == [("Gone now", DiffKind.REMOVED)]
        assert result.corrected_segments == ()

    def test_sides_are_lossless(self):
        original = "<p>The  quick brown fox</p><p>jumps over</p>"
        corrected = "<p>A quick red fox</p><p>leaps over it</p>"
        result = compute_diff(original, corrected)

        assert result.original_text() == Document(original).text
        assert result.corrected_text() == Document(corrected).text

    def test_sides_only_carry_their_kinds(self):
        result = compute_diff("<p>one two three</p>", "<p>one 2 three four</p>")
        assert {s.kind for s in result.original_segments} <= {DiffKind.UNCHANGED, DiffKind.REMOVED}
        assert {s.kind for s in result.corrected_segments} <= {DiffKind.UNCHANGED, DiffKind.ADDED}

    def test_no_adjacent_segments_share_a_kind(self):
        result = compute_diff("<p>a b c d e</p>", "<p>a x y d z</p>")
        for side in (result.original_segments, result.corrected_segments):
            kinds = [s.kind for s in side]
            assert all(k1 != k2 for k1, k2 in zip(kinds, kinds[1:]))

    def test_tie_break_prefers_corrected_side(self):
        # "x y" vs "y x" has several alignments of equal length; the
        # corrected side is consumed first while walking back.
        result = compute_diff("x y", "y x")
        assert _pairs(result.original_segments) == [
            ("x ", DiffKind.REMOVED),
            ("y", DiffKind.UNCHANGED),
        ]
        assert _pairs(result.corrected_segments) == [
            ("y", DiffKind.UNCHANGED),
            (" x", DiffKind.ADDED),
        ]

    def test_trailing_space_is_not_a_change(self):
        result = compute_diff("<p>Hello </p>", "<p>Hello</p>")
        assert _pairs(result.original_segments) == [("Hello", DiffKind.UNCHANGED)]
        assert _pairs(result.corrected_segments) == [("Hello", DiffKind.UNCHANGED)]
        assert not result.has_changes

    def test_block_boundaries_are_newlines(self):
        result = compute_diff("<p>one</p><p>two</p>", "<p>one</p><p>two</p>")
        assert result.original_text() == "one\ntwo"

    def test_accepts_documents(self):
        original = Document.from_html("<b>cat</b>")
        result = compute_diff(original, Document.from_html("<i>cats</i>"))
        assert _pairs(result.original_segments) == [("cat", DiffKind.REMOVED)]
        assert _pairs(result.corrected_segments) == [("cats", DiffKind.ADDED)]

    def test_to_dict_wire_shape(self, cats_original_html, cats_rewritten_html):
        payload = compute_diff(cats_original_html, cats_rewritten_html).to_dict()
        assert payload["originalSegments"][0] == {"text": "Their", "type": "removed"}
        assert payload["correctedSegments"][0] == {"text": "There", "type": "added"}

    @pytest.mark.parametrize("text", ["single", "two words", "a\nb c"])
    def test_identical_documents_have_no_changes(self, text):
        result = compute_diff(text, text)
        assert not result.has_changes
        assert len(result.original_segments) == 1
