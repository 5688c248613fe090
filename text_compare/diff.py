"""
Text Compare Diff - Word-level comparison of an original and a rewritten document.

Both documents are reduced to their plain-text projections, split into word
and whitespace tokens, and aligned with a longest-common-subsequence table.
Token equality ignores letter case, so a capitalization-only fix shows up as
unchanged text.

Usage:
    from text_compare import compute_diff

    result = compute_diff("<p>Their are to many cats.</p>", "<p>There are too many cats.</p>")
    result.original_segments   # Their(removed) are(unchanged) to(removed) ...
    result.corrected_segments  # There(added) are(unchanged) too(added) ...
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence, Tuple, Union

from .markup import Document
from .models import DiffKind, DiffResult, DiffSegment

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"(\s+)")

DocumentLike = Union[Document, str]


def tokenize(text: str) -> List[str]:
    """
    Split text into word and whitespace tokens.

    Whitespace runs are kept as tokens so that joining the result gives back
    the input exactly.
    """
    return [token for token in _TOKEN_SPLIT.split(text) if token]


def compute_lcs_table(a: Sequence[str], b: Sequence[str]) -> List[List[int]]:
    """
    Build the LCS length table for two token sequences (case-insensitive).

    ``table[i][j]`` is the LCS length of ``a[:i]`` and ``b[:j]``.
    """
    folded_a = [token.lower() for token in a]
    folded_b = [token.lower() for token in b]
    m, n = len(a), len(b)
    table = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        row, prev_row = table[i], table[i - 1]
        token_a = folded_a[i - 1]
        for j in range(1, n + 1):
            if token_a == folded_b[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])

    return table


def backtrack_lcs(
    table: List[List[int]],
    a: Sequence[str],
    b: Sequence[str],
) -> Tuple[List[DiffSegment], List[DiffSegment]]:
    """
    Recover token-level segments for both sides from an LCS table.

    Walks back from the bottom-right cell. Equal tokens are emitted as
    unchanged on both sides; otherwise the corrected side is consumed first
    (added) whenever the table allows it, and the original side (removed)
    only when it does not.
    """
    result_a: List[DiffSegment] = []
    result_b: List[DiffSegment] = []
    i, j = len(a), len(b)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and a[i - 1].lower() == b[j - 1].lower():
            result_a.append(DiffSegment(a[i - 1], DiffKind.UNCHANGED))
            result_b.append(DiffSegment(b[j - 1], DiffKind.UNCHANGED))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            result_b.append(DiffSegment(b[j - 1], DiffKind.ADDED))
            j -= 1
        else:
            result_a.append(DiffSegment(a[i - 1], DiffKind.REMOVED))
            i -= 1

    result_a.reverse()
    result_b.reverse()
    return result_a, result_b


def merge_segments(segments: Sequence[DiffSegment]) -> List[DiffSegment]:
    """Merge consecutive segments of the same kind into one."""
    merged: List[DiffSegment] = []
    for segment in segments:
        if merged and merged[-1].kind == segment.kind:
            merged[-1] = DiffSegment(merged[-1].text + segment.text, segment.kind)
        else:
            merged.append(segment)
    return merged


def compute_diff(original: DocumentLike, corrected: DocumentLike) -> DiffResult:
    """
    Compute the word-level diff between two documents.

    Args:
        original: The user's document (Document or HTML string)
        corrected: The rewritten document (Document or HTML string)

    Returns:
        DiffResult whose original side holds unchanged/removed segments and
        whose corrected side holds unchanged/added segments. Joining a side's
        segment texts reproduces that side's plain text.
    """
    original_text = Document.coerce(original).text
    corrected_text = Document.coerce(corrected).text

    original_tokens = tokenize(original_text)
    corrected_tokens = tokenize(corrected_text)

    if not original_tokens and not corrected_tokens:
        return DiffResult()

    if not original_tokens:
        return DiffResult(corrected_segments=(DiffSegment(corrected_text, DiffKind.ADDED),))

    if not corrected_tokens:
        return DiffResult(original_segments=(DiffSegment(original_text, DiffKind.REMOVED),))

    logger.debug(
        "Diffing %d original tokens against %d corrected tokens",
        len(original_tokens),
        len(corrected_tokens),
    )
    table = compute_lcs_table(original_tokens, corrected_tokens)
    original_segments, corrected_segments = backtrack_lcs(table, original_tokens, corrected_tokens)

    return DiffResult(
        original_segments=tuple(merge_segments(original_segments)),
        corrected_segments=tuple(merge_segments(corrected_segments)),
    )
