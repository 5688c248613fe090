"""
Text Compare Module - Side-by-side diff and inline correction highlighting.

This module is self-contained and has no knowledge of the language model that
produced the rewrite. It provides:

1. **Diff Engine**: word-level, case-insensitive comparison of two HTML
   documents, returned as merged unchanged/added/removed segments
2. **Highlight Engine**: decoration of the rewritten HTML with marker spans
   for each correction, placed once each and never overlapping

Usage:
    from text_compare import compute_diff, highlight_corrections_in_html

    diff = compute_diff(original_html, rewritten_html)
    payload = diff.to_dict()

    highlighted = highlight_corrections_in_html(rewritten_html, corrections)
"""

from .models import (
    CorrectionMatch,
    CorrectionRecord,
    CorrectionType,
    DiffKind,
    DiffResult,
    DiffSegment,
    IndexedCorrection,
)
from .markup import (
    Document,
    collect_text_leaves,
    extract_plain_text,
    extract_text,
    parse_markup,
)
from .diff import (
    backtrack_lcs,
    compute_diff,
    compute_lcs_table,
    merge_segments,
    tokenize,
)
from .highlight import (
    correction_badge_classes,
    correction_type_classes,
    eligible_corrections,
    find_literal,
    find_matches,
    highlight_corrections,
    highlight_corrections_in_html,
)

__all__ = [
    # Models
    "CorrectionMatch",
    "CorrectionRecord",
    "CorrectionType",
    "DiffKind",
    "DiffResult",
    "DiffSegment",
    "IndexedCorrection",
    # Markup
    "Document",
    "collect_text_leaves",
    "extract_plain_text",
    "extract_text",
    "parse_markup",
    # Diff engine
    "backtrack_lcs",
    "compute_diff",
    "compute_lcs_table",
    "merge_segments",
    "tokenize",
    # Highlight engine
    "correction_badge_classes",
    "correction_type_classes",
    "eligible_corrections",
    "find_literal",
    "find_matches",
    "highlight_corrections",
    "highlight_corrections_in_html",
]

__version__ = "1.0.0"
