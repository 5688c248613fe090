"""
Text Compare Highlight - Inline decoration of corrections inside rewritten HTML.

Each eligible correction's replacement text is wrapped in a marker ``<span>``
that carries the correction's category, original fragment, explanation and
its index in the caller's list. Text leaves are processed one at a time in
document order, so the surrounding markup is never re-parsed or broken.

Placement rules:
- A correction is placed at most once, at the first occurrence (document
  order, case-insensitive, literal) of its replacement text
- Corrections are tried in list order within a leaf; an occurrence that
  overlaps a span already claimed in that leaf is skipped in favour of the
  next occurrence
- Markers never overlap
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Set, Union

from bs4 import BeautifulSoup, NavigableString

from .markup import Document, collect_text_leaves
from .models import CorrectionMatch, CorrectionRecord, CorrectionType, IndexedCorrection

logger = logging.getLogger(__name__)

CorrectionLike = Union[CorrectionRecord, Mapping[str, Any]]

# Attribute names read by the hover/click handlers of the result view
ATTR_INDEX = "data-correction-index"
ATTR_TYPE = "data-correction-type"
ATTR_ORIGINAL = "data-original"
ATTR_EXPLANATION = "data-explanation"

BASE_HIGHLIGHT_CLASSES = (
    "correction-highlight cursor-pointer transition-all duration-200 rounded-sm px-0.5 -mx-0.5"
)

_HIGHLIGHT_CLASSES = {
    CorrectionType.SPELLING.value: (
        "bg-guardsman-500/15 decoration-wavy decoration-guardsman-500 underline underline-offset-4"
    ),
    CorrectionType.GRAMMAR.value: "bg-royal-500/15 border-b-2 border-royal-500",
    CorrectionType.TONE.value: "bg-amber-500/15 border-b-2 border-dashed border-amber-500",
    CorrectionType.PUNCTUATION.value: "bg-emerald-500/15 border-b-2 border-dotted border-emerald-600",
}

_BADGE_CLASSES = {
    CorrectionType.SPELLING.value: "bg-guardsman-100 text-guardsman-700",
    CorrectionType.GRAMMAR.value: "bg-royal-100 text-royal-700",
    CorrectionType.TONE.value: "bg-amber-100 text-amber-700",
    CorrectionType.PUNCTUATION.value: "bg-emerald-100 text-emerald-700",
}

NEUTRAL_BADGE_CLASSES = "bg-gray-100 text-gray-700"


def correction_type_classes(correction_type: str) -> str:
    """CSS classes for a marker of the given category."""
    extra = _HIGHLIGHT_CLASSES.get(correction_type)
    return f"{BASE_HIGHLIGHT_CLASSES} {extra}" if extra else BASE_HIGHLIGHT_CLASSES


def correction_badge_classes(correction_type: str) -> str:
    """CSS classes for the category badge shown in tooltips and the legend."""
    return _BADGE_CLASSES.get(correction_type, NEUTRAL_BADGE_CLASSES)


def eligible_corrections(corrections: Optional[Iterable[CorrectionLike]]) -> List[IndexedCorrection]:
    """
    Keep the corrections that can be highlighted, in their original order.

    Each kept correction remembers its index in the input list, not in the
    filtered one. Entries that are malformed, have blank replacement text or
    an unknown category are dropped.
    """
    indexed: List[IndexedCorrection] = []
    for index, item in enumerate(corrections or ()):
        record = item if isinstance(item, CorrectionRecord) else CorrectionRecord.from_dict(item)
        if record is None or not record.is_eligible:
            logger.debug("Skipping ineligible correction #%d", index)
            continue
        indexed.append(IndexedCorrection(index=index, record=record))
    return indexed


def find_literal(text: str, needle: str, start: int = 0) -> int:
    """
    Case-insensitive literal search.

    Returns the offset of the first occurrence of needle in text at or after
    start, or -1. Characters are never interpreted as pattern syntax.
    """
    if not needle:
        return -1

    folded_text = text.lower()
    folded_needle = needle.lower()
    if len(folded_text) == len(text) and len(folded_needle) == len(needle):
        return folded_text.find(folded_needle, start)

    # Lowercasing changed some lengths, so offsets must be checked on the original text
    width = len(needle)
    for pos in range(start, len(text) - width + 1):
        if text[pos:pos + width].lower() == folded_needle:
            return pos
    return -1


def find_matches(text: str, corrections: Iterable[IndexedCorrection]) -> List[CorrectionMatch]:
    """
    Locate at most one occurrence per correction in a single text leaf.

    Corrections are tried in priority order. An occurrence overlapping one
    already claimed in this leaf is skipped and the search moves on to the
    next occurrence of the same text.

    Returns:
        Matches sorted by start offset
    """
    matches: List[CorrectionMatch] = []

    for correction in corrections:
        needle = correction.record.replacement_fragment
        pos = find_literal(text, needle)
        while pos != -1:
            end = pos + len(needle)
            if not any(match.overlaps(pos, end) for match in matches):
                matches.append(CorrectionMatch(start=pos, end=end, correction=correction))
                break
            pos = find_literal(text, needle, pos + 1)

    matches.sort(key=lambda match: match.start)
    return matches


def _build_marker(soup: BeautifulSoup, text: str, correction: IndexedCorrection):
    record = correction.record
    return soup.new_tag(
        "span",
        attrs={
            "class": correction_type_classes(record.category),
            ATTR_INDEX: str(correction.index),
            ATTR_TYPE: record.category,
            ATTR_ORIGINAL: record.original_fragment,
            ATTR_EXPLANATION: record.explanation,
        },
        string=text,
    )


def _split_leaf(soup: BeautifulSoup, text: str, matches: List[CorrectionMatch]) -> list:
    nodes = []
    last = 0
    for match in matches:
        if match.start > last:
            nodes.append(NavigableString(text[last:match.start]))
        nodes.append(_build_marker(soup, text[match.start:match.end], match.correction))
        last = match.end
    if last < len(text):
        nodes.append(NavigableString(text[last:]))
    return nodes


def highlight_corrections(
    document: Union[Document, str],
    corrections: Optional[Iterable[CorrectionLike]],
) -> Document:
    """
    Wrap each correction's replacement text in a marker span.

    Args:
        document: The rewritten document (Document or HTML string)
        corrections: Corrections in priority order (records or raw JSON dicts)

    Returns:
        A new Document with markers inserted. The input document is returned
        as-is when nothing could be placed.
    """
    document = Document.coerce(document)
    if document.is_empty:
        return document

    indexed = eligible_corrections(corrections)
    if not indexed:
        return document

    soup = document.tree()
    consumed: Set[int] = set()

    for leaf in collect_text_leaves(soup):
        text = str(leaf)
        if not text.strip():
            continue

        available = [c for c in indexed if c.index not in consumed]
        if not available:
            break

        matches = find_matches(text, available)
        if not matches:
            continue

        leaf.replace_with(*_split_leaf(soup, text, matches))
        consumed.update(match.correction.index for match in matches)

    logger.debug("Placed %d of %d eligible corrections", len(consumed), len(indexed))

    if not consumed:
        return document
    return Document.from_tree(soup)


def highlight_corrections_in_html(html: str, corrections: Optional[Iterable[CorrectionLike]]) -> str:
    """String-in, string-out variant of highlight_corrections."""
    if not html:
        return ""
    return highlight_corrections(Document(html), corrections).html
