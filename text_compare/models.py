"""
Text Compare Models - Data structures shared by the diff and highlight engines.

Core Types:
- DiffKind: Classification of a diff segment (unchanged, added, removed)
- DiffSegment: A run of text with its classification
- DiffResult: Both sides of a word-level comparison
- CorrectionType: Known correction categories (spelling, grammar, tone, punctuation)
- CorrectionRecord: One correction suggested by the language model
- IndexedCorrection: An eligible correction tagged with its position in the caller's list
- CorrectionMatch: A located occurrence of a correction inside one text leaf

This module is designed to be self-contained for use as a standalone package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class DiffKind(str, Enum):
    """Classification of a diff segment."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


class CorrectionType(str, Enum):
    """Correction categories reported by the language model."""

    SPELLING = "spelling"
    GRAMMAR = "grammar"
    TONE = "tone"
    PUNCTUATION = "punctuation"

    @classmethod
    def is_known(cls, value: Any) -> bool:
        """Check whether a raw category string is one of the known categories."""
        return isinstance(value, str) and value in _KNOWN_CORRECTION_TYPES


_KNOWN_CORRECTION_TYPES = frozenset(t.value for t in CorrectionType)


@dataclass(frozen=True)
class DiffSegment:
    """A run of text and how it differs between the two documents."""

    text: str
    kind: DiffKind

    def to_dict(self) -> Dict[str, str]:
        # "type" is the field name consumed by the rendering layer
        return {"text": self.text, "type": self.kind.value}


@dataclass(frozen=True)
class DiffResult:
    """
    Word-level comparison of an original and a corrected document.

    Attributes:
        original_segments: Segments of the original side (unchanged/removed)
        corrected_segments: Segments of the corrected side (unchanged/added)
    """

    original_segments: Tuple[DiffSegment, ...] = ()
    corrected_segments: Tuple[DiffSegment, ...] = ()

    @property
    def removed_count(self) -> int:
        return sum(1 for s in self.original_segments if s.kind == DiffKind.REMOVED)

    @property
    def added_count(self) -> int:
        return sum(1 for s in self.corrected_segments if s.kind == DiffKind.ADDED)

    @property
    def has_changes(self) -> bool:
        return bool(self.removed_count or self.added_count)

    def original_text(self) -> str:
        return "".join(s.text for s in self.original_segments)

    def corrected_text(self) -> str:
        return "".join(s.text for s in self.corrected_segments)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            "originalSegments": [s.to_dict() for s in self.original_segments],
            "correctedSegments": [s.to_dict() for s in self.corrected_segments],
        }


@dataclass(frozen=True)
class CorrectionRecord:
    """
    A single correction suggested by the language model.

    The wire shape is ``{original, correction, explanation, type, examples}``;
    use ``from_dict`` to read it. ``category`` is kept as a raw string so that
    unknown categories can be reported as ineligible instead of failing.

    Attributes:
        original_fragment: Text as it appeared in the user's document
        replacement_fragment: Text as it appears in the rewritten document
        explanation: Why the change was made
        category: One of the CorrectionType values (unvalidated)
        usage_examples: Short sentences showing correct usage
    """

    original_fragment: str
    replacement_fragment: str
    explanation: str = ""
    category: str = ""
    usage_examples: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_eligible(self) -> bool:
        """A record can be highlighted only with replacement text and a known category."""
        return bool(self.replacement_fragment.strip()) and CorrectionType.is_known(self.category)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional["CorrectionRecord"]:
        """
        Build a record from the model's JSON shape.

        Returns None when the entry is not a mapping or its text fields are
        not strings; callers treat that as an ineligible correction.
        """
        if not isinstance(data, Mapping):
            return None

        original = data.get("original", "")
        correction = data.get("correction", "")
        explanation = data.get("explanation", "")
        category = data.get("type", "")
        if not all(isinstance(v, str) for v in (original, correction, explanation, category)):
            return None

        examples = data.get("examples") or ()
        if not isinstance(examples, (list, tuple)):
            examples = ()

        return cls(
            original_fragment=original,
            replacement_fragment=correction,
            explanation=explanation,
            category=category,
            usage_examples=tuple(e for e in examples if isinstance(e, str)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original_fragment,
            "correction": self.replacement_fragment,
            "explanation": self.explanation,
            "type": self.category,
            "examples": list(self.usage_examples),
        }


@dataclass(frozen=True)
class IndexedCorrection:
    """An eligible correction and its index in the caller's original list."""

    index: int
    record: CorrectionRecord


@dataclass(frozen=True)
class CorrectionMatch:
    """Occurrence of a correction's replacement text within one text leaf."""

    start: int
    end: int
    correction: IndexedCorrection

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end
