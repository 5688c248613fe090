"""
Text Compare Markup - Parsing, traversal and plain-text projection of HTML documents.

The rich text editor produces serialized HTML fragments. This module wraps
them in an immutable ``Document`` value that can hand out fresh mutable trees
(BeautifulSoup) and a plain-text projection close to what a browser reports
as ``innerText``.
"""

from __future__ import annotations

import re
from typing import List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

# Parser used for every document; tolerant of malformed fragments
HTML_PARSER = "html.parser"

# Elements that start and end on their own line in the text projection
BLOCK_ELEMENTS = frozenset({
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "tr", "ul",
})

# Elements whose text content is never shown to the reader
HIDDEN_ELEMENTS = frozenset({"head", "noscript", "script", "style", "template", "title"})

# Elements that keep their whitespace verbatim
PREFORMATTED_ELEMENTS = frozenset({"pre", "textarea"})

_WHITESPACE_RUN = re.compile(r"\s+")


def parse_markup(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a new mutable tree. Never raises."""
    return BeautifulSoup(html or "", HTML_PARSER)


def is_text_leaf(node) -> bool:
    """
    Check whether a node is a visible text leaf.

    Comments, doctypes, CDATA and the contents of hidden elements such as
    ``<script>`` or ``<style>`` are not text leaves.
    """
    if not isinstance(node, NavigableString) or isinstance(node, PreformattedString):
        return False
    return not any(parent.name in HIDDEN_ELEMENTS for parent in node.parents)


def collect_text_leaves(root: Tag) -> List[NavigableString]:
    """
    Collect every text leaf under root in document order (depth-first, left-to-right).

    The result is a snapshot, so callers may replace leaves while iterating it.
    """
    return [node for node in root.descendants if is_text_leaf(node)]


class _TextProjection:
    """Accumulates text leaves into an innerText-like string."""

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._pending_break = False
        self._collapsible_tail = False

    def _at_line_start(self) -> bool:
        return not self._parts or self._parts[-1].endswith("\n")

    def _newline(self) -> None:
        while self._parts and self._parts[-1].endswith(" "):
            trimmed = self._parts[-1].rstrip(" ")
            if trimmed:
                self._parts[-1] = trimmed
                break
            self._parts.pop()
        self._parts.append("\n")

    def block_boundary(self) -> None:
        if self._parts:
            self._pending_break = True

    def line_break(self) -> None:
        if self._pending_break and not self._at_line_start():
            self._newline()
        self._pending_break = False
        self._newline()

    def text(self, value: str, preformatted: bool) -> None:
        if not preformatted:
            value = _WHITESPACE_RUN.sub(" ", value)
            if self._pending_break or self._at_line_start():
                value = value.lstrip(" ")
        if not value:
            return
        if self._pending_break and not self._at_line_start():
            self._newline()
        self._pending_break = False
        self._parts.append(value)
        self._collapsible_tail = not preformatted

    def result(self) -> str:
        text = "".join(self._parts)
        # Trailing collapsible whitespace at the end of the document is not rendered
        return text.rstrip(" ") if self._collapsible_tail else text


def _project(node: Tag, projection: _TextProjection, preformatted: bool) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            name = child.name
            if name in HIDDEN_ELEMENTS:
                continue
            if name == "br":
                projection.line_break()
                continue
            is_block = name in BLOCK_ELEMENTS
            if is_block:
                projection.block_boundary()
            _project(child, projection, preformatted or name in PREFORMATTED_ELEMENTS)
            if is_block:
                projection.block_boundary()
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            projection.text(str(child), preformatted)


def extract_text(root: Tag) -> str:
    """
    Plain-text projection of a tree, approximating the browser's innerText.

    - Whitespace runs collapse to one space (except inside <pre>/<textarea>)
    - <br> becomes a newline
    - Block elements sit on their own lines, with no doubled or edge newlines
    - Hidden elements and comments contribute nothing
    """
    projection = _TextProjection()
    _project(root, projection, preformatted=False)
    return projection.result()


def extract_plain_text(html: str) -> str:
    """Plain text of an HTML string (used for copy-to-clipboard)."""
    if not html:
        return ""
    return extract_text(parse_markup(html))


class Document:
    """
    Immutable HTML document value.

    ``tree()`` returns a freshly parsed tree on every call; mutating it never
    affects the document. Use ``from_tree`` to wrap a modified tree into a new
    document.

    Example:
        doc = Document.from_html("<p>There are <b>too</b> many cats.</p>")
        doc.text      # "There are too many cats."
        soup = doc.tree()
    """

    __slots__ = ("_html", "_text")

    def __init__(self, html: str = ""):
        self._html = html or ""
        self._text: Optional[str] = None

    @classmethod
    def from_html(cls, html: str) -> "Document":
        return cls(html)

    @classmethod
    def from_tree(cls, tree: Tag) -> "Document":
        return cls(tree.decode())

    @classmethod
    def coerce(cls, value: Union["Document", str, None]) -> "Document":
        """Accept either a Document or a raw HTML string."""
        if isinstance(value, Document):
            return value
        return cls(value or "")

    @property
    def html(self) -> str:
        return self._html

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = extract_text(self.tree()) if self._html else ""
        return self._text

    @property
    def is_empty(self) -> bool:
        return not self._html

    def tree(self) -> BeautifulSoup:
        return parse_markup(self._html)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._html == other._html

    def __hash__(self) -> int:
        return hash(self._html)

    def __str__(self) -> str:
        return self._html

    def __repr__(self) -> str:
        preview = self._html if len(self._html) <= 60 else self._html[:57] + "..."
        return f"Document({preview!r})"
