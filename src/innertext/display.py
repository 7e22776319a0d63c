"""
Display classification.

Maps an element to a CSS display keyword, either from a table modelling the
default browser stylesheet or by asking a caller-supplied style resolver.
The block/inline predicates built on top decide where break markers go and
where whitespace collapsing stops looking for neighbouring text.
"""

from __future__ import annotations

from collections.abc import Callable

from .dom import ComputedStyle, TreeElement, is_element_of

StyleResolver = Callable[[TreeElement], ComputedStyle]

# Block-level by default (MDN, Block-level elements)
BLOCK_ELEMENTS = frozenset({
    "address",
    "article",
    "aside",
    "blockquote",
    "details",
    "dialog",
    "dd",
    "div",
    "dl",
    "dt",
    "fieldset",
    "figcaption",
    "figure",
    "footer",
    "form",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "hgroup",
    "hr",
    "li",
    "main",
    "nav",
    "ol",
    "p",
    "pre",
    "section",
    "ul",
    # block-level only for text extraction
    "optgroup",
    "option",
})

# Treated as block-level whatever the resolver reports
FORCED_BLOCK_ELEMENTS = frozenset({"optgroup", "option"})

# https://drafts.csswg.org/css-tables-3/#mapping
# https://drafts.csswg.org/css-ruby-1/#default-ua-ruby
DEFAULT_DISPLAYS: dict[str, str] = {
    "table": "table",
    "thead": "table-header-group",
    "tbody": "table-row-group",
    "tfoot": "table-footer-group",
    "tr": "table-row",
    "td": "table-cell",
    "th": "table-cell",
    "colgroup": "table-column-group",
    "col": "table-column",
    "caption": "table-caption",
    "ruby": "ruby",
    "rp": "none",
    "rbc": "ruby-base-container",
    "rtc": "ruby-text-container",
    "rb": "ruby-base",
    "rt": "ruby-text",
}

BLOCK_LEVEL_DISPLAYS = frozenset({"block", "flow-root", "list-item", "flex", "grid", "table"})

INLINE_LEVEL_DISPLAYS = frozenset({
    "inline",
    "inline-block",
    "run-in",
    "inline-list-item",
    "inline list-item",
    "inline-flex",
    "inline-grid",
    "ruby",
    "inline-table",
})

TABLE_ROW_GROUP_DISPLAYS = frozenset({
    "table-header-group",
    "table-row-group",
    "table-footer-group",
})

# white-space values that keep spaces and newlines as authored
PRESERVED_WHITE_SPACE = frozenset({"pre", "pre-wrap", "break-spaces"})


def default_display(local_name: str) -> str:
    """Display keyword the default stylesheet gives a tag."""
    if local_name in BLOCK_ELEMENTS:
        return "block"
    return DEFAULT_DISPLAYS.get(local_name, "inline")


def default_white_space(element: TreeElement) -> str:
    """'pre' inside a pre element, 'normal' elsewhere (the property inherits)."""
    node = element
    while node is not None:
        if is_element_of(node, "pre"):
            return "pre"
        node = node.parent
    return "normal"


class DisplayClassifier:
    """
    Answers display questions about elements.

    With a style resolver, its answers are authoritative and the built-in
    table is never consulted. The resolver is called on every query; caching
    is the resolver's business.
    """

    def __init__(self, style_resolver: StyleResolver | None = None):
        self.style_resolver = style_resolver

    @property
    def uses_resolver(self) -> bool:
        return self.style_resolver is not None

    def display(self, element: TreeElement) -> str:
        if self.style_resolver is not None:
            return self.style_resolver(element).display
        return default_display(element.local_name)

    def white_space(self, element: TreeElement) -> str:
        if self.style_resolver is not None:
            return self.style_resolver(element).white_space
        return default_white_space(element)

    def preserves_whitespace(self, element: TreeElement) -> bool:
        return self.white_space(element) in PRESERVED_WHITE_SPACE

    def is_block_level(self, element: TreeElement) -> bool:
        if element.local_name in FORCED_BLOCK_ELEMENTS:
            return True
        return self.display(element) in BLOCK_LEVEL_DISPLAYS

    def is_inline_level(self, element: TreeElement) -> bool:
        if element.local_name in FORCED_BLOCK_ELEMENTS:
            return False
        return self.display(element) in INLINE_LEVEL_DISPLAYS

    def is_table_row_group(self, element: TreeElement) -> bool:
        return self.display(element) in TABLE_ROW_GROUP_DISPLAYS

    def is_hidden(self, element: TreeElement) -> bool:
        """True for display: none. Such an element and its subtree render nothing."""
        return self.display(element) == "none"
