"""
Tree collection.

Walks a subtree bottom-up and turns every node into a flat list of items:
text fragments (str) and break markers (int). Markers are weights, not
newlines; normalize() collapses adjacent ones.
"""

from __future__ import annotations

import re

from .children import selected_children
from .display import DisplayClassifier
from .dom import TreeElement, TreeNode, is_element, is_element_of, is_text

Item = str | int

BLOCK_BREAK = 1
PARAGRAPH_BREAK = 2

# Content of these never renders as text
NON_RENDERED_TAGS = frozenset({"audio", "input", "noscript", "script", "style", "textarea", "video"})

# CSS document white space; U+00A0 and friends are not collapsible
COLLAPSIBLE_SPACE = re.compile(r"[ \t\n\r\f]+")


class Collector:
    """
    Produces the item sequence for a node and its selected descendants.

    The last row of each table and the last cell of each row are looked up
    once per collect() call and remembered by node identity, so wide and
    long tables stay linear.
    """

    def __init__(self, classifier: DisplayClassifier | None = None):
        self.classifier = classifier or DisplayClassifier()
        self._last_rows: dict[int, TreeElement | None] = {}
        self._last_cells: dict[int, TreeElement | None] = {}

    def collect(self, node: TreeNode) -> list[Item]:
        self._last_rows = {}
        self._last_cells = {}
        return self._collect(node)

    def _collect(self, node: TreeNode) -> list[Item]:
        if is_element(node) and self._renders_nothing(node):
            return []

        items: list[Item] = []
        for child in selected_children(node):
            items.extend(self._collect(child))

        if is_text(node):
            items.append(self._text_item(node))
        elif is_element(node):
            items = self._element_items(node, items)
        return items

    def _renders_nothing(self, element: TreeElement) -> bool:
        """Non-rendered tags and display: none elements contribute no text."""
        return element.local_name in NON_RENDERED_TAGS or self.classifier.is_hidden(element)

    # --- text ---

    def _text_item(self, node: TreeNode) -> str:
        text = node.text_content
        parent = node.parent
        if is_element(parent) and self.classifier.preserves_whitespace(parent):
            return text

        text = COLLAPSIBLE_SPACE.sub(" ", text)
        if text.startswith(" "):
            before = self.previous_visual_text(node)
            if before is None or COLLAPSIBLE_SPACE.match(before[-1]):
                text = text[1:]
        if text.endswith(" "):
            if is_element_of(node.next_sibling, "br") or self.next_visual_text(node) is None:
                text = text[:-1]
        return text

    def previous_visual_text(self, node: TreeNode) -> str | None:
        """
        Nearest non-empty text rendered before node on the same line.

        Returns None when a line boundary (block, br, table part) comes
        first or the tree runs out.
        """
        return self._visual_text(node, backward=True)

    def next_visual_text(self, node: TreeNode) -> str | None:
        """Nearest non-blank text rendered after node on the same line."""
        return self._visual_text(node, backward=False)

    def _visual_text(self, node: TreeNode, backward: bool) -> str | None:
        current = node
        while current is not None:
            sibling = current.previous_sibling if backward else current.next_sibling
            while sibling is not None:
                found = self._edge_text(sibling, backward)
                if found is None or found:
                    return found
                sibling = sibling.previous_sibling if backward else sibling.next_sibling
            parent = current.parent
            if not is_element(parent) or not self.classifier.is_inline_level(parent):
                return None
            current = parent
        return None

    def _edge_text(self, node: TreeNode, backward: bool) -> str | None:
        """
        Text at the near edge of node: "" if node renders no text, None if
        node is a line boundary.
        """
        if is_text(node):
            text = node.text_content
            # trailing-space decisions ignore text that collapses away
            if not backward and not COLLAPSIBLE_SPACE.sub("", text):
                return ""
            return text
        if not is_element(node) or self._renders_nothing(node):
            return ""
        if node.local_name == "br" or not self.classifier.is_inline_level(node):
            return None
        children = selected_children(node)
        for child in reversed(children) if backward else children:
            found = self._edge_text(child, backward)
            if found is None or found:
                return found
        return ""

    # --- elements ---

    def _element_items(self, node: TreeElement, items: list[Item]) -> list[Item]:
        name = node.local_name
        if name == "br":
            items.append("\n")
            return items
        if name == "p":
            return [PARAGRAPH_BREAK, *items, PARAGRAPH_BREAK]

        display = self.classifier.display(node)
        if display == "table-cell":
            if not self._is_last_cell(node):
                items.append("\t")
            return items
        if display == "table-row":
            if not self._is_last_row(node):
                items.append("\n")
            return items
        if display == "table-caption" or self.classifier.is_block_level(node):
            return [BLOCK_BREAK, *items, BLOCK_BREAK]
        return items

    def _is_last_cell(self, cell: TreeElement) -> bool:
        row = cell.parent
        if not is_element(row) or self.classifier.display(row) != "table-row":
            return True
        key = id(row)
        if key not in self._last_cells:
            cells = [c for c in row.children if is_element(c) and self.classifier.display(c) == "table-cell"]
            self._last_cells[key] = cells[-1] if cells else None
        last = self._last_cells[key]
        return last is None or last is cell

    def _is_last_row(self, row: TreeElement) -> bool:
        table = row.parent
        while is_element(table) and self.classifier.display(table) != "table":
            table = table.parent
        if not is_element(table):
            return True
        key = id(table)
        if key not in self._last_rows:
            rows = self.table_rows(table)
            self._last_rows[key] = rows[-1] if rows else None
        last = self._last_rows[key]
        return last is None or last is row

    def table_rows(self, table: TreeElement) -> list[TreeElement]:
        """Rows of a table in document order, looking one level into row groups."""
        rows: list[TreeElement] = []
        for child in table.children:
            if not is_element(child):
                continue
            if self.classifier.is_table_row_group(child):
                rows.extend(
                    c for c in child.children
                    if is_element(c) and self.classifier.display(c) == "table-row"
                )
            elif self.classifier.display(child) == "table-row":
                rows.append(child)
        return rows
