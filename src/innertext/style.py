"""
Inline-style resolver.

A style resolver for trees that have no layout engine behind them. It honours
`display` and `white-space` declared in an element's style attribute and
falls back to the default stylesheet otherwise.
Pass an instance as `style_resolver` to inner_text().
"""

from __future__ import annotations

import logging

from .display import default_display
from .dom import ComputedStyle, TreeElement, is_element, is_element_of

logger = logging.getLogger(__name__)


def parse_declarations(style: str | None) -> dict[str, str]:
    """
    Parse a style attribute into {property: value}.

    Property names are lower-cased, values are stripped of `!important`.
    Declarations without a colon or with an empty name are skipped; later
    declarations win.
    """
    declarations: dict[str, str] = {}
    if not style:
        return declarations
    for chunk in style.split(";"):
        name, sep, value = chunk.partition(":")
        name = name.strip().lower()
        if not sep or not name:
            if chunk.strip():
                logger.debug("ignoring malformed declaration %r", chunk)
            continue
        value = value.strip()
        if value.lower().endswith("!important"):
            value = value[: -len("!important")].strip()
        declarations[name] = value.lower()
    return declarations


class InlineStyleResolver:
    """Computes display and white-space from style attributes."""

    def __call__(self, element: TreeElement) -> ComputedStyle:
        return ComputedStyle(display=self.display(element), white_space=self.white_space(element))

    def display(self, element: TreeElement) -> str:
        declared = self._declarations(element).get("display")
        if declared:
            return declared
        return default_display(element.local_name)

    def white_space(self, element: TreeElement) -> str:
        node = element
        while is_element(node):
            declared = self._declarations(node).get("white-space")
            if declared:
                return declared
            if is_element_of(node, "pre"):
                return "pre"
            node = node.parent
        return "normal"

    def _declarations(self, element: TreeElement) -> dict[str, str]:
        return parse_declarations(self._attribute(element, "style"))

    @staticmethod
    def _attribute(element: TreeElement, name: str) -> str | None:
        getter = getattr(element, "get_attribute", None)
        if getter is None:
            return None
        return getter(name)
