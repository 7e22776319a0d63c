"""
BeautifulSoup adapter.

Markup is parsed by BeautifulSoup; this module only converts the resulting
tree into the reference DOM (Element/Text) that inner_text() reads, and picks
the element to extract from.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag
from soupsieve import SelectorSyntaxError

from .dom import Element, Node, Text, is_element

logger = logging.getLogger(__name__)

FRAGMENT_NAME = "#document-fragment"

# NavigableString subclasses that are markup, not character data
_SKIPPED_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)


def _attributes(tag: Tag) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, value in tag.attrs.items():
        # multi-valued attributes (class, rel, ...) come back as lists
        attrs[name] = " ".join(value) if isinstance(value, list) else str(value)
    return attrs


def _convert_children(source: Tag, target: Element, index: dict[int, Element] | None) -> None:
    for child in source.children:
        if isinstance(child, Tag):
            target.append_child(from_soup(child, index))
        elif isinstance(child, _SKIPPED_STRINGS):
            continue
        elif isinstance(child, NavigableString):
            target.append_child(Text(str(child)))


def from_soup(tag: Tag, index: dict[int, Element] | None = None) -> Element:
    """
    Convert a bs4 Tag subtree into an Element tree.

    If index is given, it is filled with id(tag) -> Element for every
    converted tag, so callers can find the counterpart of a bs4 match.
    """
    element = Element(local_name=tag.name.lower(), attributes=_attributes(tag))
    if index is not None:
        index[id(tag)] = element
    _convert_children(tag, element, index)
    return element


def _convert_document(soup: BeautifulSoup, index: dict[int, Element] | None = None) -> Element:
    root = Element(local_name=FRAGMENT_NAME)
    if index is not None:
        index[id(soup)] = root
    _convert_children(soup, root, index)
    return root


def parse_fragment(markup: str, parser: str = "html.parser") -> Element:
    """Parse markup with BeautifulSoup and return a synthetic fragment root."""
    return _convert_document(BeautifulSoup(markup, parser))


def first_element_child(node: Node) -> Element | None:
    for child in node.children:
        if is_element(child):
            return child
    return None


def select_root(markup: str, selector: str | None = None, parser: str = "html.parser") -> Element:
    """
    Parse markup and return the element to extract text from.

    With a CSS selector, its first match; otherwise the first element inside
    <body> (when the parser builds one) or at the top of the fragment. The
    returned element keeps its ancestors, so whitespace and table lookups
    that climb the tree behave as they would in the full document.

    Raises:
        ValueError: nothing to extract from, or the selector is invalid.
        bs4.FeatureNotFound: the parser is not installed.
    """
    soup = BeautifulSoup(markup, parser)
    index: dict[int, Element] = {}
    document = _convert_document(soup, index)

    if selector:
        try:
            match = soup.select_one(selector)
        except SelectorSyntaxError as e:
            raise ValueError(f"Invalid selector {selector!r}: {e}") from e
        if match is None:
            raise ValueError(f"No element matches selector {selector!r}")
        logger.debug("selected <%s> with %r", match.name, selector)
        return index[id(match)]

    container = index[id(soup.body)] if soup.body is not None else document
    root = first_element_child(container)
    if root is None:
        raise ValueError("Input requires a container element")
    return root
