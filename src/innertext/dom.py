"""
DOM - read-only tree view consumed by innertext

The core only needs a small capability set from a tree: node type, tag name,
text data, and parent/sibling/children navigation. Any host tree exposing
these attributes (see TreeNode and TreeElement) can be passed in
directly. Element and Text below are the reference implementation used by
the adapters and tests.

Key invariant: the core never mutates a tree. Parent links are maintained
here, at construction time, not during extraction.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, Union

ELEMENT_NODE = 1
TEXT_NODE = 3


class TreeNode(Protocol):
    """Capability set the core reads from a node."""

    @property
    def node_type(self) -> int: ...

    @property
    def parent(self) -> TreeElement | None: ...

    @property
    def previous_sibling(self) -> TreeNode | None: ...

    @property
    def next_sibling(self) -> TreeNode | None: ...

    @property
    def children(self) -> Sequence[TreeNode]: ...

    @property
    def text_content(self) -> str: ...


class TreeElement(TreeNode, Protocol):
    """A TreeNode with node_type ELEMENT_NODE and a lower-case tag name."""

    @property
    def local_name(self) -> str: ...


class _Sibling:
    """
    Sibling navigation derived from the parent's child list.

    Parents record each child's position on adoption, so lookups are O(1).
    A list edited behind the parent's back falls back to a scan.
    """

    parent: Element | None
    _index: int = -1

    def _offset(self, step: int) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        i = self._index
        if not (0 <= i < len(siblings) and siblings[i] is self):
            i = next((k for k, child in enumerate(siblings) if child is self), -1)
            if i < 0:
                return None
        j = i + step
        return siblings[j] if 0 <= j < len(siblings) else None

    @property
    def previous_sibling(self) -> Node | None:
        return self._offset(-1)

    @property
    def next_sibling(self) -> Node | None:
        return self._offset(1)


@dataclass(eq=False)
class Text(_Sibling):
    """A run of character data. Has no children."""
    data: str
    parent: Element | None = field(default=None, repr=False)

    node_type = TEXT_NODE

    @property
    def children(self) -> list[Node]:
        return []

    @property
    def text_content(self) -> str:
        return self.data


@dataclass(eq=False)
class Element(_Sibling):
    """An element with a lower-case tag name, attributes and children."""
    local_name: str
    children: list[Node] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    parent: Element | None = field(default=None, repr=False)

    node_type = ELEMENT_NODE

    def __post_init__(self):
        for i, child in enumerate(self.children):
            child.parent = self
            child._index = i

    def append_child(self, child: Node) -> Node:
        """Append a child node, adopt it, and return it for chaining."""
        child.parent = self
        child._index = len(self.children)
        self.children.append(child)
        return child

    def depth_first(self) -> Iterator[Node]:
        """Traverse the subtree depth-first, yielding self then descendants."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.depth_first()
            else:
                yield child

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    @property
    def text_content(self) -> str:
        return "".join(node.data for node in self.depth_first() if isinstance(node, Text))


Node = Union[Element, Text]


@dataclass(frozen=True)
class ComputedStyle:
    """The part of an element's computed style that text extraction reads."""
    display: str = "inline"
    white_space: str = "normal"


def is_element(node: object) -> bool:
    return getattr(node, "node_type", None) == ELEMENT_NODE


def is_text(node: object) -> bool:
    return getattr(node, "node_type", None) == TEXT_NODE


def is_element_of(node: object, local_name: str) -> bool:
    """True if node is an element with the given tag name."""
    return is_element(node) and node.local_name == local_name  # type: ignore[attr-defined]
