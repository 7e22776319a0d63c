"""
Child selection.

Form controls draw their own chrome, so inside a select only the listed
options contribute text. Everything else passes its children through.
"""

from __future__ import annotations

from .dom import TreeNode, is_element, is_element_of

# parent tag -> child tags allowed to contribute text
_ALLOWED_CHILDREN: dict[str, frozenset[str]] = {
    "select": frozenset({"optgroup", "option"}),
    "optgroup": frozenset({"option"}),
}


def selected_children(node: TreeNode) -> list[TreeNode]:
    """Children of node that take part in text collection, in document order."""
    if not is_element(node):
        return []
    children = list(node.children)
    allowed = _ALLOWED_CHILDREN.get(node.local_name)
    if allowed is None:
        return children
    return [child for child in children if any(is_element_of(child, name) for name in allowed)]
